from __future__ import annotations

from collections.abc import Iterator, MutableSequence, Sequence
from logging import getLogger
from typing import Any

from ndview.core.common import AxisOrder, ShapeLike, parse_shapelike, product, resolve_order
from ndview.core.selection import (
    Dropped,
    IndexList,
    Span,
    TransformedRange,
    parse_selection,
)
from ndview.core.strides import get_coefficients

logger = getLogger(__name__)

SurvivingRange = Span | IndexList


def drop_dimensions(
    ranges: Sequence[TransformedRange], coefficients: Sequence[int]
) -> tuple[int, tuple[SurvivingRange, ...], tuple[int, ...]]:
    """Fold dropped axes into a scalar offset.

    Returns the offset together with the ranges and coefficients of the surviving axes, in
    their original relative order.
    """
    offset = 0
    reduced_ranges: list[SurvivingRange] = []
    reduced_coefficients: list[int] = []
    for dim_range, coefficient in zip(ranges, coefficients, strict=True):
        if isinstance(dim_range, Dropped):
            offset += coefficient * dim_range.index
        else:
            reduced_ranges.append(dim_range)
            reduced_coefficients.append(coefficient)
    return offset, tuple(reduced_ranges), tuple(reduced_coefficients)


def range_length(dim_range: SurvivingRange) -> int:
    if isinstance(dim_range, Span):
        return dim_range.end - dim_range.start
    if isinstance(dim_range, IndexList):
        return len(dim_range.indices)
    raise TypeError(f"Expected a span or an index list, got {dim_range!r} instead.")


def range_position(dim_range: SurvivingRange, counter: int) -> int:
    """Position along the axis of the ``counter``-th element of a surviving range."""
    if isinstance(dim_range, Span):
        return dim_range.start + counter
    if isinstance(dim_range, IndexList):
        return dim_range.indices[counter]
    raise TypeError(f"Expected a span or an index list, got {dim_range!r} instead.")


def increment_counters(counters: MutableSequence[int], shape: Sequence[int]) -> tuple[int, bool]:
    """Advance ``counters`` in place like an odometer, last axis fastest.

    Returns the lowest axis whose counter changed and whether the counters wrapped around to
    all zeros, which marks the end of a full traversal.
    """
    for axis in range(len(counters) - 1, -1, -1):
        counters[axis] += 1
        if counters[axis] < shape[axis]:
            return axis, False
        counters[axis] = 0
    return 0, True


def map_counters(
    offset: int,
    ranges: Sequence[SurvivingRange],
    coefficients: Sequence[int],
    counters: Sequence[int],
    cumsum: MutableSequence[int],
    valid_from: int,
) -> int:
    """Flat offset for ``counters``.

    ``cumsum[a]`` holds the offset contributed by axes ``0..a``; entries below ``valid_from``
    are reused and the rest are recomputed and stored.
    """
    total = cumsum[valid_from - 1] if valid_from > 0 else offset
    for axis in range(valid_from, len(ranges)):
        total += coefficients[axis] * range_position(ranges[axis], counters[axis])
        cumsum[axis] = total
    return total


class ViewIterator:
    """Enumerate the flat storage offsets selected from an array.

    The selection is resolved against ``shape`` eagerly, so every error is raised by the
    constructor. Offsets are produced in row-major order of the reduced (result) shape, while
    ``order`` decides how the source array's storage is laid out.

    Callers follow a peek-then-step protocol: read :meth:`current_offset`, then call
    :meth:`advance`, until :meth:`advance` reports a completed cycle. Iterating the object does
    exactly that.

    A view is transient state for one traversal. It is not safe to share between threads.

    Parameters
    ----------
    selection : Sequence[Any]
        One selector per axis, see :func:`ndview.core.selection.parse_selector`.
    shape : ShapeLike
        Shape of the array being viewed.
    order : AxisOrder | None
        ``"C"``, ``"F"`` or a permutation of the axes, slowest varying first. Defaults to the
        ``array.order`` configuration value.
    """

    shape: tuple[int, ...]
    size: int
    offset: int
    ranges: tuple[SurvivingRange, ...]
    coefficients: tuple[int, ...]
    counters: list[int]
    order: AxisOrder

    def __init__(
        self, selection: Sequence[Any], shape: ShapeLike, order: AxisOrder | None = None
    ) -> None:
        array_shape = parse_shapelike(shape)
        self.order = resolve_order(order)
        ranges = parse_selection(selection, array_shape)
        coefficients = get_coefficients(array_shape, self.order)
        self.offset, self.ranges, self.coefficients = drop_dimensions(ranges, coefficients)
        self.shape = tuple(range_length(r) for r in self.ranges)
        self.size = product(self.shape)
        self.counters = [0] * self.ndim
        self._cumsum = [0] * self.ndim
        self._valid_from = 0
        self._done = self.size == 0
        logger.debug(
            "view of %s in order %r: offset %d, shape %s",
            array_shape,
            self.order,
            self.offset,
            self.shape,
        )

    @property
    def ndim(self) -> int:
        return len(self.shape)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"<ViewIterator offset={self.offset} shape={self.shape} order={self.order!r}>"

    def current_offset(self) -> int:
        flat = map_counters(
            self.offset,
            self.ranges,
            self.coefficients,
            self.counters,
            self._cumsum,
            self._valid_from,
        )
        self._valid_from = self.ndim
        return flat

    def advance(self) -> bool:
        """Step to the next element. Returns True once the traversal has completed."""
        if self._done:
            return True
        changed_axis, wrapped = increment_counters(self.counters, self.shape)
        self._valid_from = min(self._valid_from, changed_axis)
        self._done = wrapped
        return wrapped

    def is_done(self) -> bool:
        return self._done

    def reset(self) -> None:
        for axis in range(self.ndim):
            self.counters[axis] = 0
        self._valid_from = 0
        self._done = self.size == 0

    def __iter__(self) -> Iterator[int]:
        while not self._done:
            yield self.current_offset()
            self.advance()
