from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias, TypeGuard

import numpy as np
import numpy.typing as npt

from ndview.core.common import is_integer
from ndview.errors import (
    IncompatibleDimensionsError,
    InvalidArrayIndexError,
    InvalidRangeError,
)


def _parse_int(data: Any) -> int:
    if not is_integer(data):
        raise TypeError(f"Expected an integer. Got {data!r} instead.")
    return int(data)


@dataclass(frozen=True)
class All:
    """Select a whole axis. The axis is kept in the result."""

    def __repr__(self) -> str:
        return "ALL"


ALL = All()


@dataclass(frozen=True)
class SingleIndex:
    """Select a single position along an axis. The axis is dropped from the result."""

    index: int

    def __init__(self, index: int) -> None:
        object.__setattr__(self, "index", _parse_int(index))


@dataclass(frozen=True)
class Span:
    """Select the half-open range ``[start, end)`` of an axis.

    As a selector, both bounds follow the index conventions of :func:`transform_index`, so an
    ``end`` of ``0`` means the end of the axis. After :func:`transform_range` both bounds are
    resolved positions.
    """

    start: int
    end: int

    def __init__(self, start: int, end: int) -> None:
        object.__setattr__(self, "start", _parse_int(start))
        object.__setattr__(self, "end", _parse_int(end))


@dataclass(frozen=True)
class IndexList:
    """Gather arbitrary positions of an axis, in the given order, repeats allowed."""

    indices: tuple[int, ...]

    def __init__(self, indices: Iterable[int]) -> None:
        object.__setattr__(self, "indices", tuple(_parse_int(i) for i in indices))


@dataclass(frozen=True)
class Dropped:
    """A resolved single index, folded into the view offset."""

    index: int


Selector: TypeAlias = All | SingleIndex | Span | IndexList
TransformedRange: TypeAlias = Dropped | Span | IndexList


def transform_index(index: int, dimension: int, is_end: bool = False) -> int:
    """Resolve a raw index against an axis of length ``dimension``.

    ``0`` is the first position, or the end of the axis when ``is_end`` is true. Negative
    indices count back from the end of the axis.

    Raises
    ------
    InvalidArrayIndexError
        If the resolved index is outside ``[0, dimension)``, or ``[0, dimension]`` for an end
        position.
    """
    if index == 0:
        resolved = dimension if is_end else 0
    elif index < 0:
        resolved = dimension + index
    else:
        resolved = index

    # an end may sit one past the last element
    limit = dimension + 1 if is_end else dimension
    if resolved < 0 or resolved >= limit:
        raise InvalidArrayIndexError(index, dimension, is_end)
    return resolved


def transform_range(selector: Selector, dimension: int) -> TransformedRange:
    if isinstance(selector, All):
        return Span(0, dimension)
    if isinstance(selector, SingleIndex):
        return Dropped(transform_index(selector.index, dimension))
    if isinstance(selector, Span):
        start = transform_index(selector.start, dimension)
        end = transform_index(selector.end, dimension, is_end=True)
        if start >= end:
            raise InvalidRangeError(start, end, dimension)
        return Span(start, end)
    if isinstance(selector, IndexList):
        return IndexList(transform_index(i, dimension) for i in selector.indices)
    raise TypeError(f"Expected a selector, got {selector!r} instead.")


def transform_ranges(
    selectors: Sequence[Selector], shape: tuple[int, ...]
) -> tuple[TransformedRange, ...]:
    if len(selectors) != len(shape):
        raise IncompatibleDimensionsError(len(shape), len(selectors))
    return tuple(transform_range(s, d) for s, d in zip(selectors, shape, strict=True))


def is_integer_array(x: Any, ndim: int | None = None) -> TypeGuard[npt.NDArray[np.intp]]:
    t = not np.isscalar(x) and hasattr(x, "shape") and hasattr(x, "dtype") and x.dtype.kind in "ui"
    if ndim is not None:
        t = t and hasattr(x, "shape") and len(x.shape) == ndim
    return t


def is_integer_list(x: Any) -> TypeGuard[list[int]]:
    """True if x is a list of integers. The empty list counts."""
    return isinstance(x, list) and all(is_integer(i) for i in x)


def is_span_tuple(x: Any) -> TypeGuard[tuple[int, int]]:
    return isinstance(x, tuple) and len(x) == 2 and all(is_integer(i) for i in x)


def parse_selector(data: Any) -> Selector:
    """Convert one raw per-axis selector into its variant.

    Accepted forms are ``ALL``, ``True``, ``...`` or ``slice(None)`` for a whole axis, an
    integer for a single index, a ``(start, end)`` pair or a unit-step slice for a span, and a
    list or 1-D integer array for an index list. Unlike a span, a slice cannot stop at
    ``0``: ``slice(None, 0)`` would be empty, so it is rejected rather than read as the end of
    the axis.
    """
    if isinstance(data, All | SingleIndex | Span | IndexList):
        return data
    if data is True or data is Ellipsis:
        return ALL
    if is_integer(data):
        return SingleIndex(data)
    if isinstance(data, slice):
        if data.step not in (None, 1):
            raise InvalidRangeError(f"only slices with step 1 are supported, got {data!r}")
        if data.start is None and data.stop is None:
            return ALL
        if is_integer(data.stop) and data.stop == 0:
            raise InvalidRangeError(f"empty slice {data!r}; use None to run to the end")
        start = 0 if data.start is None else data.start
        end = 0 if data.stop is None else data.stop
        return Span(start, end)
    if is_span_tuple(data):
        return Span(*data)
    if is_integer_list(data) or is_integer_array(data, 1):
        return IndexList(data)
    raise TypeError(
        "unsupported selector; expected ALL, an integer, a (start, end) pair, a slice, or a "
        f"list of integers, got {data!r}"
    )


def parse_selection(
    selection: Sequence[Any], shape: tuple[int, ...]
) -> tuple[TransformedRange, ...]:
    """Parse raw selectors, one per axis of ``shape``, and resolve them against the shape."""
    return transform_ranges(tuple(parse_selector(s) for s in selection), shape)
