from __future__ import annotations

import functools
from collections.abc import Callable
from logging import getLogger
from typing import Any

import numpy as np
import numpy.typing as npt

from ndview.core.common import AxisOrder, resolve_order
from ndview.core.creation import create
from ndview.core.indexing import ViewIterator
from ndview.core.selection import ALL
from ndview.core.storage import as_indexable
from ndview.errors import IncompatibleDimensionsError

logger = getLogger(__name__)


def ensure_tuple(v: Any) -> tuple[Any, ...]:
    if not isinstance(v, tuple):
        v = (v,)
    return v


def is_sequence(value: Any) -> bool:
    """True for values mapped to a row or column rather than a single element."""
    if isinstance(value, np.ndarray):
        return value.ndim > 0
    return isinstance(value, list | tuple)


def sub(array: Any, *selection: Any, order: AxisOrder | None = None) -> Any:
    """Read a selection of ``array``.

    Parameters
    ----------
    array : numpy.ndarray or list
        The array to read from. A list is a one-dimensional array.
    *selection
        One selector per axis of ``array``: ``ALL`` for a whole axis, an integer to select a
        single position and drop the axis, a ``(start, end)`` pair or a slice for a half-open
        span, or a list of integers to gather positions. Negative integers count from the end
        of the axis, and ``0`` as the end of a span means the end of the axis.
    order : {'C', 'F'} or tuple of ints, optional
        Axis order used to address the storage of ``array``. Defaults to the ``array.order``
        configuration value. The result does not depend on it.

    Returns
    -------
    A new array of the same kind holding the selected elements, or a single element when every
    axis is dropped.

    Examples
    --------
    >>> a = np.arange(12).reshape(3, 4)
    >>> sub(a, 1, (0, 2))
    array([4, 5])
    """
    order = resolve_order(order)
    source = as_indexable(array, order)
    view = ViewIterator(selection, source.shape, order)
    if view.ndim == 0:
        return source.get_flat(view.current_offset())
    result = source.empty(view.shape)
    for i, offset in enumerate(view):
        result.set_flat(i, source.get_flat(offset))
    return result.data


def _source_values(source: Any, target: Any) -> Any:
    """Wrap the values written by :func:`set_sub`, detached from ``target`` if they overlap."""
    if isinstance(source, list) and not any(is_sequence(v) for v in source):
        return as_indexable(list(source) if source is target else source)
    values = np.asarray(source)
    if isinstance(target, np.ndarray) and np.may_share_memory(values, target):
        values = values.copy()
    return as_indexable(values)


def set_sub(target: Any, source: Any, *selection: Any, order: AxisOrder | None = None) -> Any:
    """Write ``source`` into a selection of ``target``, in place.

    The selection follows the rules of :func:`sub`. ``source`` must have exactly the shape
    of the selection, or be a scalar which is then written to every selected element. Nested
    lists are read as arrays. ``source`` may overlap ``target``, it is then read in full before
    anything is written. Nothing is written if the selection or the shapes are invalid.

    Returns ``source``.
    """
    order = resolve_order(order)
    storage = as_indexable(target, order)
    view = ViewIterator(selection, storage.shape, order)
    if np.isscalar(source):
        logger.debug("filling %d elements with %r", view.size, source)
        for offset in view:
            storage.set_flat(offset, source)
        return source

    values = _source_values(source, target)
    if values.shape != view.shape:
        raise IncompatibleDimensionsError(view.shape, values.shape)
    logger.debug("writing %d elements", view.size)
    for i, offset in enumerate(view):
        storage.set_flat(offset, values.get_flat(i))
    return source


def _map_axis(matrix: Any, function: Callable[[Any], Any], axis: int) -> npt.NDArray[Any]:
    matrix = np.asarray(matrix)
    if matrix.ndim != 2:
        raise IncompatibleDimensionsError(2, matrix.ndim)
    n = matrix.shape[axis]
    selections = [(i, ALL) if axis == 0 else (ALL, i) for i in range(n)]
    results: list[npt.NDArray[Any]] = []
    for selection in selections:
        value = function(sub(matrix, *selection))
        if results and is_sequence(value) != (results[0].ndim > 0):
            expected = "a sequence" if results[0].ndim > 0 else "a scalar"
            raise IncompatibleDimensionsError(expected, type(value).__name__)
        results.append(np.asarray(value))
    if not results:
        return create(0)

    # the result dtype holds every result, not only the first
    dtype = functools.reduce(np.promote_types, (r.dtype for r in results))
    first = results[0]
    if first.ndim > 0:
        shape = (n, len(first)) if axis == 0 else (len(first), n)
        result = create(shape, dtype=dtype)
        for selection, value in zip(selections, results, strict=True):
            set_sub(result, value, *selection)
    else:
        result = create(n, dtype=dtype)
        for i, value in enumerate(results):
            set_sub(result, value[()], i)
    return result


def map_rows(matrix: Any, function: Callable[[Any], Any]) -> npt.NDArray[Any]:
    """Apply ``function`` to every row of a matrix.

    If the first result is a sequence, the results are the rows of a new matrix, otherwise
    they form a vector. Every result must agree in kind and length with the first one. The
    result dtype is promoted over all results.
    """
    return _map_axis(matrix, function, 0)


def map_columns(matrix: Any, function: Callable[[Any], Any]) -> npt.NDArray[Any]:
    """Apply ``function`` to every column of a matrix.

    Sequence results become the columns of a new matrix, scalar results form a vector.
    """
    return _map_axis(matrix, function, 1)


def transpose(matrix: Any) -> npt.NDArray[Any]:
    source = np.asarray(matrix)
    if source.ndim != 2:
        raise IncompatibleDimensionsError(2, source.ndim)
    return np.ascontiguousarray(source.T)


class SIndex:
    """Subscript access to :func:`sub` and :func:`set_sub`.

    ``sindex(a)[1, (0, 2)]`` reads like ``sub(a, 1, (0, 2))`` and
    ``sindex(a)[:, 0] = values`` writes like ``set_sub(a, values, ALL, 0)``.
    Slices run to the end with a ``None`` stop; ``a[:0]`` style slices are rejected instead
    of selecting the whole axis.
    """

    def __init__(self, array: Any, order: AxisOrder | None = None) -> None:
        self.array = array
        self.order = order

    def __getitem__(self, selection: Any) -> Any:
        return sub(self.array, *ensure_tuple(selection), order=self.order)

    def __setitem__(self, selection: Any, value: Any) -> None:
        set_sub(self.array, value, *ensure_tuple(selection), order=self.order)


def sindex(array: Any, order: AxisOrder | None = None) -> SIndex:
    return SIndex(array, order)
