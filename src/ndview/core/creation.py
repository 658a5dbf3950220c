from __future__ import annotations

from collections.abc import Callable, Sequence
from logging import getLogger
from typing import Any

import numpy as np
import numpy.typing as npt

from ndview.core.common import MemoryOrder, ShapeLike, parse_shapelike
from ndview.core.config import config, parse_indexing_order
from ndview.errors import IncompatibleDimensionsError

logger = getLogger(__name__)


def create(
    shape: ShapeLike,
    dtype: npt.DTypeLike | None = None,
    fill_value: Any | None = None,
    order: MemoryOrder | None = None,
) -> npt.NDArray[Any]:
    """Create an array.

    Parameters
    ----------
    shape : int or tuple of ints
        Array shape.
    dtype : str or dtype, optional
        NumPy dtype. Defaults to the ``array.dtype`` configuration value.
    fill_value : object, optional
        Initial value of every element. If None, the array is zero-filled.
    order : {'C', 'F'}, optional
        Memory layout. Defaults to the ``array.order`` configuration value.

    Returns
    -------
    numpy.ndarray
    """
    shape = parse_shapelike(shape)
    if dtype is None:
        dtype = config.get("array.dtype")
    order = parse_indexing_order(config.get("array.order") if order is None else order)
    if fill_value is None:
        return np.zeros(shape, dtype=dtype, order=order)
    return np.full(shape, fill_value, dtype=dtype, order=order)


def collect_vector(
    n: int, function: Callable[[], Any], dtype: npt.DTypeLike | None = None
) -> npt.NDArray[Any]:
    """Call ``function`` ``n`` times and collect the results into a one-dimensional array."""
    result = create(n, dtype=dtype)
    for i in range(n):
        result[i] = function()
    return result


def collect_rows(
    nrow: int, function: Callable[[], Sequence[Any]], dtype: npt.DTypeLike | None = None
) -> npt.NDArray[Any]:
    """Call ``function`` ``nrow`` times and stack the returned rows into a matrix.

    Every row must have the length of the first one.
    """
    result: npt.NDArray[Any] | None = None
    for i in range(nrow):
        row = np.asarray(function())
        if row.ndim != 1:
            raise IncompatibleDimensionsError("a one-dimensional row", row.shape)
        if result is None:
            result = create((nrow, row.shape[0]), dtype=row.dtype if dtype is None else dtype)
        elif row.shape[0] != result.shape[1]:
            raise IncompatibleDimensionsError(result.shape[1], row.shape[0])
        result[i] = row
    if result is None:
        result = create((0, 0), dtype=dtype)
    logger.debug("collected %d rows into an array of shape %s", nrow, result.shape)
    return result
