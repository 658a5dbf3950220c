from __future__ import annotations

import functools
import numbers
import operator
from collections.abc import Iterable, Sequence
from typing import Any, Literal, TypeAlias, TypeGuard

import numpy as np

from ndview.core.config import BadConfigError, config, parse_indexing_order

ShapeLike = Iterable[int] | int
MemoryOrder = Literal["C", "F"]
# "C", "F", or an explicit permutation listing the axes from slowest to fastest varying
AxisOrder: TypeAlias = MemoryOrder | Sequence[int]


def product(tup: tuple[int, ...]) -> int:
    return functools.reduce(operator.mul, tup, 1)


def is_integer(x: Any) -> TypeGuard[int]:
    """True if x is an integer (both pure Python or NumPy)."""
    return isinstance(x, numbers.Integral) and not is_bool(x)


def is_bool(x: Any) -> TypeGuard[bool | np.bool_]:
    """True if x is a boolean (both pure Python or NumPy)."""
    return type(x) in [bool, np.bool_]


def parse_shapelike(data: ShapeLike) -> tuple[int, ...]:
    if is_integer(data):
        data = int(data)  # type: ignore[arg-type]
        if data < 0:
            raise ValueError(f"Expected a non-negative integer. Got {data} instead")
        return (data,)
    try:
        data_tuple = tuple(data)  # type: ignore[arg-type]
    except TypeError as e:
        msg = f"Expected an integer or an iterable of integers. Got {data} instead."
        raise TypeError(msg) from e

    if not all(is_integer(v) for v in data_tuple):
        msg = f"Expected an iterable of integers. Got {data} instead."
        raise TypeError(msg)
    if not all(v > -1 for v in data_tuple):
        msg = f"Expected all values to be non-negative. Got {data} instead."
        raise ValueError(msg)
    return tuple(int(v) for v in data_tuple)


def parse_axis_order(data: Any, ndim: int) -> tuple[int, ...]:
    """Convert a traversal order into the axes listed from slowest to fastest varying.

    ``"C"`` (row-major) is ``(0, 1, ..., ndim - 1)``, ``"F"`` (column-major) is the reverse,
    and an explicit sequence must be a permutation of ``range(ndim)``.
    """
    if isinstance(data, str):
        if parse_indexing_order(data) == "C":
            return tuple(range(ndim))
        return tuple(reversed(range(ndim)))
    if not isinstance(data, Iterable):
        raise TypeError(f"Expected 'C', 'F' or an iterable of integers. Got {data} instead.")
    axes = tuple(data)
    if not all(is_integer(a) for a in axes):
        raise TypeError(f"Expected an iterable of integers. Got {data} instead.")
    axes = tuple(int(a) for a in axes)
    if sorted(axes) != list(range(ndim)):
        raise ValueError(
            f"Expected a permutation of the {ndim} axes of the array. Got {data} instead."
        )
    return axes


def resolve_order(order: AxisOrder | None) -> AxisOrder:
    """Return ``order``, falling back to the ``array.order`` configuration value."""
    if order is not None:
        return order
    value = config.get("array.order")
    try:
        return parse_indexing_order(value)
    except ValueError as e:
        raise BadConfigError(f"bad Config: array.order={value!r}") from e
