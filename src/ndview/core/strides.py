from __future__ import annotations

from collections.abc import Sequence

from ndview.core.common import AxisOrder, parse_axis_order


def permuted_coefficients(shape: Sequence[int], axes: Sequence[int]) -> tuple[int, ...]:
    """Per-axis strides for flat storage laid out with ``axes`` from slowest to fastest varying.

    The fastest axis gets a coefficient of 1 and every other axis the product of the lengths of
    the axes varying faster than it.
    """
    coefficients = [0] * len(shape)
    running = 1
    for axis in reversed(axes):
        coefficients[axis] = running
        running *= shape[axis]
    return tuple(coefficients)


def row_major_coefficients(shape: Sequence[int]) -> tuple[int, ...]:
    return permuted_coefficients(shape, range(len(shape)))


def column_major_coefficients(shape: Sequence[int]) -> tuple[int, ...]:
    return permuted_coefficients(shape, range(len(shape) - 1, -1, -1))


def get_coefficients(shape: Sequence[int], order: AxisOrder = "C") -> tuple[int, ...]:
    if order == "C":
        return row_major_coefficients(shape)
    if order == "F":
        return column_major_coefficients(shape)
    return permuted_coefficients(shape, parse_axis_order(order, len(shape)))
