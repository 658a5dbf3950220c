from __future__ import annotations

import itertools
from typing import Any

import numpy as np
import pytest

from ndview.core.common import parse_axis_order
from ndview.core.strides import (
    column_major_coefficients,
    get_coefficients,
    permuted_coefficients,
    row_major_coefficients,
)


def test_row_major_coefficients() -> None:
    assert row_major_coefficients((3, 4)) == (4, 1)
    assert row_major_coefficients((2, 3, 4)) == (12, 4, 1)
    assert row_major_coefficients((5,)) == (1,)
    assert row_major_coefficients(()) == ()


def test_column_major_coefficients() -> None:
    assert column_major_coefficients((3, 4)) == (1, 3)
    assert column_major_coefficients((2, 3, 4)) == (1, 2, 6)
    assert column_major_coefficients(()) == ()


@pytest.mark.parametrize("shape", [(3, 4), (2, 3, 4), (1, 5, 2, 3)])
@pytest.mark.parametrize("order", ["C", "F"])
def test_coefficients_match_numpy_strides(shape: tuple[int, ...], order: Any) -> None:
    a = np.empty(shape, dtype="i8", order=order)
    expected = tuple(s // a.itemsize for s in a.strides)
    assert get_coefficients(shape, order) == expected


def test_permuted_coefficients() -> None:
    # axis 1 slowest, then axis 2, then axis 0 fastest
    assert permuted_coefficients((2, 3, 4), (1, 2, 0)) == (1, 8, 2)
    assert get_coefficients((2, 3, 4), (1, 2, 0)) == (1, 8, 2)
    assert get_coefficients((2, 3, 4), (0, 1, 2)) == row_major_coefficients((2, 3, 4))
    assert get_coefficients((2, 3, 4), (2, 1, 0)) == column_major_coefficients((2, 3, 4))


@pytest.mark.parametrize("axes", list(itertools.permutations(range(3))))
def test_permuted_coefficients_are_a_bijection(axes: tuple[int, ...]) -> None:
    shape = (2, 3, 4)
    coefficients = permuted_coefficients(shape, axes)
    offsets = {
        sum(c * i for c, i in zip(coefficients, index, strict=True))
        for index in itertools.product(*(range(d) for d in shape))
    }
    assert offsets == set(range(2 * 3 * 4))


def test_parse_axis_order() -> None:
    assert parse_axis_order("C", 3) == (0, 1, 2)
    assert parse_axis_order("F", 3) == (2, 1, 0)
    assert parse_axis_order([1, 0], 2) == (1, 0)
    assert parse_axis_order((), 0) == ()


@pytest.mark.parametrize(
    ("order", "ndim", "error"),
    [
        ("K", 2, ValueError),
        ((0, 0), 2, ValueError),
        ((0, 1, 2), 2, ValueError),
        ((0, 1.0), 2, TypeError),
        (3, 2, TypeError),
    ],
)
def test_parse_axis_order_invalid(order: Any, ndim: int, error: type[Exception]) -> None:
    with pytest.raises(error):
        parse_axis_order(order, ndim)
    with pytest.raises(error):
        get_coefficients((2,) * ndim, order)
