from __future__ import annotations

from typing import Any

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from ndview.core.storage import IndexableView, NDArrayStorage, SequenceStorage, as_indexable


def test_ndarray_storage_orders(matrix: Any) -> None:
    c = NDArrayStorage(matrix)
    f = NDArrayStorage(matrix, "F")
    assert c.shape == f.shape == (3, 4)
    assert c.get_flat(1) == 1
    assert f.get_flat(1) == 4
    assert NDArrayStorage(matrix, (1, 0)).get_flat(1) == 4


def test_ndarray_storage_writes_through(matrix: Any) -> None:
    storage = NDArrayStorage(matrix, "F")
    storage.set_flat(1, -1)
    assert matrix[1, 0] == -1
    assert storage.data is matrix


def test_ndarray_storage_empty(matrix: Any) -> None:
    result = NDArrayStorage(matrix, "F").empty((2, 2))
    assert isinstance(result, NDArrayStorage)
    result.set_flat(1, 5)
    assert result.data.dtype == matrix.dtype
    assert result.data[0, 1] == 5


def test_sequence_storage() -> None:
    items = [1, 2, 3]
    storage = SequenceStorage(items)
    assert storage.shape == (3,)
    storage.set_flat(0, 10)
    assert items == [10, 2, 3]
    assert storage.empty((2,)).data == [None, None]
    with pytest.raises(ValueError):
        storage.empty((2, 2))
    with pytest.raises(ValueError):
        SequenceStorage(items, (0, 1))


def test_as_indexable(matrix: Any) -> None:
    storage = as_indexable(matrix)
    assert isinstance(storage, IndexableView)
    assert as_indexable(storage) is storage
    assert isinstance(as_indexable([1]), SequenceStorage)
    assert_array_equal(as_indexable(np.array(3)).get_flat(0), 3)
    with pytest.raises(TypeError):
        as_indexable((1, 2))
    with pytest.raises(TypeError):
        as_indexable("abc")
