from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt

from ndview.core.common import AxisOrder, parse_axis_order

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class IndexableView(Protocol):
    """Flat, offset-addressed access to the elements of a container.

    Offsets follow the axis order the storage was created with, so that they agree with the
    coefficients computed by :func:`ndview.core.strides.get_coefficients` for the same order.
    """

    shape: tuple[int, ...]

    @property
    def data(self) -> Any: ...

    def get_flat(self, offset: int) -> Any: ...

    def set_flat(self, offset: int, value: Any) -> None: ...

    def empty(self, shape: tuple[int, ...]) -> IndexableView: ...


class NDArrayStorage:
    """Storage backed by a numpy array.

    The array is viewed through ``numpy.transpose`` with the traversal axes, whose row-major
    ``flat`` iterator then addresses elements in the requested order. Writes go through to the
    wrapped array.
    """

    def __init__(self, array: npt.NDArray[Any], order: AxisOrder = "C") -> None:
        self._array = array
        self.shape = array.shape
        axes = parse_axis_order(order, array.ndim)
        self._flat = np.transpose(array, axes).flat

    @property
    def data(self) -> npt.NDArray[Any]:
        return self._array

    def get_flat(self, offset: int) -> Any:
        return self._flat[offset]

    def set_flat(self, offset: int, value: Any) -> None:
        self._flat[offset] = value

    def empty(self, shape: tuple[int, ...]) -> NDArrayStorage:
        return NDArrayStorage(np.empty(shape, dtype=self._array.dtype))


class SequenceStorage:
    """Storage backed by a Python list, a container of rank one."""

    def __init__(self, items: list[Any], order: AxisOrder = "C") -> None:
        # a single axis has one ordering, but a bad order is still an error
        parse_axis_order(order, 1)
        self._items = items
        self.shape = (len(items),)

    @property
    def data(self) -> list[Any]:
        return self._items

    def get_flat(self, offset: int) -> Any:
        return self._items[offset]

    def set_flat(self, offset: int, value: Any) -> None:
        self._items[offset] = value

    def empty(self, shape: Sequence[int]) -> SequenceStorage:
        if len(shape) != 1:
            raise ValueError(f"Expected a one-dimensional shape for a list. Got {shape} instead.")
        return SequenceStorage([None] * shape[0])


def as_indexable(data: Any, order: AxisOrder = "C") -> IndexableView:
    if isinstance(data, IndexableView):
        return data
    if isinstance(data, np.ndarray):
        return NDArrayStorage(data, order)
    if isinstance(data, list):
        return SequenceStorage(data, order)
    raise TypeError(f"Expected a numpy array or a list. Got {type(data)!r} instead.")
