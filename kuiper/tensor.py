"""Multi-dimensional tensors backed by a memory buffer."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from math import prod

from .alloc import DeviceAllocator
from .base import DataType, DeviceType, InvalidArgument
from .buffer import Buffer

_log = logging.getLogger(__name__)

_ELEMENT_SIZES = {
    DataType.FP32: 4,
    DataType.INT8: 1,
    DataType.INT32: 4,
}

_ELEMENT_FORMATS = {
    DataType.FP32: "f",
    DataType.INT8: "b",
    DataType.INT32: "i",
}


def data_type_size(data_type: DataType) -> int:
    """Return the size in bytes of one element of ``data_type``."""
    try:
        return _ELEMENT_SIZES[DataType(data_type)]
    except (KeyError, ValueError):
        raise InvalidArgument(f"unknown data type size for {int(data_type)}") from None


class Tensor:
    """A shaped view over a :class:`Buffer` of typed elements."""

    def __init__(
        self,
        data_type: DataType = DataType.UNKNOWN,
        *dims: int | Sequence[int],
        need_alloc: bool = False,
        allocator: DeviceAllocator | None = None,
        ptr=None,
    ) -> None:
        if len(dims) == 1 and isinstance(dims[0], Sequence):
            dims = tuple(dims[0])
        self._dims: list[int] = [int(d) for d in dims]
        self._size: int = prod(self._dims) if self._dims else 0
        self._data_type = DataType(data_type)
        self._buffer: Buffer | None = None

        if need_alloc and allocator is not None:
            self.allocate(allocator)
        elif ptr is not None:
            if need_alloc:
                raise InvalidArgument("The need_alloc is true when ptr is not None.")
            self.init_buffer(allocator, self._data_type, need_alloc, ptr)

    @property
    def dims(self) -> list[int]:
        return list(self._dims)

    @property
    def size(self) -> int:
        return self._size

    @property
    def data_type(self) -> DataType:
        return self._data_type

    @property
    def buffer(self) -> Buffer | None:
        return self._buffer

    @property
    def device_type(self) -> DeviceType:
        if self._buffer is None:
            return DeviceType.UNKNOWN
        return self._buffer.device_type

    @property
    def byte_size(self) -> int:
        if not self._size:
            return 0
        return data_type_size(self._data_type) * self._size

    @property
    def data(self) -> memoryview | None:
        """The whole element view, or None when the tensor has no buffer."""
        if self._buffer is None or self._buffer.ptr is None:
            return None
        return self.view(0)

    def is_empty(self) -> bool:
        return self._buffer is None or self._size == 0 or self._buffer.ptr is None

    def init_buffer(self, allocator, data_type, need_alloc, ptr) -> None:
        """Wrap external memory ``ptr``, or allocate when an allocator is involved."""
        if allocator is None and not need_alloc:
            self._buffer = Buffer(data_type_size(data_type) * self._size, None, ptr, True)
        else:
            self.allocate(allocator, True)

    def allocate(self, allocator: DeviceAllocator | None, need_realloc: bool = False) -> bool:
        """Give the tensor a buffer from ``allocator``; True on success."""
        if allocator is None:
            _log.error("The allocator parameter in allocate function is None.")
            return False
        byte_size = self.byte_size
        if not byte_size:
            _log.error("The byte size in allocate function is equal to zero.")
            return False
        if self._buffer is not None and byte_size <= self._buffer.byte_size and not need_realloc:
            return True
        self._buffer = Buffer(byte_size, allocator, None)
        if self._buffer.ptr is None:
            _log.error("The memory allocated is None.")
            return False
        return True

    def view(self, index: int = 0) -> memoryview:
        """Return a typed view of the elements starting at element ``index``."""
        if self._buffer is None or self._buffer.ptr is None:
            raise InvalidArgument(
                "The data area buffer of this tensor is empty or pointer is empty"
            )
        if not 0 <= index <= self._size:
            raise IndexError(f"element index {index} out of range")
        try:
            fmt = _ELEMENT_FORMATS[self._data_type]
        except KeyError:
            raise InvalidArgument(f"unknown data type {int(self._data_type)}") from None
        item = data_type_size(self._data_type)
        raw = memoryview(self._buffer.ptr).cast("B")
        end = min(len(raw), self._buffer.byte_size)
        return raw[index * item : end].cast(fmt)

    def get_dim(self, idx: int) -> int:
        if not 0 <= idx < len(self._dims):
            raise IndexError(f"dimension index {idx} out of range")
        return self._dims[idx]

    def dims_size(self) -> int:
        return len(self._dims)

    def strides(self) -> list[int]:
        """Element strides of each dimension in row-major order."""
        return [prod(self._dims[i + 1 :]) for i in range(len(self._dims))]