"""Device memory allocators."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import TypeVar

from .base import DeviceType, FunctionNotImplemented, InvalidArgument


class MemcpyKind(IntEnum):
    """Direction of a memory copy."""

    CPU2CPU = 0
    CPU2CUDA = 1
    CUDA2CPU = 2
    CUDA2CUDA = 3


class DeviceAllocator(ABC):
    """Allocates and releases memory blocks on one kind of device."""

    def __init__(self, device_type: DeviceType) -> None:
        self._device_type = device_type

    @property
    def device_type(self) -> DeviceType:
        return self._device_type

    @abstractmethod
    def allocate(self, byte_size: int) -> bytearray | None:
        """Return a new block of ``byte_size`` bytes, or None for zero bytes."""

    @abstractmethod
    def release(self, ptr) -> None:
        """Give a block back to the allocator."""

    def memcpy(self, src, dest, byte_size: int, kind: MemcpyKind = MemcpyKind.CPU2CPU) -> None:
        """Copy ``byte_size`` bytes from ``src`` into ``dest``."""
        if src is None:
            raise InvalidArgument("The source pointer is null.")
        if dest is None:
            raise InvalidArgument("The destination pointer is null.")
        if not byte_size:
            return
        try:
            kind = MemcpyKind(kind)
        except ValueError:
            raise InvalidArgument(f"unknown memcpy kind {int(kind)}") from None
        if kind is not MemcpyKind.CPU2CPU:
            raise FunctionNotImplemented(f"memcpy kind {kind.name} needs a CUDA device")
        src_view = memoryview(src).cast("B")
        dest_view = memoryview(dest).cast("B")
        if byte_size > len(src_view) or byte_size > len(dest_view):
            raise InvalidArgument("The copy size exceeds the memory block.")
        dest_view[:byte_size] = src_view[:byte_size]

    def memset_zero(self, ptr, byte_size: int) -> None:
        """Fill the first ``byte_size`` bytes of ``ptr`` with zeros."""
        if self._device_type is DeviceType.UNKNOWN:
            raise InvalidArgument("The allocator has an unknown device type.")
        if self._device_type is not DeviceType.CPU:
            raise FunctionNotImplemented("memset_zero needs a CUDA device")
        view = memoryview(ptr).cast("B")
        if byte_size > len(view):
            raise InvalidArgument("The fill size exceeds the memory block.")
        view[:byte_size] = bytes(byte_size)


class CPUDeviceAllocator(DeviceAllocator):
    """Allocator for host memory."""

    def __init__(self) -> None:
        super().__init__(DeviceType.CPU)

    def allocate(self, byte_size: int) -> bytearray | None:
        if not byte_size:
            return None
        return bytearray(byte_size)

    def release(self, ptr) -> None:
        if ptr is not None:
            del ptr[:]


_A = TypeVar("_A", bound=DeviceAllocator)
_instances: dict[type, DeviceAllocator] = {}
_instances_lock = threading.Lock()


def get_instance(alloc_cls: type[_A]) -> _A:
    """Return the shared allocator of class ``alloc_cls``, creating it once."""
    with _instances_lock:
        instance = _instances.get(alloc_cls)
        if instance is None:
            instance = alloc_cls()
            _instances[alloc_cls] = instance
        return instance