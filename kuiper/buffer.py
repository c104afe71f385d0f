"""A block of memory owned or borrowed through an allocator."""

from __future__ import annotations

from .alloc import DeviceAllocator
from .base import DeviceType


class Buffer:
    """Holds a memory block and releases it when it owns it."""

    def __init__(
        self,
        byte_size: int = 0,
        allocator: DeviceAllocator | None = None,
        ptr=None,
        use_external: bool = False,
    ) -> None:
        self._byte_size = byte_size
        self._allocator = allocator
        self._ptr = ptr
        self._use_external = use_external
        self._device_type = DeviceType.UNKNOWN
        if self._ptr is None and self._allocator is not None:
            self._device_type = self._allocator.device_type
            self._use_external = False
            self._ptr = self._allocator.allocate(byte_size)

    @property
    def ptr(self):
        return self._ptr

    @property
    def byte_size(self) -> int:
        return self._byte_size

    @property
    def allocator(self) -> DeviceAllocator | None:
        return self._allocator

    @property
    def use_external(self) -> bool:
        return self._use_external

    @property
    def device_type(self) -> DeviceType:
        return self._device_type

    def allocate(self) -> bool:
        """Allocate a fresh block through the allocator; True on success."""
        if self._allocator is None or self._byte_size == 0:
            return False
        self._use_external = False
        self._ptr = self._allocator.allocate(self._byte_size)
        return self._ptr is not None

    def release(self) -> None:
        """Return an owned block to its allocator; borrowed memory is left alone."""
        if self._use_external:
            return
        if self._ptr is not None and self._allocator is not None:
            self._allocator.release(self._ptr)
            self._ptr = None

    def __enter__(self) -> Buffer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()