import pytest

from kuiper.alloc import CPUDeviceAllocator, DeviceAllocator, MemcpyKind, get_instance
from kuiper.base import DeviceType, FunctionNotImplemented, InvalidArgument


class _UnknownAllocator(DeviceAllocator):
    def __init__(self):
        super().__init__(DeviceType.UNKNOWN)

    def allocate(self, byte_size):
        return bytearray(byte_size) if byte_size else None

    def release(self, ptr):
        if ptr is not None:
            del ptr[:]


@pytest.mark.parametrize(
    "value,member",
    [(1, MemcpyKind.CPU2CUDA), (2, MemcpyKind.CUDA2CPU), (3, MemcpyKind.CUDA2CUDA)],
)
def test_memcpy_kind_from_value(value, member):
    assert MemcpyKind(value) is member
    assert int(member) == value


def test_memcpy_kind_count():
    assert len(MemcpyKind) == 4
    assert int(MemcpyKind(0)) == 0


def test_cpu_allocator_device_type():
    assert CPUDeviceAllocator().device_type is DeviceType.CPU


def test_allocate_zero_returns_none():
    assert CPUDeviceAllocator().allocate(0) is None


def test_allocate_returns_block_of_requested_size():
    block = CPUDeviceAllocator().allocate(16)
    assert len(block) == 16
    assert block == bytes(16)


def test_release_empties_block():
    alloc = CPUDeviceAllocator()
    block = alloc.allocate(8)
    alloc.release(block)
    assert len(block) == 0


def test_abstract_allocator_cannot_be_built():
    with pytest.raises(TypeError):
        DeviceAllocator(DeviceType.CPU)


def test_memcpy_cpu_to_cpu():
    alloc = CPUDeviceAllocator()
    src = bytearray(b"abcdef")
    dest = alloc.allocate(6)
    alloc.memcpy(src, dest, 4)
    assert dest == bytearray(b"abcd\x00\x00")


def test_memcpy_zero_size_leaves_dest():
    alloc = CPUDeviceAllocator()
    dest = bytearray(b"xyz")
    alloc.memcpy(b"abc", dest, 0)
    assert dest == bytearray(b"xyz")


@pytest.mark.parametrize("src,dest", [(None, bytearray(4)), (bytearray(4), None)])
def test_memcpy_null_pointer(src, dest):
    with pytest.raises(InvalidArgument):
        CPUDeviceAllocator().memcpy(src, dest, 4)


@pytest.mark.parametrize("kind", [MemcpyKind.CPU2CUDA, MemcpyKind.CUDA2CPU, MemcpyKind.CUDA2CUDA])
def test_memcpy_cuda_kinds_unsupported(kind):
    with pytest.raises(FunctionNotImplemented):
        CPUDeviceAllocator().memcpy(bytearray(4), bytearray(4), 4, kind)


def test_memcpy_unknown_kind():
    with pytest.raises(InvalidArgument):
        CPUDeviceAllocator().memcpy(bytearray(4), bytearray(4), 4, 9)


def test_memcpy_oversize():
    with pytest.raises(InvalidArgument):
        CPUDeviceAllocator().memcpy(bytearray(2), bytearray(8), 4)


def test_memset_zero():
    alloc = CPUDeviceAllocator()
    block = bytearray(b"\xff" * 6)
    alloc.memset_zero(block, 4)
    assert block == bytearray(b"\x00\x00\x00\x00\xff\xff")


def test_memset_zero_unknown_device():
    alloc = _UnknownAllocator()
    assert alloc.device_type is DeviceType.UNKNOWN
    block = bytearray(b"\xff" * 4)
    with pytest.raises(InvalidArgument):
        DeviceAllocator.memset_zero(alloc, block, 4)
    assert block == bytearray(b"\xff" * 4)


def test_get_instance_is_shared():
    first = get_instance(CPUDeviceAllocator)
    second = get_instance(CPUDeviceAllocator)
    assert first is second
    assert first.device_type is DeviceType.CPU