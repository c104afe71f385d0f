# kuiper

The core pieces of a small neural-network inference engine, in plain Python.

- `kuiper.base`: the `DeviceType`, `DataType` and `StatusCode` enumerations and
  the exceptions the package raises. `KuiperError` is the base class.
  `FunctionNotImplemented` is also a `NotImplementedError`, and
  `InvalidArgument` is also a `ValueError`. Each exception carries its
  `StatusCode` as `code`.
- `kuiper.alloc`: the device allocators and related helpers.
  - `DeviceAllocator` is the abstract base. It provides `allocate`, `release`,
    `memcpy` and `memset_zero`.
  - `CPUDeviceAllocator` hands out `bytearray` blocks. It returns `None` for
    zero bytes.
  - `MemcpyKind` names the copy directions.
  - `get_instance(alloc_cls)` returns one shared allocator per class.
- `kuiper.buffer`: `Buffer`, a block of memory.
  - It either owns what its allocator gave it, or wraps memory supplied from
    outside when `use_external` is set.
  - `release()` gives an owned block back to its allocator. It is also called
    on leaving a `with` block.
- `kuiper.tensor`: `Tensor`, a shaped view over a buffer, plus
  `data_type_size`.
  - It has `dims`, `size`, `byte_size`, `data_type`, `device_type`, `buffer`
    and `data`.
  - Its methods are `is_empty`, `allocate`, `init_buffer`, `get_dim`,
    `dims_size` and `strides`.
  - `view(index)` returns a typed `memoryview` of the elements, starting at
    element `index`.
- `kuiper.layer`: the layer classes.
  - `LayerType` names the kinds of layer.
  - `BaseLayer` holds the common identity: `layer_name`, `layer_type`,
    `device_type` and `data_type`.
  - `Layer` adds indexed inputs and outputs, plus tensor checks.
  - `LayerParam` is a layer that also holds weights.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from kuiper.alloc import CPUDeviceAllocator, get_instance
from kuiper.base import DataType, DeviceType, InvalidArgument
from kuiper.layer import Layer, LayerType
from kuiper.tensor import Tensor

allocator = get_instance(CPUDeviceAllocator)

x = Tensor(DataType.FP32, 2, 3, need_alloc=True, allocator=allocator)
print(x.strides())   # [3, 1]
print(x.get_dim(1))  # 3

x.view()[4] = 1.5
print(x.view(4)[0])  # 1.5

layer = Layer(DeviceType.CPU, LayerType.ADD, "add")
layer.check_tensor(x, DeviceType.CPU, DataType.FP32)
layer.check_tensor_with_dim(x, DeviceType.CPU, DataType.FP32, 2, 3)

try:
    layer.check_tensor_with_dim(x, DeviceType.CPU, DataType.FP32, 2, 4)
except InvalidArgument as exc:
    print(exc)       # The tensor has wrong dim in dim1
```

## Errors and layers

If a check fails, the package raises an exception. It does not return a status
code.

Indexes outside the inputs, outputs, weights or dimensions raise `IndexError`.

A `Layer` starts with no input or output slots. Create them with
`reset_input_size` and `reset_output_size` before you call `set_input`,
`set_output` or `forward`.

`Layer.forward(*tensors)` takes from one to five inputs and then one output.
It binds the inputs to slots 0, 1 and so on, and binds the last tensor to
output 0. It then runs the layer's computation. Called with no tensors, it
runs the computation at once. The plain `Layer` has no computation of its own,
so its `forward` and `check` raise `FunctionNotImplemented`.

`LayerParam.set_weight` accepts only `FP32` weights. A non-empty weight must
also be on the layer's device.

## What the package does not do

- It works only with host memory. The `CPU2CUDA`, `CUDA2CPU` and `CUDA2CUDA`
  copy directions raise `FunctionNotImplemented`. So does `memset_zero` on a
  device other than the CPU. No CUDA allocator is provided.
- It provides no concrete operators, such as linear, matmul, RMSNorm or
  attention. It also provides no model loading and no command-line program.
  `LayerType` only names these kinds of layer.