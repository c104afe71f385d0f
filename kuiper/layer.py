"""Operator layers with inputs, outputs and optional weights."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum

from .base import DataType, DeviceType, FunctionNotImplemented, InvalidArgument
from .tensor import Tensor


class LayerType(IntEnum):
    """Kind of operator a layer computes."""

    UNKNOWN = 0
    LINEAR = 1
    ENCODE = 2
    EMBEDDING = 3
    RMSNORM = 4
    MATMUL = 5
    ROPE = 6
    MHA = 7
    SOFTMAX = 8
    ADD = 9
    SWIGLU = 10


def _check_index(idx: int, items: list, what: str) -> None:
    if not 0 <= idx < len(items):
        raise IndexError(f"{what} index {idx} out of range (size {len(items)})")


class BaseLayer(ABC):
    """Common identity of every layer: name, kind, device and data type."""

    def __init__(
        self,
        device_type: DeviceType,
        layer_type: LayerType,
        data_type: DataType,
        layer_name: str = "",
    ) -> None:
        self._device_type = DeviceType(device_type)
        self._layer_type = LayerType(layer_type)
        self._data_type = DataType(data_type)
        self.layer_name = layer_name

    @property
    def data_type(self) -> DataType:
        return self._data_type

    @property
    def layer_type(self) -> LayerType:
        return self._layer_type

    @property
    def device_type(self) -> DeviceType:
        return self._device_type

    @device_type.setter
    def device_type(self, device_type: DeviceType) -> None:
        self._device_type = DeviceType(device_type)

    @abstractmethod
    def init(self) -> None:
        """Prepare the layer for use."""

    @abstractmethod
    def forward(self, *args: Tensor) -> None:
        """Run the layer."""

    @abstractmethod
    def check(self) -> None:
        """Validate the layer's inputs and outputs."""

    def _unsupported(self, operation: str, detail: str = "") -> None:
        """Raise FunctionNotImplemented for an operation this layer lacks."""
        label = self.layer_name or self._layer_type.name.lower()
        message = f"{label}.{operation} is not implemented"
        if detail:
            message = f"{message}: {detail}"
        raise FunctionNotImplemented(message)

    def set_weight(self, idx: int, weight: Tensor) -> None:
        """Store a weight; layers without weights raise FunctionNotImplemented."""
        self._unsupported("set_weight")


class Layer(BaseLayer):
    """A layer with indexed input and output tensors and no weights."""

    def __init__(self, device_type: DeviceType, layer_type: LayerType, layer_name: str = "") -> None:
        super().__init__(device_type, layer_type, DataType.FP32, layer_name)
        self._inputs: list[Tensor] = []
        self._outputs: list[Tensor] = []
        self._initialized = False

    def init(self) -> None:
        """Mark the layer ready for use; a plain layer needs no preparation."""
        self._initialized = True

    def check_tensor(self, tensor: Tensor, device_type: DeviceType, data_type: DataType) -> None:
        """Raise InvalidArgument unless ``tensor`` is filled and of the given device and type."""
        if tensor.is_empty():
            raise InvalidArgument("The tensor parameter is empty.")
        if tensor.device_type != device_type:
            raise InvalidArgument("The tensor has wrong device type.")
        if tensor.data_type != data_type:
            raise InvalidArgument("The tensor has wrong data type.")

    def check_tensor_with_dim(
        self, tensor: Tensor, device_type: DeviceType, data_type: DataType, *args: int
    ) -> None:
        """Like :meth:`check_tensor`, and also compare each dimension with ``args``."""
        self.check_tensor(tensor, device_type, data_type)
        for i, actual in enumerate(tensor.dims):
            if i >= len(args) or args[i] != actual:
                raise InvalidArgument(f"The tensor has wrong dim in dim{i}")

    def check(self) -> None:
        """Validate the layer; a plain layer has no check and raises."""
        self._unsupported("check", "The check function is not implemented yet")

    def forward(self, *args: Tensor) -> None:
        """Run the layer; given tensors are bound as inputs, the last as output 0."""
        if args:
            if len(args) < 2 or len(args) > 6:
                raise TypeError("forward takes between one and five inputs and one output")
            *inputs, output = args
            for idx, tensor in enumerate(inputs):
                self.set_input(idx, tensor)
            self.set_output(0, output)
        return self._forward()

    def _forward(self) -> None:
        self._unsupported("forward")

    def set_input(self, idx: int, tensor: Tensor) -> None:
        _check_index(idx, self._inputs, "input")
        self._inputs[idx] = tensor

    def set_output(self, idx: int, tensor: Tensor) -> None:
        _check_index(idx, self._outputs, "output")
        self._outputs[idx] = tensor

    def get_input(self, idx: int) -> Tensor:
        _check_index(idx, self._inputs, "input")
        return self._inputs[idx]

    def get_output(self, idx: int) -> Tensor:
        _check_index(idx, self._outputs, "output")
        return self._outputs[idx]

    def input_size(self) -> int:
        return len(self._inputs)

    def output_size(self) -> int:
        return len(self._outputs)

    @staticmethod
    def _resize(items: list[Tensor], size: int) -> None:
        if size < 0:
            raise InvalidArgument("size must not be negative")
        del items[size:]
        items.extend(Tensor() for _ in range(size - len(items)))

    def reset_input_size(self, size: int) -> None:
        self._resize(self._inputs, size)

    def reset_output_size(self, size: int) -> None:
        self._resize(self._outputs, size)


class LayerParam(Layer):
    """A layer that also holds indexed weight tensors."""

    def __init__(self, device_type: DeviceType, layer_type: LayerType, layer_name: str = "") -> None:
        super().__init__(device_type, layer_type, layer_name)
        self._weights: list[Tensor] = []

    def weight_size(self) -> int:
        return len(self._weights)

    def reset_weight_size(self, size: int) -> None:
        self._resize(self._weights, size)

    def get_weight(self, idx: int) -> Tensor:
        _check_index(idx, self._weights, "weight")
        return self._weights[idx]

    def set_weight(self, idx: int, weight: Tensor) -> None:
        _check_index(idx, self._weights, "weight")
        if weight.data_type != DataType.FP32:
            raise InvalidArgument("The weight must be of type FP32.")
        if not weight.is_empty() and weight.device_type != self._device_type:
            raise InvalidArgument("The weight has wrong device type.")
        self._weights[idx] = weight