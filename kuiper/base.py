"""Core enumerations and error types shared by the whole package."""

from __future__ import annotations

from enum import IntEnum


class DeviceType(IntEnum):
    """Where a block of memory lives."""

    UNKNOWN = 0
    CPU = 1
    CUDA = 2


class DataType(IntEnum):
    """Element type of a tensor."""

    UNKNOWN = 0
    FP32 = 1
    INT8 = 2
    INT32 = 3


class StatusCode(IntEnum):
    """Numeric codes carried by the package's errors."""

    SUCCESS = 0
    FUNCTION_UNIMPLEMENTED = 1
    INVALID_ARGUMENT = 7


class KuiperError(Exception):
    """Base class of every error raised by the package."""

    code: StatusCode | None = None

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class FunctionNotImplemented(KuiperError, NotImplementedError):
    """Raised when an operation has no implementation."""

    code = StatusCode.FUNCTION_UNIMPLEMENTED


class InvalidArgument(KuiperError, ValueError):
    """Raised when an argument is not acceptable."""

    code = StatusCode.INVALID_ARGUMENT