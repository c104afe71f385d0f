"""Allocators, buffers, tensors and layers for a small inference engine."""

__version__ = "0.1.0"
__all__ = ["alloc", "base", "buffer", "layer", "tensor"]