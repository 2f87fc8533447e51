from ._native_loader import cuda_available, load_cupy

__all__ = ["cuda_available", "load_cupy"]
