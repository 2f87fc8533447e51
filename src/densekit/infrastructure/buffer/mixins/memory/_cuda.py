"""
Accelerator (CUDA) control paths of the memory mixin.

Uploads and downloads go through CuPy's host/device copies; layout changes
happen on the device through strided copy kernels. Every path synchronizes
before returning so the caller never observes a half-written buffer.
"""

import numpy as np

from ..._buffer_builder import buffer_control_path_manager
from .....domain.device._device import MemorySpace

from ._base import BufferMixinMemory as BMM


@buffer_control_path_manager(BMM, BMM._fill, MemorySpace.ACCELERATOR)
def fill_cuda(self, value) -> None:
    with self._context.activate():
        self._data.fill(self.dtype.type(value))
    self._context.synchronize()


@buffer_control_path_manager(BMM, BMM._sequence, MemorySpace.ACCELERATOR)
def sequence_cuda(self) -> None:
    with self._context.activate() as cp:
        self._data[...] = cp.arange(self._data.size, dtype=self.dtype)
    self._context.synchronize()


@buffer_control_path_manager(BMM, BMM._to_numpy, MemorySpace.ACCELERATOR)
def to_numpy_cuda(self) -> np.ndarray:
    with self._context.activate() as cp:
        out = cp.asnumpy(self._logical())
    return np.asarray(out, dtype=self.dtype)


@buffer_control_path_manager(BMM, BMM._copy_from_numpy, MemorySpace.ACCELERATOR)
def copy_from_numpy_cuda(self, arr: np.ndarray) -> None:
    with self._context.activate() as cp:
        self._logical()[...] = cp.asarray(arr, dtype=self.dtype)
    self._context.synchronize()


@buffer_control_path_manager(BMM, BMM._copy_from, MemorySpace.ACCELERATOR)
def copy_from_cuda(self, src) -> None:
    if src.device == self.device:
        with self._context.activate():
            self._logical()[...] = src._logical()
        self._context.synchronize()
    else:
        # host -> device, or across CUDA devices through the host
        self._copy_from_numpy(src._to_numpy())
