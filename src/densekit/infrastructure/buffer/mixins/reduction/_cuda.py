"""
Accelerator (CUDA) control paths of the reduction mixin.

Broadcasts run the layout-aware kernels from `native_cuda/_kernels.py` over
the flat storage; norms use double-precision reduction kernels so both
backends accumulate with the same width.
"""

import numpy as np

from ..._buffer_builder import buffer_control_path_manager
from .....domain._buffer import Layout
from .....domain.device._device import MemorySpace
from ....native_cuda._kernels import broadcast_kernel, norm_kernel

from ._base import BufferMixinReduction as BMR


@buffer_control_path_manager(BMR, BMR._add_broadcast, MemorySpace.ACCELERATOR)
def add_broadcast_cuda(self, vector, along_rows) -> None:
    with self._context.activate():
        v = vector._data
        if v is self._data:
            v = v.copy()
        broadcast_kernel(bool(along_rows))(
            v,
            np.int64(self.height),
            np.int64(self.width),
            np.bool_(self.layout is Layout.ROW_MAJOR),
            self._data,
        )
    self._context.synchronize()


@buffer_control_path_manager(BMR, BMR._reduce_into, MemorySpace.ACCELERATOR)
def reduce_into_cuda(self, out, axis) -> None:
    with self._context.activate() as cp:
        out._data[...] = cp.sum(self._logical(), axis=axis)
    self._context.synchronize()


@buffer_control_path_manager(BMR, BMR._norm, MemorySpace.ACCELERATOR)
def norm_cuda(self, order) -> float:
    with self._context.activate():
        res = norm_kernel(int(order))(self._data)
        value = float(res.get())
    return value
