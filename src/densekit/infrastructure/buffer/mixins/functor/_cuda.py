"""
Accelerator (CUDA) control paths of the functor mixin.

One `ElementwiseKernel` launch per call (see `native_cuda/_kernels.py`).
Binary kernels receive the logical 2-D views of both operands, so operands
with different layouts are paired by logical position.
"""

from ..._buffer_builder import buffer_control_path_manager
from .....domain.device._device import MemorySpace
from ....native_cuda._kernels import binary_functor_kernel, scalar_functor_kernel

from ._base import BufferMixinFunctor as BMF


@buffer_control_path_manager(BMF, BMF._apply_scalar, MemorySpace.ACCELERATOR)
def apply_scalar_cuda(self, functor, params) -> None:
    a, b = params
    with self._context.activate():
        x = self._data
        scalar_functor_kernel(functor)(a, b, x)
    self._context.synchronize()


@buffer_control_path_manager(BMF, BMF._apply_binary, MemorySpace.ACCELERATOR)
def apply_binary_cuda(self, src, functor, params) -> None:
    a, b = params
    with self._context.activate():
        y = src._logical()
        if src._data is self._data:
            y = y.copy()
        binary_functor_kernel(functor)(y, a, b, self._logical())
    self._context.synchronize()
