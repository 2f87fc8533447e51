"""
Accelerator (CUDA) control path of the rprop update.
"""

from ..._buffer_builder import buffer_control_path_manager
from .....domain.device._device import MemorySpace
from ....native_cuda._kernels import rprop_kernel

from ._base import BufferMixinTraining as BMT


@buffer_control_path_manager(BMT, BMT._rprop, MemorySpace.ACCELERATOR)
def rprop_cuda(self, gradient, prev_sign, step_size, eta_plus, eta_minus, step_max, step_min) -> None:
    with self._context.activate():
        rprop_kernel()(
            gradient._logical(),
            eta_plus,
            eta_minus,
            step_max,
            step_min,
            self._logical(),
            prev_sign._logical(),
            step_size._logical(),
        )
    self._context.synchronize()
