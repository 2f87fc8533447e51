"""
Host (NumPy) control path of the rprop update.

A NaN gradient counts as sign 0 for the step-size rule and the stored sign,
and reaches the weight as NaN.
"""

import numpy as np

from ..._buffer_builder import buffer_control_path_manager
from .....domain.device._device import MemorySpace

from ._base import BufferMixinTraining as BMT


@buffer_control_path_manager(BMT, BMT._rprop, MemorySpace.LOCAL)
def rprop_host(self, gradient, prev_sign, step_size, eta_plus, eta_minus, step_max, step_min) -> None:
    w = self._logical()
    step = step_size._logical()
    prev = prev_sign._logical()
    g = gradient._logical()

    si = (g > 0).astype(np.int32) - (g < 0).astype(np.int32)
    sn = np.sign(g)
    agree = si * prev.astype(np.int32)
    grow = agree > 0
    shrink = agree < 0

    step[...] = np.where(
        grow,
        np.minimum(step * eta_plus, step_max),
        np.where(shrink, np.maximum(step * eta_minus, step_min), step),
    )
    w -= np.where(shrink, sn.dtype.type(0), sn * step)
    prev[...] = si.astype(prev.dtype)
