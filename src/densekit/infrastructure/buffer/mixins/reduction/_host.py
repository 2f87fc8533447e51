"""
Host (NumPy) control paths of the reduction mixin.
"""

import math

import numpy as np

from ..._buffer_builder import buffer_control_path_manager
from .....domain.device._device import MemorySpace

from ._base import BufferMixinReduction as BMR


@buffer_control_path_manager(BMR, BMR._add_broadcast, MemorySpace.LOCAL)
def add_broadcast_host(self, vector, along_rows) -> None:
    v = vector._data
    if np.shares_memory(self._data, v):
        v = v.copy()
    v = v.reshape(-1, 1) if along_rows else v.reshape(1, -1)
    view = self._logical()
    view += v


@buffer_control_path_manager(BMR, BMR._reduce_into, MemorySpace.LOCAL)
def reduce_into_host(self, out, axis) -> None:
    out._data[...] = np.sum(self._logical(), axis=axis)


@buffer_control_path_manager(BMR, BMR._norm, MemorySpace.LOCAL)
def norm_host(self, order) -> float:
    x = self._data.astype(np.float64)
    if order == 1:
        return float(np.sum(np.abs(x)))
    return math.sqrt(float(np.dot(x, x)))
