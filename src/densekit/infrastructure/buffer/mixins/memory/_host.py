"""
Host (NumPy) control paths of the memory mixin.
"""

import numpy as np

from ..._buffer_builder import buffer_control_path_manager
from .....domain.device._device import MemorySpace

from ._base import BufferMixinMemory as BMM


@buffer_control_path_manager(BMM, BMM._fill, MemorySpace.LOCAL)
def fill_host(self, value) -> None:
    self._data.fill(self.dtype.type(value))


@buffer_control_path_manager(BMM, BMM._sequence, MemorySpace.LOCAL)
def sequence_host(self) -> None:
    self._data[...] = np.arange(self._data.size, dtype=self.dtype)


@buffer_control_path_manager(BMM, BMM._to_numpy, MemorySpace.LOCAL)
def to_numpy_host(self) -> np.ndarray:
    return np.array(self._logical(), copy=True)


@buffer_control_path_manager(BMM, BMM._copy_from_numpy, MemorySpace.LOCAL)
def copy_from_numpy_host(self, arr: np.ndarray) -> None:
    self._logical()[...] = arr


@buffer_control_path_manager(BMM, BMM._copy_from, MemorySpace.LOCAL)
def copy_from_host(self, src) -> None:
    if src.device.is_local():
        self._logical()[...] = src._logical()
    else:
        # device -> host download; exact for every supported dtype
        self._logical()[...] = src._to_numpy()
