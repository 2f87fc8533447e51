"""
Host (NumPy/BLAS) control path of the matrix product.
"""

import numpy as np

from ..._buffer_builder import buffer_control_path_manager
from .....domain.device._device import MemorySpace

from ._base import BufferMixinLinalg as BML


@buffer_control_path_manager(BML, BML._product, MemorySpace.LOCAL)
def product_host(self, lhs, rhs, transpose_lhs, transpose_rhs, alpha, beta) -> None:
    a = lhs._logical().T if transpose_lhs else lhs._logical()
    b = rhs._logical().T if transpose_rhs else rhs._logical()
    res = np.matmul(a, b)
    if alpha != 1:
        res *= alpha

    out = self._logical()
    if beta == 0:
        out[...] = res
    else:
        out *= beta
        out += res
