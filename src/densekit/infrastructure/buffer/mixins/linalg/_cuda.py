"""
Accelerator (cuBLAS) control path of the matrix product.

CuPy routes float matmuls to cuBLAS GEMM; transposed operands are passed as
transposed views, which cuBLAS consumes through its transpose flags.
"""

from ..._buffer_builder import buffer_control_path_manager
from .....domain.device._device import MemorySpace

from ._base import BufferMixinLinalg as BML


@buffer_control_path_manager(BML, BML._product, MemorySpace.ACCELERATOR)
def product_cuda(self, lhs, rhs, transpose_lhs, transpose_rhs, alpha, beta) -> None:
    with self._context.activate() as cp:
        a = lhs._logical().T if transpose_lhs else lhs._logical()
        b = rhs._logical().T if transpose_rhs else rhs._logical()
        res = cp.matmul(a, b)
        if alpha != 1:
            res *= alpha

        out = self._logical()
        if beta == 0:
            out[...] = res
        else:
            out *= beta
            out += res
    self._context.synchronize()
