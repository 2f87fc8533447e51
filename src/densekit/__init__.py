"""
densekit: dense matrix and vector kernels on host and CUDA memory.

Buffers live either in host memory (NumPy) or in the memory of one CUDA
device (CuPy, through an `AcceleratorContext`). Every operation runs on
the memory space its operands live in and produces the same results on
both, within floating-point tolerance.

    import densekit as dk

    w = dk.DenseBuffer.from_numpy(weights)
    dk.apply_scalar(w, dk.ScalarFunctor.MULT, 0.5)

    if dk.cuda_available():
        with dk.AcceleratorContext() as ctx:
            wd = ctx.empty(*w.shape)
            dk.convert(wd, w)
"""

from .domain._buffer import Layout
from .domain._errors import (
    AllocationFailureError,
    DenseKitError,
    DeviceUnavailableError,
    MemorySpaceMismatchError,
    ShapeMismatchError,
    UnsupportedOperationError,
)
from .domain._functors import BinaryFunctor, ScalarFunctor
from .domain.device import Device, MemorySpace
from .infrastructure._context import AcceleratorContext
from .infrastructure.buffer import DenseBuffer
from .infrastructure.native_cuda import cuda_available
from .infrastructure.ops import (
    add_column_broadcast,
    add_row_broadcast,
    apply_binary,
    apply_scalar,
    convert,
    copy,
    fill,
    norm1,
    norm2,
    product,
    reduce_columns_to_row,
    reduce_rows_to_column,
    sequence,
)
from .infrastructure.optimizers import SGD, RProp, rprop, weight_decay

__all__ = [
    "DenseBuffer",
    "Layout",
    "Device",
    "MemorySpace",
    "AcceleratorContext",
    "ScalarFunctor",
    "BinaryFunctor",
    "apply_scalar",
    "apply_binary",
    "product",
    "add_column_broadcast",
    "add_row_broadcast",
    "reduce_rows_to_column",
    "reduce_columns_to_row",
    "norm1",
    "norm2",
    "rprop",
    "weight_decay",
    "RProp",
    "SGD",
    "convert",
    "copy",
    "fill",
    "sequence",
    "cuda_available",
    "DenseKitError",
    "ShapeMismatchError",
    "UnsupportedOperationError",
    "MemorySpaceMismatchError",
    "AllocationFailureError",
    "DeviceUnavailableError",
]
