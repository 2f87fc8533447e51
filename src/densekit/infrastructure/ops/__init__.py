"""
Public operation front-ends.

Each function validates its operands completely, then calls the matching
kernel method on the buffer, which dispatches on memory space.
"""

from .functor_ops import apply_binary, apply_scalar
from .linalg_ops import product
from .memory_ops import convert, copy, fill, sequence
from .reduction_ops import (
    add_column_broadcast,
    add_row_broadcast,
    norm1,
    norm2,
    reduce_columns_to_row,
    reduce_rows_to_column,
)

__all__ = [
    "apply_scalar",
    "apply_binary",
    "product",
    "add_column_broadcast",
    "add_row_broadcast",
    "reduce_rows_to_column",
    "reduce_columns_to_row",
    "norm1",
    "norm2",
    "fill",
    "sequence",
    "copy",
    "convert",
]
