"""
Argument validation shared by the operation front-ends.

Every check here runs before any kernel launch, which is what makes densekit
operations all-or-nothing: a call either passes every check and runs to
completion, or raises without touching any buffer.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ...domain._buffer import IDenseBuffer
from ...domain._errors import (
    MemorySpaceMismatchError,
    ShapeMismatchError,
    UnsupportedOperationError,
)


def require_buffers(op: str, *buffers) -> None:
    """Raise `TypeError` unless every argument is a dense buffer."""
    for b in buffers:
        if not isinstance(b, IDenseBuffer):
            raise TypeError(f"{op} expects DenseBuffer operands, got {type(b).__name__}")


def require_same_device(op: str, *buffers) -> None:
    """Raise `MemorySpaceMismatchError` unless all buffers share one device."""
    first = buffers[0]
    for b in buffers[1:]:
        if b.device != first.device:
            raise MemorySpaceMismatchError(op, str(first.device), str(b.device))


def require_same_shape(op: str, *buffers) -> None:
    """Raise `ShapeMismatchError` unless all buffers share one shape."""
    shape = buffers[0].shape
    if any(b.shape != shape for b in buffers[1:]):
        raise ShapeMismatchError(op, [b.shape for b in buffers])


def require_same_dtype(op: str, *buffers) -> None:
    """Raise `UnsupportedOperationError` unless all buffers share one dtype."""
    dt = np.dtype(buffers[0].dtype)
    for b in buffers[1:]:
        if np.dtype(b.dtype) != dt:
            raise UnsupportedOperationError(
                op, f"mixed element types {dt} and {np.dtype(b.dtype)}"
            )


def require_vector(op: str, vector, length: int, matrix_shape: tuple, what: str) -> None:
    """Raise `ShapeMismatchError` unless `vector` is a vector of `length` elements."""
    if not vector.is_vector or vector.height * vector.width != length:
        raise ShapeMismatchError(
            op,
            [matrix_shape, vector.shape],
            f"expected a vector of {length} elements matching the matrix {what}",
        )


def cast_params(op: str, dtype, params: Sequence) -> tuple:
    """
    Cast call-time parameters to the element type and pad them to two.

    Kernels always receive exactly two parameters; functors with fewer
    ignore the trailing zeros. On integer buffers a parameter must be finite
    and inside the element type's range, otherwise `UnsupportedOperationError`
    is raised instead of letting the cast overflow or wrap.
    """
    dt = np.dtype(dtype)
    if np.issubdtype(dt, np.integer):
        info = np.iinfo(dt)
        for p in params:
            if not info.min <= p <= info.max:
                raise UnsupportedOperationError(
                    op, f"parameter {p!r} is not representable as {dt}"
                )
    t = dt.type
    cast = [t(p) for p in params]
    while len(cast) < 2:
        cast.append(t(0))
    return tuple(cast)
