"""
Linear-algebra front-end: `product`.
"""

from __future__ import annotations

from typing import Union
import warnings

import numpy as np

from ...domain._errors import ShapeMismatchError
from ._checks import (
    cast_params,
    require_buffers,
    require_same_device,
    require_same_dtype,
)

# Inner dimension above which float32 accumulation may drift past the
# cross-backend tolerance.
FLOAT32_ACCUMULATION_LIMIT = 4096

TransposeFlag = Union[bool, str]


def _transpose_flag(name: str, flag: TransposeFlag) -> bool:
    if isinstance(flag, (bool, np.bool_)):
        return bool(flag)
    if isinstance(flag, str) and flag.lower() in ("n", "t"):
        return flag.lower() == "t"
    raise ValueError(f"{name} must be a bool or one of 'n'/'t', got {flag!r}")


def product(
    dst,
    lhs,
    rhs,
    transpose_lhs: TransposeFlag = False,
    transpose_rhs: TransposeFlag = False,
    *,
    alpha=1.0,
    beta=0.0,
) -> None:
    """
    Dense matrix product into a pre-allocated result.

    Computes ``dst = alpha * op(lhs) @ op(rhs) + beta * dst`` where ``op`` is
    the identity or the transpose, selected per operand. With the default
    ``alpha=1, beta=0`` this is ``dst = op(lhs) @ op(rhs)``.

    Parameters
    ----------
    dst : DenseBuffer
        Result buffer; its shape must be ``(rows(op(lhs)), cols(op(rhs)))``.
    lhs, rhs : DenseBuffer
        Operands, on the same device and with the same dtype as `dst`.
    transpose_lhs, transpose_rhs : bool or {'n', 't'}
        Whether to read the operand transposed.
    alpha, beta : number, optional
        Scale factors, cast to the element type.

    Raises
    ------
    ShapeMismatchError
        If inner dimensions disagree or `dst` has the wrong shape.
    MemorySpaceMismatchError
        If operands live on different devices.
    UnsupportedOperationError
        If operand dtypes differ, or `alpha` / `beta` do not fit an integer
        element type.

    Warns
    -----
    RuntimeWarning
        For float32 operands whose inner dimension exceeds 4096, where host
        and accelerator results may differ by more than 1e-4 relative.
    """
    require_buffers("product", dst, lhs, rhs)
    tl = _transpose_flag("transpose_lhs", transpose_lhs)
    tr = _transpose_flag("transpose_rhs", transpose_rhs)

    m, k = (lhs.width, lhs.height) if tl else (lhs.height, lhs.width)
    k2, n = (rhs.width, rhs.height) if tr else (rhs.height, rhs.width)
    if k != k2:
        raise ShapeMismatchError(
            "product",
            [lhs.shape, rhs.shape],
            f"inner dimensions {k} and {k2} differ after transpose flags",
        )
    if dst.shape != (m, n):
        raise ShapeMismatchError(
            "product",
            [dst.shape, lhs.shape, rhs.shape],
            f"result must have shape {(m, n)}",
        )
    require_same_device("product", dst, lhs, rhs)
    require_same_dtype("product", dst, lhs, rhs)

    if np.dtype(dst.dtype) == np.float32 and k > FLOAT32_ACCUMULATION_LIMIT:
        warnings.warn(
            f"float32 product accumulates over {k} terms; cross-backend "
            "agreement is only guaranteed up to "
            f"{FLOAT32_ACCUMULATION_LIMIT}. Use float64 for tighter results.",
            RuntimeWarning,
            stacklevel=2,
        )

    a, b = cast_params("product", dst.dtype, (alpha, beta))
    dst._product(lhs, rhs, tl, tr, a, b)
