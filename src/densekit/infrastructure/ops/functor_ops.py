"""
Functor engine front-ends: `apply_scalar` and `apply_binary`.
"""

from __future__ import annotations

from ...domain._functors import BinaryFunctor, ScalarFunctor, check_functor_call
from ._checks import (
    cast_params,
    require_buffers,
    require_same_device,
    require_same_dtype,
    require_same_shape,
)


def apply_scalar(buffer, functor: ScalarFunctor, *params) -> None:
    """
    Apply a scalar functor to every element of `buffer`, in place.

    Parameters
    ----------
    buffer : DenseBuffer
        Buffer to transform, in any memory space.
    functor : ScalarFunctor
        Operation to apply.
    *params : numbers
        Call-time parameters; their count must equal ``functor.arity``. They
        are cast to the buffer's element type before the kernel runs.

    Raises
    ------
    TypeError
        If `functor` is not a `ScalarFunctor` or the parameter count is wrong.
    UnsupportedOperationError
        If `functor` is undefined for the buffer's dtype (e.g. `EXP` on an
        integer buffer), or a parameter does not fit an integer element type.

    Examples
    --------
    >>> buf = DenseBuffer.vector(4)
    >>> buf.sequence()
    >>> apply_scalar(buf, ScalarFunctor.ADD, 1)
    >>> buf.to_numpy().ravel().tolist()
    [1.0, 2.0, 3.0, 4.0]
    """
    require_buffers("apply_scalar", buffer)
    check_functor_call("apply_scalar", functor, params, buffer.dtype)
    buffer._apply_scalar(functor, cast_params("apply_scalar", buffer.dtype, params))


def apply_binary(dst, src, functor: BinaryFunctor, *params) -> None:
    """
    Combine `src` into `dst` element by element, in place.

    ``dst[i] = f(dst[i], src[i], *params)`` for every logical position
    ``i``; `src` is read-only.

    Raises
    ------
    ShapeMismatchError
        If the shapes differ. Nothing is written.
    MemorySpaceMismatchError
        If the buffers live on different devices.
    UnsupportedOperationError
        If the dtypes differ or the functor is undefined for the dtype.
    TypeError
        If `functor` is not a `BinaryFunctor` or the parameter count is wrong.
    """
    require_buffers("apply_binary", dst, src)
    check_functor_call("apply_binary", functor, params, dst.dtype)
    require_same_shape("apply_binary", dst, src)
    require_same_device("apply_binary", dst, src)
    require_same_dtype("apply_binary", dst, src)
    dst._apply_binary(src, functor, cast_params("apply_binary", dst.dtype, params))
