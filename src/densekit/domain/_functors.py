"""
Functor descriptors for element-wise kernels.

A functor is a tag that selects one element-wise operation plus the number of
numeric parameters it takes at call time. The tag set is the single extension
point shared by both backends: each backend keeps one table keyed by these
enums, and both tables must cover every member.

Scalar functors map ``x -> f(x, a, b)`` over one buffer. Binary functors map
``(dst, src) -> f(dst, src, a, b)`` and store into ``dst``.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

import numpy as np

from ._errors import UnsupportedOperationError


class ScalarFunctor(Enum):
    """
    Element-wise operations over one buffer.

    Each member's value is ``(name, arity, integer_ok)``:

    - ``arity``: number of numeric parameters expected at call time
    - ``integer_ok``: whether the functor is defined for signed-integer
      buffers
    """

    EXP = ("exp", 0, False)
    EXACT_EXP = ("exact_exp", 0, False)
    LOG = ("log", 0, False)
    SIGN = ("sign", 0, True)
    SIGM = ("sigm", 0, False)
    TANH = ("tanh", 0, False)
    SQUARE = ("square", 0, True)
    SQRT = ("sqrt", 0, False)
    NEGATE = ("negate", 0, True)
    ABS = ("abs", 0, True)
    ADD = ("add", 1, True)
    SUBTRACT = ("subtract", 1, True)
    MULT = ("mult", 1, True)
    DIV = ("div", 1, False)
    MIN = ("min", 1, True)
    MAX = ("max", 1, True)

    @property
    def arity(self) -> int:
        return self.value[1]

    @property
    def integer_ok(self) -> bool:
        return self.value[2]


class BinaryFunctor(Enum):
    """
    Element-wise operations over a destination and a source buffer.

    Semantics (``x`` is the destination element, ``y`` the source element)::

        ADD        x = x + y
        SUBTRACT   x = x - y
        MULT       x = x * y
        DIV        x = x / y
        COPY       x = y
        MIN        x = min(x, y)
        MAX        x = max(x, y)
        AXPY(a)    x = x + a * y
        XPBY(b)    x = y + b * x
        AXPBY(a,b) x = a * y + b * x
    """

    ADD = ("add", 0, True)
    SUBTRACT = ("subtract", 0, True)
    MULT = ("mult", 0, True)
    DIV = ("div", 0, False)
    COPY = ("copy", 0, True)
    MIN = ("min", 0, True)
    MAX = ("max", 0, True)
    AXPY = ("axpy", 1, True)
    XPBY = ("xpby", 1, True)
    AXPBY = ("axpby", 2, True)

    @property
    def arity(self) -> int:
        return self.value[1]

    @property
    def integer_ok(self) -> bool:
        return self.value[2]


def check_functor_call(
    op: str, functor: ScalarFunctor | BinaryFunctor, params: Sequence, dtype
) -> None:
    """
    Validate a functor call before any element is touched.

    Parameters
    ----------
    op : str
        Operation name used in error messages.
    functor : ScalarFunctor | BinaryFunctor
        Requested functor tag.
    params : Sequence
        Call-time parameters.
    dtype : numpy dtype-like
        Element type of the destination buffer.

    Raises
    ------
    TypeError
        If `functor` is not a functor tag of the expected family, or the
        number of parameters does not match the functor's arity.
    UnsupportedOperationError
        If the functor is undefined for integer buffers and `dtype` is an
        integer type.
    """
    expected = ScalarFunctor if op == "apply_scalar" else BinaryFunctor
    if not isinstance(functor, expected):
        raise TypeError(f"{op} expects a {expected.__name__}, got {functor!r}")
    if len(params) != functor.arity:
        raise TypeError(
            f"{op}: {functor.name} takes {functor.arity} parameter(s), "
            f"got {len(params)}"
        )
    if np.issubdtype(np.dtype(dtype), np.integer) and not functor.integer_ok:
        raise UnsupportedOperationError(
            op, f"{functor.name} is undefined for integer dtype {np.dtype(dtype)}"
        )
