"""
Host (NumPy) control paths of the functor mixin.

Each functor maps to one in-place NumPy expression evaluated in the element
type. `EXACT_EXP` is the only functor that widens: it evaluates in float64
and rounds back, which is what makes it the reference for `EXP`.
"""

import numpy as np

from ..._buffer_builder import buffer_control_path_manager
from .....domain._functors import BinaryFunctor, ScalarFunctor
from .....domain.device._device import MemorySpace

from ._base import BufferMixinFunctor as BMF


def _sigm(x, a, b):
    np.negative(x, out=x)
    np.exp(x, out=x)
    x += x.dtype.type(1)
    np.reciprocal(x, out=x)


def _exact_exp(x, a, b):
    x[...] = np.exp(x.astype(np.float64))


SCALAR_OPS = {
    ScalarFunctor.EXP: lambda x, a, b: np.exp(x, out=x),
    ScalarFunctor.EXACT_EXP: _exact_exp,
    ScalarFunctor.LOG: lambda x, a, b: np.log(x, out=x),
    ScalarFunctor.SIGN: lambda x, a, b: np.sign(x, out=x),
    ScalarFunctor.SIGM: _sigm,
    ScalarFunctor.TANH: lambda x, a, b: np.tanh(x, out=x),
    ScalarFunctor.SQUARE: lambda x, a, b: np.multiply(x, x, out=x),
    ScalarFunctor.SQRT: lambda x, a, b: np.sqrt(x, out=x),
    ScalarFunctor.NEGATE: lambda x, a, b: np.negative(x, out=x),
    ScalarFunctor.ABS: lambda x, a, b: np.abs(x, out=x),
    ScalarFunctor.ADD: lambda x, a, b: np.add(x, a, out=x),
    ScalarFunctor.SUBTRACT: lambda x, a, b: np.subtract(x, a, out=x),
    ScalarFunctor.MULT: lambda x, a, b: np.multiply(x, a, out=x),
    ScalarFunctor.DIV: lambda x, a, b: np.divide(x, a, out=x),
    ScalarFunctor.MIN: lambda x, a, b: np.minimum(x, a, out=x),
    ScalarFunctor.MAX: lambda x, a, b: np.maximum(x, a, out=x),
}


def _copy(x, y, a, b):
    x[...] = y


def _axpy(x, y, a, b):
    x += a * y


def _xpby(x, y, a, b):
    x *= a
    x += y


def _axpby(x, y, a, b):
    x *= b
    x += a * y


BINARY_OPS = {
    BinaryFunctor.ADD: lambda x, y, a, b: np.add(x, y, out=x),
    BinaryFunctor.SUBTRACT: lambda x, y, a, b: np.subtract(x, y, out=x),
    BinaryFunctor.MULT: lambda x, y, a, b: np.multiply(x, y, out=x),
    BinaryFunctor.DIV: lambda x, y, a, b: np.divide(x, y, out=x),
    BinaryFunctor.COPY: _copy,
    BinaryFunctor.MIN: lambda x, y, a, b: np.minimum(x, y, out=x),
    BinaryFunctor.MAX: lambda x, y, a, b: np.maximum(x, y, out=x),
    BinaryFunctor.AXPY: _axpy,
    BinaryFunctor.XPBY: _xpby,
    BinaryFunctor.AXPBY: _axpby,
}


@buffer_control_path_manager(BMF, BMF._apply_scalar, MemorySpace.LOCAL)
def apply_scalar_host(self, functor, params) -> None:
    a, b = params
    with np.errstate(all="ignore"):
        SCALAR_OPS[functor](self._data, a, b)


@buffer_control_path_manager(BMF, BMF._apply_binary, MemorySpace.LOCAL)
def apply_binary_host(self, src, functor, params) -> None:
    a, b = params
    y = src._logical()
    if np.shares_memory(self._data, src._data):
        y = y.copy()
    with np.errstate(all="ignore"):
        BINARY_OPS[functor](self._logical(), y, a, b)
