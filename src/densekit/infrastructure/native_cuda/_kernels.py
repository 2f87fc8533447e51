"""
CUDA kernel sources for the accelerator backend.

Every densekit operation on accelerator memory is one launch of a kernel
defined here. Kernels are built with `cupy.ElementwiseKernel` /
`cupy.ReductionKernel`, which compile the CUDA C body with NVRTC the first
time a dtype combination is launched and cache the binary afterwards.

Naming follows the ``densekit_cuda_<op>`` convention so compiled kernels are
easy to spot in profiler output.

Element-wise conventions
------------------------
- The destination is always an *output* parameter named ``x`` that is read
  and written in place.
- Scalar functor kernels take two call-time parameters ``a`` and ``b`` of the
  element type; functors with fewer parameters ignore them.
- Binary functor kernels additionally take the source element ``y``.
- NaN propagates the way it does in NumPy: ``SIGN`` keeps NaN, and ``MIN`` /
  ``MAX`` return NaN when either operand is NaN. ``v != v`` is the NaN test
  because the same expressions are instantiated for integer types.
"""

from __future__ import annotations

from functools import lru_cache

from ...domain._functors import BinaryFunctor, ScalarFunctor
from ._native_loader import load_cupy

_PREAMBLE = r"""
__device__ __forceinline__ float densekit_fast_exp(float v) { return __expf(v); }
__device__ __forceinline__ double densekit_fast_exp(double v) { return exp(v); }
"""

SCALAR_EXPRESSIONS = {
    ScalarFunctor.EXP: "x = densekit_fast_exp(x)",
    ScalarFunctor.EXACT_EXP: "x = (T)exp((double)x)",
    ScalarFunctor.LOG: "x = log(x)",
    ScalarFunctor.SIGN: "x = x != x ? x : (T)((x > (T)0) - (x < (T)0))",
    ScalarFunctor.SIGM: "x = (T)1 / ((T)1 + exp(-x))",
    ScalarFunctor.TANH: "x = tanh(x)",
    ScalarFunctor.SQUARE: "x = x * x",
    ScalarFunctor.SQRT: "x = sqrt(x)",
    ScalarFunctor.NEGATE: "x = -x",
    ScalarFunctor.ABS: "x = x < (T)0 ? (T)(-x) : x",
    ScalarFunctor.ADD: "x = x + a",
    ScalarFunctor.SUBTRACT: "x = x - a",
    ScalarFunctor.MULT: "x = x * a",
    ScalarFunctor.DIV: "x = x / a",
    ScalarFunctor.MIN: "x = a != a ? a : (a < x ? a : x)",
    ScalarFunctor.MAX: "x = a != a ? a : (a > x ? a : x)",
}

BINARY_EXPRESSIONS = {
    BinaryFunctor.ADD: "x = x + y",
    BinaryFunctor.SUBTRACT: "x = x - y",
    BinaryFunctor.MULT: "x = x * y",
    BinaryFunctor.DIV: "x = x / y",
    BinaryFunctor.COPY: "x = y",
    BinaryFunctor.MIN: "x = y != y ? y : (y < x ? y : x)",
    BinaryFunctor.MAX: "x = y != y ? y : (y > x ? y : x)",
    BinaryFunctor.AXPY: "x = x + a * y",
    BinaryFunctor.XPBY: "x = y + a * x",
    BinaryFunctor.AXPBY: "x = a * y + b * x",
}


@lru_cache(maxsize=None)
def scalar_functor_kernel(functor: ScalarFunctor):
    cp = load_cupy()
    return cp.ElementwiseKernel(
        "T a, T b",
        "T x",
        SCALAR_EXPRESSIONS[functor],
        f"densekit_cuda_sf_{functor.value[0]}",
        preamble=_PREAMBLE,
    )


@lru_cache(maxsize=None)
def binary_functor_kernel(functor: BinaryFunctor):
    cp = load_cupy()
    return cp.ElementwiseKernel(
        "T y, T a, T b",
        "T x",
        BINARY_EXPRESSIONS[functor],
        f"densekit_cuda_bf_{functor.value[0]}",
    )


@lru_cache(maxsize=None)
def broadcast_kernel(along_rows: bool):
    """
    Vector broadcast over the flat storage of a matrix.

    ``along_rows=True`` adds ``v[row]`` to every element of each row (column
    vector broadcast); ``False`` adds ``v[col]`` (row vector broadcast). The
    logical coordinate is recovered from the flat index ``i`` and the layout
    flag, so the kernel never depends on the physical stride order.
    """
    cp = load_cupy()
    if along_rows:
        body = "const long long k = row_major ? i / w : i % h; x = x + v[k];"
        name = "densekit_cuda_matrix_plus_col"
    else:
        body = "const long long k = row_major ? i % w : i / h; x = x + v[k];"
        name = "densekit_cuda_matrix_plus_row"
    return cp.ElementwiseKernel(
        "raw T v, int64 h, int64 w, bool row_major", "T x", body, name
    )


@lru_cache(maxsize=None)
def norm_kernel(order: int):
    """Reduction kernels accumulating in double precision."""
    cp = load_cupy()
    if order == 1:
        return cp.ReductionKernel(
            "T x", "float64 y", "fabs((double)x)", "a + b", "y = a", "0",
            "densekit_cuda_norm1",
        )
    return cp.ReductionKernel(
        "T x", "float64 y", "(double)x * (double)x", "a + b", "y = sqrt(a)", "0",
        "densekit_cuda_norm2",
    )


@lru_cache(maxsize=1)
def rprop_kernel():
    """
    Fused rprop update.

    ``prev`` holds the previous gradient sign as a small signed integer. The
    agreement of the current and previous sign selects growth, shrinkage
    (with the weight update suppressed) or a plain step. A NaN gradient
    counts as sign 0 for the agreement and the stored sign, but reaches the
    weight as NaN.
    """
    cp = load_cupy()
    body = r"""
    const int si = (int)(g > (T)0) - (int)(g < (T)0);
    const T sn = g != g ? g : (T)si;
    const int agree = si * (int)prev;
    if (agree > 0) {
        const T grown = step * eta_plus;
        step = grown < step_max ? grown : step_max;
    } else if (agree < 0) {
        const T shrunk = step * eta_minus;
        step = shrunk > step_min ? shrunk : step_min;
    }
    if (agree >= 0) {
        w = w - sn * step;
    }
    prev = (S)si;
    """
    return cp.ElementwiseKernel(
        "T g, T eta_plus, T eta_minus, T step_max, T step_min",
        "T w, S prev, T step",
        body,
        "densekit_cuda_rprop",
    )
