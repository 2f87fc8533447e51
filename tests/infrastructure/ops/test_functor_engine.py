# tests/infrastructure/ops/test_functor_engine.py
"""
Host tests for apply_scalar / apply_binary.

Covers the functor tables on NumPy buffers, call-time validation, and the
all-or-nothing guarantee (a rejected call leaves every operand untouched).
"""

import unittest

import numpy as np

from src.densekit.domain._buffer import Layout
from src.densekit.domain._errors import ShapeMismatchError, UnsupportedOperationError
from src.densekit.domain._functors import BinaryFunctor, ScalarFunctor
from src.densekit.infrastructure.buffer._dense_buffer import DenseBuffer
from src.densekit.infrastructure.ops.functor_ops import apply_binary, apply_scalar


def _seq(h, w, dtype=np.float32, layout=Layout.COLUMN_MAJOR) -> DenseBuffer:
    b = DenseBuffer(h, w, dtype=dtype, layout=layout)
    b.sequence()
    return b


class TestApplyScalarHost(unittest.TestCase):
    def test_add_after_sequence(self) -> None:
        n = 256
        b = _seq(n, n)
        apply_scalar(b, ScalarFunctor.ADD, 1)
        flat = b._data
        np.testing.assert_array_equal(flat, np.arange(n * n, dtype=np.float32) + 1)

    def test_mult(self) -> None:
        b = _seq(16, 16)
        apply_scalar(b, ScalarFunctor.MULT, 2)
        np.testing.assert_array_equal(b._data, 2 * np.arange(256, dtype=np.float32))

    def test_exp_close_to_exact_exp(self) -> None:
        x = np.linspace(-80.0, 80.0, 400, dtype=np.float32).reshape(20, 20)
        fast = DenseBuffer.from_numpy(x)
        exact = DenseBuffer.from_numpy(x)
        apply_scalar(fast, ScalarFunctor.EXP)
        apply_scalar(exact, ScalarFunctor.EXACT_EXP)
        np.testing.assert_allclose(fast.to_numpy(), exact.to_numpy(), rtol=1e-5)
        np.testing.assert_allclose(exact.to_numpy(), np.exp(x.astype(np.float64)), rtol=1e-6)

    def test_elementwise_functors_match_numpy(self) -> None:
        rng = np.random.default_rng(0)
        x = rng.uniform(0.1, 2.0, size=(8, 5))
        cases = {
            ScalarFunctor.LOG: np.log(x),
            ScalarFunctor.SIGM: 1.0 / (1.0 + np.exp(-x)),
            ScalarFunctor.TANH: np.tanh(x),
            ScalarFunctor.SQUARE: x * x,
            ScalarFunctor.SQRT: np.sqrt(x),
            ScalarFunctor.NEGATE: -x,
            ScalarFunctor.SIGN: np.sign(x),
            ScalarFunctor.ABS: np.abs(x),
        }
        for functor, expected in cases.items():
            with self.subTest(functor=functor):
                b = DenseBuffer.from_numpy(x)
                apply_scalar(b, functor)
                np.testing.assert_allclose(b.to_numpy(), expected, rtol=1e-12)

    def test_parametrised_functors(self) -> None:
        x = np.array([[-2.0, -0.5], [0.5, 2.0]])
        cases = [
            (ScalarFunctor.SUBTRACT, 1.0, x - 1.0),
            (ScalarFunctor.DIV, 4.0, x / 4.0),
            (ScalarFunctor.MIN, 0.0, np.minimum(x, 0.0)),
            (ScalarFunctor.MAX, 0.0, np.maximum(x, 0.0)),
        ]
        for functor, p, expected in cases:
            with self.subTest(functor=functor):
                b = DenseBuffer.from_numpy(x)
                apply_scalar(b, functor, p)
                np.testing.assert_allclose(b.to_numpy(), expected)

    def test_integer_buffer(self) -> None:
        b = DenseBuffer.from_numpy(np.array([[-3, 1], [2, -4]], dtype=np.int32))
        apply_scalar(b, ScalarFunctor.ABS)
        apply_scalar(b, ScalarFunctor.ADD, 1)
        np.testing.assert_array_equal(b.to_numpy(), np.array([[4, 2], [3, 5]], dtype=np.int32))

    def test_exp_on_integer_is_rejected_without_writing(self) -> None:
        b = _seq(3, 3, dtype=np.int32)
        before = b.to_numpy()
        with self.assertRaises(UnsupportedOperationError):
            apply_scalar(b, ScalarFunctor.EXP)
        np.testing.assert_array_equal(b.to_numpy(), before)

    def test_wrong_arity(self) -> None:
        b = _seq(2, 2)
        with self.assertRaises(TypeError):
            apply_scalar(b, ScalarFunctor.ADD)
        with self.assertRaises(TypeError):
            apply_scalar(b, ScalarFunctor.EXP, 1.0)

    def test_non_finite_results_follow_ieee(self) -> None:
        b = DenseBuffer.from_numpy(np.array([[0.0, -1.0]], dtype=np.float32))
        apply_scalar(b, ScalarFunctor.LOG)
        out = b.to_numpy()
        self.assertTrue(np.isneginf(out[0, 0]))
        self.assertTrue(np.isnan(out[0, 1]))

    def test_nan_propagates_through_sign_min_max(self) -> None:
        x = np.array([[np.nan, -2.0, 3.0]], dtype=np.float32)
        b = DenseBuffer.from_numpy(x)
        apply_scalar(b, ScalarFunctor.SIGN)
        np.testing.assert_array_equal(b.to_numpy(), [[np.nan, -1.0, 1.0]])

        for functor in (ScalarFunctor.MIN, ScalarFunctor.MAX):
            with self.subTest(functor=functor):
                b = DenseBuffer.from_numpy(x)
                apply_scalar(b, functor, 0.0)
                self.assertTrue(np.isnan(b[0, 0]))
                b = DenseBuffer.from_numpy(x)
                apply_scalar(b, functor, np.nan)
                self.assertTrue(np.all(np.isnan(b.to_numpy())))

    def test_out_of_range_integer_parameter_is_rejected(self) -> None:
        b = _seq(2, 2, dtype=np.int8)
        before = b.to_numpy()
        for p in (200, -129, 1e10, np.inf, np.nan):
            with self.subTest(p=p):
                with self.assertRaises(UnsupportedOperationError):
                    apply_scalar(b, ScalarFunctor.ADD, p)
                np.testing.assert_array_equal(b.to_numpy(), before)

    def test_integer_parameter_at_range_limits(self) -> None:
        b = DenseBuffer.zeros(1, 2, dtype=np.int8)
        apply_scalar(b, ScalarFunctor.ADD, 127)
        np.testing.assert_array_equal(b.to_numpy(), np.full((1, 2), 127, dtype=np.int8))
        apply_scalar(b, ScalarFunctor.SUBTRACT, 127.0)
        np.testing.assert_array_equal(b.to_numpy(), np.zeros((1, 2), dtype=np.int8))


class TestApplyBinaryHost(unittest.TestCase):
    def test_add(self) -> None:
        n = 64
        dst = _seq(n, n)
        src = _seq(n, n)
        apply_binary(dst, src, BinaryFunctor.ADD)
        np.testing.assert_array_equal(dst._data, 2 * np.arange(n * n, dtype=np.float32))

    def test_axpy(self) -> None:
        dst = _seq(8, 8)
        src = _seq(8, 8)
        apply_binary(dst, src, BinaryFunctor.AXPY, 0.5)
        base = np.arange(64, dtype=np.float32)
        np.testing.assert_allclose(dst._data, base + 0.5 * base)

    def test_axpby(self) -> None:
        dst = _seq(8, 8)
        src = DenseBuffer.zeros(8, 8)
        apply_scalar(src, ScalarFunctor.ADD, 3)
        apply_binary(dst, src, BinaryFunctor.AXPBY, 2.0, 0.25)
        base = np.arange(64, dtype=np.float32)
        np.testing.assert_allclose(dst._data, 2.0 * 3.0 + 0.25 * base)

    def test_xpby(self) -> None:
        dst = _seq(4, 4)
        src = DenseBuffer.zeros(4, 4)
        apply_scalar(src, ScalarFunctor.ADD, 1)
        apply_binary(dst, src, BinaryFunctor.XPBY, 3.0)
        np.testing.assert_allclose(dst._data, 1.0 + 3.0 * np.arange(16, dtype=np.float32))

    def test_copy_min_max_mult_div(self) -> None:
        a = np.array([[1.0, 4.0], [9.0, -2.0]])
        b = np.array([[2.0, 2.0], [3.0, 1.0]])
        cases = {
            BinaryFunctor.COPY: b,
            BinaryFunctor.MIN: np.minimum(a, b),
            BinaryFunctor.MAX: np.maximum(a, b),
            BinaryFunctor.MULT: a * b,
            BinaryFunctor.DIV: a / b,
            BinaryFunctor.SUBTRACT: a - b,
        }
        for functor, expected in cases.items():
            with self.subTest(functor=functor):
                dst = DenseBuffer.from_numpy(a)
                apply_binary(dst, DenseBuffer.from_numpy(b), functor)
                np.testing.assert_allclose(dst.to_numpy(), expected)

    def test_operands_pair_by_logical_position_across_layouts(self) -> None:
        a = np.arange(6, dtype=np.float64).reshape(2, 3)
        dst = DenseBuffer.from_numpy(a, layout=Layout.COLUMN_MAJOR)
        src = DenseBuffer.from_numpy(10 * a, layout=Layout.ROW_MAJOR)
        apply_binary(dst, src, BinaryFunctor.ADD)
        np.testing.assert_array_equal(dst.to_numpy(), 11 * a)

    def test_aliased_operands(self) -> None:
        b = _seq(4, 4)
        apply_binary(b, b, BinaryFunctor.ADD)
        np.testing.assert_array_equal(b._data, 2 * np.arange(16, dtype=np.float32))

    def test_shape_mismatch_leaves_destination_unmodified(self) -> None:
        dst = _seq(4, 4)
        before = dst.to_numpy()
        with self.assertRaises(ShapeMismatchError):
            apply_binary(dst, _seq(4, 5), BinaryFunctor.ADD)
        np.testing.assert_array_equal(dst.to_numpy(), before)

    def test_transposed_shape_is_a_mismatch(self) -> None:
        with self.assertRaises(ShapeMismatchError):
            apply_binary(_seq(2, 3), _seq(3, 2), BinaryFunctor.ADD)

    def test_dtype_mismatch(self) -> None:
        with self.assertRaises(UnsupportedOperationError):
            apply_binary(_seq(2, 2), _seq(2, 2, dtype=np.float64), BinaryFunctor.ADD)

    def test_integer_division_rejected(self) -> None:
        with self.assertRaises(UnsupportedOperationError):
            apply_binary(_seq(2, 2, dtype=np.int32), _seq(2, 2, dtype=np.int32), BinaryFunctor.DIV)

    def test_nan_in_either_operand_propagates_through_min_max(self) -> None:
        a = np.array([[np.nan, 1.0, 2.0]])
        b = np.array([[1.0, np.nan, 0.0]])
        for functor, tail in ((BinaryFunctor.MIN, 0.0), (BinaryFunctor.MAX, 2.0)):
            with self.subTest(functor=functor):
                dst = DenseBuffer.from_numpy(a)
                apply_binary(dst, DenseBuffer.from_numpy(b), functor)
                np.testing.assert_array_equal(dst.to_numpy(), [[np.nan, np.nan, tail]])

    def test_out_of_range_integer_parameter_is_rejected(self) -> None:
        dst = _seq(2, 2, dtype=np.int16)
        before = dst.to_numpy()
        with self.assertRaises(UnsupportedOperationError):
            apply_binary(dst, _seq(2, 2, dtype=np.int16), BinaryFunctor.AXPY, 40000)
        np.testing.assert_array_equal(dst.to_numpy(), before)

    def test_non_buffer_operand(self) -> None:
        with self.assertRaises(TypeError):
            apply_binary(_seq(2, 2), np.zeros((2, 2)), BinaryFunctor.ADD)


if __name__ == "__main__":
    unittest.main()
