import unittest

import numpy as np

from src.densekit.domain._buffer import IDenseBuffer, Layout
from src.densekit.domain._errors import ShapeMismatchError
from src.densekit.domain.device._device import Device, MemorySpace
from src.densekit.infrastructure.buffer._dense_buffer import DenseBuffer


class TestDenseBufferConstruction(unittest.TestCase):
    def test_defaults(self) -> None:
        b = DenseBuffer(3, 4)
        self.assertEqual(b.shape, (3, 4))
        self.assertEqual(b.size, 12)
        self.assertEqual(b.dtype, np.float32)
        self.assertIs(b.layout, Layout.COLUMN_MAJOR)
        self.assertEqual(b.device, Device("cpu"))
        self.assertIs(b._state, MemorySpace.LOCAL)
        self.assertIsNone(b.context)
        self.assertIsInstance(b, IDenseBuffer)

    def test_invalid_dimensions(self) -> None:
        with self.assertRaises(ValueError):
            DenseBuffer(0, 4)
        with self.assertRaises(ValueError):
            DenseBuffer(3, -1)
        with self.assertRaises(TypeError):
            DenseBuffer(2.5, 4)
        with self.assertRaises(TypeError):
            DenseBuffer(True, 4)

    def test_invalid_dtype_and_layout(self) -> None:
        with self.assertRaises(ValueError):
            DenseBuffer(2, 2, dtype=np.complex64)
        with self.assertRaises(ValueError):
            DenseBuffer(2, 2, dtype=np.uint8)
        with self.assertRaises(TypeError):
            DenseBuffer(2, 2, layout="C")

    def test_vector_factory(self) -> None:
        v = DenseBuffer.vector(5)
        self.assertEqual(v.shape, (5, 1))
        self.assertTrue(v.is_vector)
        self.assertEqual(v.length, 5)

    def test_length_of_matrix_raises(self) -> None:
        with self.assertRaises(ShapeMismatchError):
            _ = DenseBuffer(2, 3).length

    def test_zeros(self) -> None:
        b = DenseBuffer.zeros(2, 3, dtype=np.int16)
        np.testing.assert_array_equal(b.to_numpy(), np.zeros((2, 3), dtype=np.int16))

    def test_from_numpy_roundtrip_both_layouts(self) -> None:
        a = np.arange(12, dtype=np.float64).reshape(3, 4)
        for layout in Layout:
            with self.subTest(layout=layout):
                b = DenseBuffer.from_numpy(a, layout=layout)
                self.assertEqual(b.dtype, np.float64)
                np.testing.assert_array_equal(b.to_numpy(), a)

    def test_from_numpy_1d_becomes_column(self) -> None:
        b = DenseBuffer.from_numpy(np.array([1.0, 2.0, 3.0], dtype=np.float32))
        self.assertEqual(b.shape, (3, 1))

    def test_from_numpy_rejects_3d(self) -> None:
        with self.assertRaises(ValueError):
            DenseBuffer.from_numpy(np.zeros((2, 2, 2)))


class TestDenseBufferLayout(unittest.TestCase):
    def test_sequence_is_physical_order(self) -> None:
        cm = DenseBuffer(2, 3, layout=Layout.COLUMN_MAJOR)
        cm.sequence()
        np.testing.assert_array_equal(
            cm.to_numpy(), np.array([[0, 2, 4], [1, 3, 5]], dtype=np.float32)
        )

        rm = DenseBuffer(2, 3, layout=Layout.ROW_MAJOR)
        rm.sequence()
        np.testing.assert_array_equal(
            rm.to_numpy(), np.array([[0, 1, 2], [3, 4, 5]], dtype=np.float32)
        )

    def test_getitem_matches_layout_offset(self) -> None:
        for layout in Layout:
            b = DenseBuffer(3, 4, dtype=np.int32, layout=layout)
            b.sequence()
            for i in range(3):
                for j in range(4):
                    self.assertEqual(b[i, j], layout.offset(i, j, 3, 4))

    def test_vector_single_index(self) -> None:
        v = DenseBuffer.from_numpy(np.array([4, 5, 6], dtype=np.int64))
        self.assertEqual(v[1], 5)
        row = DenseBuffer.from_numpy(np.array([[7, 8, 9]], dtype=np.int64))
        self.assertEqual(row[2], 9)

    def test_getitem_errors(self) -> None:
        b = DenseBuffer(2, 2)
        with self.assertRaises(TypeError):
            _ = b[0]
        with self.assertRaises(IndexError):
            _ = b[2, 0]

    def test_copy_from_numpy_shape_mismatch(self) -> None:
        b = DenseBuffer(2, 3)
        with self.assertRaises(ShapeMismatchError):
            b.copy_from_numpy(np.zeros((3, 2)))

    def test_copy_from_numpy_flat_for_vector(self) -> None:
        v = DenseBuffer.vector(3)
        v.copy_from_numpy(np.array([1, 2, 3]))
        np.testing.assert_array_equal(v.to_numpy().ravel(), np.array([1, 2, 3], dtype=np.float32))

    def test_fill_casts_to_dtype(self) -> None:
        b = DenseBuffer(2, 2, dtype=np.int8)
        b.fill(3)
        np.testing.assert_array_equal(b.to_numpy(), np.full((2, 2), 3, dtype=np.int8))

    def test_to_numpy_is_a_copy(self) -> None:
        b = DenseBuffer.zeros(2, 2)
        out = b.to_numpy()
        out[0, 0] = 42
        self.assertEqual(b[0, 0], 0.0)


if __name__ == "__main__":
    unittest.main()
