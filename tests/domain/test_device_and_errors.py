import unittest

from src.densekit.domain.device._device import Device, MemorySpace
from src.densekit.domain._errors import (
    AllocationFailureError,
    DenseKitError,
    DeviceUnavailableError,
    MemorySpaceMismatchError,
    ShapeMismatchError,
    UnsupportedOperationError,
)
from src.densekit.domain._buffer import Layout


class TestDevice(unittest.TestCase):
    def test_cpu_device(self) -> None:
        d = Device("cpu")
        self.assertTrue(d.is_local())
        self.assertFalse(d.is_accelerator())
        self.assertIs(d.memory_space, MemorySpace.LOCAL)
        self.assertIsNone(d.index)
        self.assertEqual(str(d), "cpu")

    def test_cuda_device(self) -> None:
        d = Device("cuda:1")
        self.assertTrue(d.is_accelerator())
        self.assertEqual(d.index, 1)
        self.assertEqual(str(d), "cuda:1")
        self.assertEqual(Device.cuda(1), d)

    def test_invalid_device_strings(self) -> None:
        for bad in ("gpu", "cuda", "cuda:-1", "cuda:x", "CPU"):
            with self.subTest(device=bad):
                with self.assertRaises(ValueError):
                    Device(bad)

    def test_equality_distinguishes_ordinals(self) -> None:
        self.assertNotEqual(Device.cuda(0), Device.cuda(1))
        self.assertNotEqual(Device("cpu"), Device.cuda(0))
        self.assertEqual(hash(Device("cpu")), hash(Device("cpu")))
        self.assertEqual(len({Device.cuda(0), Device("cuda:0")}), 1)


class TestLayout(unittest.TestCase):
    def test_offsets(self) -> None:
        # 3 x 4 matrix, element (1, 2)
        self.assertEqual(Layout.ROW_MAJOR.offset(1, 2, 3, 4), 1 * 4 + 2)
        self.assertEqual(Layout.COLUMN_MAJOR.offset(1, 2, 3, 4), 1 + 2 * 3)


class TestErrors(unittest.TestCase):
    def test_hierarchy(self) -> None:
        self.assertTrue(issubclass(ShapeMismatchError, DenseKitError))
        self.assertTrue(issubclass(ShapeMismatchError, ValueError))
        self.assertTrue(issubclass(MemorySpaceMismatchError, UnsupportedOperationError))
        self.assertTrue(issubclass(DeviceUnavailableError, UnsupportedOperationError))
        self.assertTrue(issubclass(AllocationFailureError, MemoryError))
        self.assertTrue(issubclass(AllocationFailureError, DenseKitError))

    def test_shape_mismatch_carries_shapes(self) -> None:
        e = ShapeMismatchError("apply_binary", [(2, 3), (3, 2)], "detail here")
        self.assertEqual(e.op, "apply_binary")
        self.assertEqual(e.shapes, ((2, 3), (3, 2)))
        self.assertIn("(2, 3)", str(e))
        self.assertIn("detail here", str(e))

    def test_memory_space_mismatch_message(self) -> None:
        e = MemorySpaceMismatchError("copy", "cpu", "cuda:0")
        self.assertEqual(e.op, "copy")
        self.assertIn("cuda:0", str(e))

    def test_allocation_failure_fields(self) -> None:
        e = AllocationFailureError(1024, "cuda:0")
        self.assertEqual(e.nbytes, 1024)
        self.assertEqual(e.device, "cuda:0")


if __name__ == "__main__":
    unittest.main()
