import os
import unittest
from unittest import mock

from src.densekit.domain._errors import DeviceUnavailableError
from src.densekit.infrastructure.native_cuda._native_loader import (
    cuda_available,
    default_device_index,
    load_cupy,
)


class TestNativeLoader(unittest.TestCase):
    def test_default_device_index_env(self) -> None:
        with mock.patch.dict(os.environ, {"DENSEKIT_CUDA_DEVICE": "3"}):
            self.assertEqual(default_device_index(), 3)
        with mock.patch.dict(os.environ, {"DENSEKIT_CUDA_DEVICE": " "}):
            self.assertEqual(default_device_index(), 0)

    def test_default_device_index_unset(self) -> None:
        env = {k: v for k, v in os.environ.items() if k != "DENSEKIT_CUDA_DEVICE"}
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertEqual(default_device_index(), 0)

    def test_default_device_index_invalid(self) -> None:
        with mock.patch.dict(os.environ, {"DENSEKIT_CUDA_DEVICE": "cuda:0"}):
            with self.assertRaises(ValueError):
                default_device_index()

    def test_cuda_available_agrees_with_loader(self) -> None:
        available = cuda_available()
        self.assertIsInstance(available, bool)
        if available:
            self.assertIs(load_cupy(), load_cupy())
        else:
            with self.assertRaises(DeviceUnavailableError):
                load_cupy()


if __name__ == "__main__":
    unittest.main()
