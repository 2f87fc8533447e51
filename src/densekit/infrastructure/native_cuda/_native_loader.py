"""
CUDA runtime loader for the accelerator backend.

The accelerator kernels are CUDA C sources compiled at first use through
CuPy (NVRTC). This module is the single place that imports CuPy; every other
module asks for it through `load_cupy()`.

Key behaviors
-------------
- Cached singleton: `load_cupy()` is wrapped in `lru_cache` so the import and
  the device check happen at most once per process.
- Explicit failure: a missing CuPy install or a machine without a usable CUDA
  device raises `DeviceUnavailableError`; there is no silent host fallback.
- `cuda_available()` turns that failure into a boolean for callers that only
  want to branch (e.g. test skips).

Environment variables
---------------------
DENSEKIT_CUDA_DEVICE : str, optional
    Default CUDA ordinal used by `AcceleratorContext` when none is given.
"""

from __future__ import annotations

import os
from functools import lru_cache

from ...domain._errors import DeviceUnavailableError


@lru_cache(maxsize=1)
def load_cupy():
    """
    Import CuPy and verify that at least one CUDA device is usable.

    Returns
    -------
    module
        The imported `cupy` module.

    Raises
    ------
    DeviceUnavailableError
        If CuPy is not installed, the CUDA runtime cannot be initialized, or
        no CUDA device is present.
    """
    try:
        import cupy as cp
    except ImportError as e:
        raise DeviceUnavailableError(
            f"CuPy is not installed ({e}); install densekit[cuda]"
        ) from e

    try:
        count = int(cp.cuda.runtime.getDeviceCount())
    except cp.cuda.runtime.CUDARuntimeError as e:
        raise DeviceUnavailableError(f"CUDA runtime unavailable: {e}") from e

    if count <= 0:
        raise DeviceUnavailableError("no CUDA device found")
    return cp


def cuda_available() -> bool:
    """Return True when the accelerator backend can be used."""
    try:
        load_cupy()
        return True
    except DeviceUnavailableError:
        return False


def default_device_index() -> int:
    """
    Resolve the default CUDA ordinal.

    Reads ``DENSEKIT_CUDA_DEVICE`` and falls back to 0.

    Raises
    ------
    ValueError
        If the variable is set but is not a non-negative integer.
    """
    raw = os.environ.get("DENSEKIT_CUDA_DEVICE", "").strip()
    if not raw:
        return 0
    if not raw.isdigit():
        raise ValueError(f"DENSEKIT_CUDA_DEVICE must be a non-negative integer, got {raw!r}")
    return int(raw)
