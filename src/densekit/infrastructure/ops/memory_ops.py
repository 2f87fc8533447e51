"""
Initialization, copy and cross-backend conversion front-ends.
"""

from __future__ import annotations

import numpy as np

from ...domain._errors import UnsupportedOperationError
from ._checks import (
    require_buffers,
    require_same_device,
    require_same_dtype,
    require_same_shape,
)


def fill(buffer, value) -> None:
    """Set every element of `buffer` to `value`."""
    require_buffers("fill", buffer)
    buffer.fill(value)


def sequence(buffer) -> None:
    """Write ``0, 1, ..., size-1`` into `buffer` in physical storage order."""
    require_buffers("sequence", buffer)
    buffer.sequence()


def copy(dst, src) -> None:
    """
    Copy `src` into `dst` on the same device.

    Elements are paired by logical position, so the layouts may differ.

    Raises
    ------
    ShapeMismatchError, MemorySpaceMismatchError, UnsupportedOperationError
    """
    require_buffers("copy", dst, src)
    require_same_shape("copy", dst, src)
    require_same_device("copy", dst, src)
    require_same_dtype("copy", dst, src)
    dst._copy_from(src)


def convert(dst, src) -> None:
    """
    Copy `src` into `dst` across memory spaces and/or layouts.

    Values are preserved exactly. The element type may change only when the
    cast is lossless (``np.can_cast(src.dtype, dst.dtype, "safe")``).

    Raises
    ------
    ShapeMismatchError
        If the logical shapes differ.
    UnsupportedOperationError
        If the dtype change could lose information.
    """
    require_buffers("convert", dst, src)
    require_same_shape("convert", dst, src)
    if not np.can_cast(np.dtype(src.dtype), np.dtype(dst.dtype), "safe"):
        raise UnsupportedOperationError(
            "convert", f"lossy cast from {np.dtype(src.dtype)} to {np.dtype(dst.dtype)}"
        )
    dst._copy_from(src)
