"""
Dense buffer interface definitions.

`IDenseBuffer` captures the backend-agnostic surface the kernel operations
rely on: a 2-D shape, a layout tag, an element dtype and a device. Concrete
buffers live in the infrastructure layer; domain code and the operation
front-ends type against this protocol only.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, runtime_checkable

from .device._device import Device


class Layout(Enum):
    """
    Mapping from logical ``(row, col)`` to physical storage offset.

    Attributes
    ----------
    ROW_MAJOR : Layout
        ``offset = row * width + col``
    COLUMN_MAJOR : Layout
        ``offset = row + col * height``
    """

    ROW_MAJOR = "C"
    COLUMN_MAJOR = "F"

    def offset(self, row: int, col: int, height: int, width: int) -> int:
        """Return the physical offset of logical element ``(row, col)``."""
        if self is Layout.ROW_MAJOR:
            return row * width + col
        return row + col * height


@runtime_checkable
class IDenseBuffer(Protocol):
    """
    Dense 2-D buffer contract.

    Notes
    -----
    A buffer with ``height == 1`` or ``width == 1`` is a vector; there is no
    separate vector type.
    """

    @property
    def shape(self) -> tuple[int, int]: ...

    @property
    def height(self) -> int: ...

    @property
    def width(self) -> int: ...

    @property
    def layout(self) -> Layout: ...

    @property
    def dtype(self) -> Any: ...

    @property
    def device(self) -> Device: ...

    @property
    def is_vector(self) -> bool: ...

    def to_numpy(self) -> Any: ...

    def copy_from_numpy(self, arr: Any) -> None: ...
