"""
Dense 2-D buffer with host or accelerator storage.

`DenseBuffer` is the one storage type every densekit operation works on.
It combines:

- a flat, contiguous storage array of ``height * width`` elements (a NumPy
  array for host memory, a CuPy array owned by an `AcceleratorContext` for
  device memory),
- a `Layout` tag mapping logical ``(row, col)`` to a storage offset,
- the kernel mixins, whose methods dispatch on the buffer's memory space.

Vectors are buffers with one dimension equal to 1; `DenseBuffer.vector`
builds an ``n x 1`` column.

Construction
------------
Host buffers are built directly:

    buf = DenseBuffer(256, 256)                       # float32, column-major

Accelerator buffers need an open context, either passed in or through the
context's factories:

    with AcceleratorContext(0) as ctx:
        dev = DenseBuffer(256, 256, context=ctx)
        same = ctx.empty(256, 256)
"""

from __future__ import annotations

from typing import Tuple, Union

import numpy as np

from ...domain._buffer import Layout
from ...domain._errors import (
    AllocationFailureError,
    ShapeMismatchError,
)
from ...domain.device._device import Device, MemorySpace
from .mixins import (
    BufferMixinFunctor,
    BufferMixinLinalg,
    BufferMixinMemory,
    BufferMixinReduction,
    BufferMixinTraining,
)

SUPPORTED_DTYPES = tuple(
    np.dtype(t)
    for t in (np.float32, np.float64, np.int8, np.int16, np.int32, np.int64)
)


def _check_dim(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if int(value) <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return int(value)


class DenseBuffer(
    BufferMixinFunctor,
    BufferMixinLinalg,
    BufferMixinMemory,
    BufferMixinReduction,
    BufferMixinTraining,
):
    """
    Dense matrix (or vector) of numeric scalars in one memory space.

    Parameters
    ----------
    height : int
        Number of logical rows, > 0.
    width : int
        Number of logical columns, > 0.
    dtype : numpy dtype-like, optional
        One of float32, float64, int8, int16, int32, int64. Defaults to
        float32.
    layout : Layout, optional
        Storage order. Defaults to `Layout.COLUMN_MAJOR`.
    context : AcceleratorContext, optional
        If given, storage is allocated in that context's device memory;
        otherwise in host memory.

    Raises
    ------
    TypeError
        If a dimension is not an int or `layout` is not a `Layout`.
    ValueError
        If a dimension is not positive or `dtype` is unsupported.
    UnsupportedOperationError
        If `context` is closed.
    AllocationFailureError
        If storage cannot be obtained.

    Notes
    -----
    Contents are undefined after construction; use `fill`, `sequence`,
    `copy_from_numpy` or the `zeros` / `from_numpy` factories.
    """

    def __init__(
        self,
        height: int,
        width: int,
        *,
        dtype=np.float32,
        layout: Layout = Layout.COLUMN_MAJOR,
        context=None,
    ) -> None:
        self._height = _check_dim("height", height)
        self._width = _check_dim("width", width)

        dt = np.dtype(dtype)
        if dt not in SUPPORTED_DTYPES:
            raise ValueError(
                f"dtype must be one of {[str(d) for d in SUPPORTED_DTYPES]}, got {dt}"
            )
        self._dtype = dt

        if not isinstance(layout, Layout):
            raise TypeError(f"layout must be a Layout, got {layout!r}")
        self._layout = layout

        numel = self._height * self._width
        self._context = context
        if context is None:
            self._device = Device("cpu")
            try:
                self._store = np.empty(numel, dtype=dt)
            except MemoryError as e:
                raise AllocationFailureError(numel * dt.itemsize, "cpu") from e
        else:
            self._device = context.device
            self._store = context.allocate(numel, dt)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def vector(cls, length: int, **kwargs) -> "DenseBuffer":
        """Build a column vector (``length x 1``)."""
        return cls(length, 1, **kwargs)

    @classmethod
    def zeros(cls, height: int, width: int, **kwargs) -> "DenseBuffer":
        """Build a zero-filled buffer."""
        buf = cls(height, width, **kwargs)
        buf.fill(0)
        return buf

    @classmethod
    def from_numpy(cls, arr, *, dtype=None, layout: Layout = Layout.COLUMN_MAJOR, context=None) -> "DenseBuffer":
        """
        Build a buffer holding a copy of a host array.

        Parameters
        ----------
        arr : array-like
            1-D (becomes an ``n x 1`` column vector) or 2-D array.
        dtype : numpy dtype-like, optional
            Element type; defaults to ``arr.dtype``.

        Raises
        ------
        ValueError
            If `arr` is not 1-D or 2-D, or is empty.
        """
        a = np.asarray(arr)
        if a.ndim == 1:
            a = a.reshape(-1, 1)
        if a.ndim != 2:
            raise ValueError(f"from_numpy expects a 1-D or 2-D array, got ndim={a.ndim}")
        buf = cls(
            a.shape[0],
            a.shape[1],
            dtype=a.dtype if dtype is None else dtype,
            layout=layout,
            context=context,
        )
        buf.copy_from_numpy(a)
        return buf

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def shape(self) -> Tuple[int, int]:
        return (self._height, self._width)

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def size(self) -> int:
        return self._height * self._width

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def device(self) -> Device:
        return self._device

    @property
    def context(self):
        """Owning `AcceleratorContext`, or None for host buffers."""
        return self._context

    @property
    def is_vector(self) -> bool:
        return self._height == 1 or self._width == 1

    @property
    def length(self) -> int:
        """
        Number of elements of a vector.

        Raises
        ------
        ShapeMismatchError
            If the buffer is not a vector.
        """
        if not self.is_vector:
            raise ShapeMismatchError("length", [self.shape], "buffer is not a vector")
        return self.size

    @property
    def _state(self) -> MemorySpace:
        return self._device.memory_space

    @property
    def _data(self):
        """Flat storage array (NumPy or CuPy)."""
        if self._context is None:
            return self._store
        return self._store.array

    def _logical(self):
        """Logical ``(height, width)`` view of the storage; writes go through."""
        return self._data.reshape((self._height, self._width), order=self._layout.value)

    def __repr__(self) -> str:
        return (
            f"DenseBuffer(shape={self.shape}, dtype={self._dtype}, "
            f"layout={self._layout.name}, device='{self._device}')"
        )

    # ------------------------------------------------------------------
    # Element access and host interop
    # ------------------------------------------------------------------
    def __getitem__(self, index: Union[int, Tuple[int, int]]):
        """
        Read one element as a Python scalar.

        ``buf[i, j]`` addresses the logical matrix on any memory space. A
        single integer index is accepted for vectors.
        """
        if isinstance(index, tuple):
            i, j = index
        elif self.is_vector:
            i, j = (index, 0) if self._width == 1 else (0, index)
        else:
            raise TypeError("matrix buffers must be indexed with (row, col)")
        if not (-self._height <= i < self._height and -self._width <= j < self._width):
            raise IndexError(f"index {index} out of range for shape {self.shape}")
        if self._context is not None:
            with self._context.activate():
                return self._logical()[i, j].item()
        return self._logical()[i, j].item()

    def to_numpy(self) -> np.ndarray:
        """Return a host copy of the logical ``(height, width)`` matrix."""
        return self._to_numpy()

    def copy_from_numpy(self, arr) -> None:
        """
        Overwrite the buffer with a host array.

        Parameters
        ----------
        arr : array-like
            ``(height, width)`` array, or for vectors a flat array of
            `length` elements. Values are cast to the buffer dtype.

        Raises
        ------
        ShapeMismatchError
            If the array shape does not match.
        """
        a = np.asarray(arr)
        if a.shape != self.shape:
            if self.is_vector and a.ndim == 1 and a.size == self.size:
                a = a.reshape(self.shape)
            else:
                raise ShapeMismatchError("copy_from_numpy", [self.shape, a.shape])
        self._copy_from_numpy(a.astype(self._dtype, copy=False))

    def fill(self, value) -> None:
        """Set every element to `value` (cast to the element type)."""
        self._fill(value)

    def sequence(self) -> None:
        """Write ``0, 1, ..., size-1`` in physical storage order."""
        self._sequence()
