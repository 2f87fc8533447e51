"""
Scoped accelerator context and device storage lifetime management.

`AcceleratorContext` is the explicit resource every accelerator buffer is
created from. It replaces ambient, process-global device state:

- it selects a CUDA device by ordinal,
- it owns a private CuPy memory pool used for every allocation made through
  it,
- it tracks the storages it handed out so `close()` can release them
  deterministically, then return the pool's blocks to the driver.

`_DeviceStorage` wraps one allocation. A storage whose context has been
closed refuses access, so a buffer can never read freed memory.

Typical usage
-------------
    with AcceleratorContext(0) as ctx:
        a = ctx.zeros(256, 256)
        ...
    # all device memory allocated through ctx is released here
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional
import threading
import warnings
import weakref

import numpy as np

from ..domain._errors import AllocationFailureError, UnsupportedOperationError
from ..domain.device._device import Device
from .native_cuda._native_loader import default_device_index, load_cupy


@dataclass(eq=False)
class _DeviceStorage:
    """
    One contiguous device allocation owned by an `AcceleratorContext`.

    Attributes
    ----------
    context : AcceleratorContext
        Owning context.
    nbytes : int
        Size of the allocation in bytes.
    dtype : np.dtype
        Element type.
    """

    context: "AcceleratorContext"
    nbytes: int
    dtype: np.dtype
    _array: object = field(default=None, repr=False)

    @property
    def array(self):
        """
        Return the flat CuPy array backing this storage.

        Raises
        ------
        UnsupportedOperationError
            If the owning context has been closed.
        """
        if self._array is None:
            raise UnsupportedOperationError(
                "device storage access",
                f"context for {self.context.device} has been closed",
            )
        return self._array

    def release(self) -> None:
        """Drop the allocation; memory returns to the owning pool."""
        self._array = None
        self.nbytes = 0


class AcceleratorContext:
    """
    Explicit CUDA device context.

    Parameters
    ----------
    device_index : int, optional
        CUDA ordinal. Defaults to ``DENSEKIT_CUDA_DEVICE`` or 0.

    Raises
    ------
    DeviceUnavailableError
        If CuPy or a CUDA device is not available.
    ValueError
        If `device_index` is negative or not present on this machine.

    Notes
    -----
    Contexts are not thread-safe with respect to kernel launches on the same
    buffers; callers own sequencing. Registration of new storages is guarded
    by a lock so buffers may be created from several threads.
    """

    def __init__(self, device_index: Optional[int] = None) -> None:
        cp = load_cupy()
        index = default_device_index() if device_index is None else int(device_index)
        count = int(cp.cuda.runtime.getDeviceCount())
        if index < 0 or index >= count:
            raise ValueError(
                f"device_index must be in [0, {count}), got {index}"
            )

        self._cp = cp
        self._index = index
        self._device = Device.cuda(index)
        with cp.cuda.Device(index):
            self._pool = cp.cuda.MemoryPool()
        self._storages: "weakref.WeakSet[_DeviceStorage]" = weakref.WeakSet()
        self._lock = threading.Lock()
        self._closed = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def device(self) -> Device:
        return self._device

    @property
    def device_index(self) -> int:
        return self._index

    @property
    def closed(self) -> bool:
        return self._closed

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"AcceleratorContext(device='{self._device}', {state})"

    # ------------------------------------------------------------------
    # Scope
    # ------------------------------------------------------------------
    def __enter__(self) -> "AcceleratorContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def activate(self) -> Iterator[object]:
        """
        Make this context current for kernel launches and allocations.

        Yields
        ------
        module
            The `cupy` module, for convenience at call sites.
        """
        if self._closed:
            raise UnsupportedOperationError(
                "accelerator launch", f"context for {self._device} has been closed"
            )
        with ExitStack() as stack:
            stack.enter_context(self._cp.cuda.Device(self._index))
            stack.enter_context(self._cp.cuda.using_allocator(self._pool.malloc))
            yield self._cp

    def synchronize(self) -> None:
        """Block until every launch on the current stream has completed."""
        with self._cp.cuda.Device(self._index):
            self._cp.cuda.get_current_stream().synchronize()

    def close(self) -> None:
        """
        Release every storage allocated through this context.

        Buffers still referencing those storages become unusable. Calling
        `close()` more than once is a no-op.
        """
        if self._closed:
            return
        with self._lock:
            live = list(self._storages)
            self._closed = True
        if live:
            warnings.warn(
                f"AcceleratorContext for {self._device} closed with {len(live)} "
                "live buffer(s); they are no longer usable.",
                RuntimeWarning,
                stacklevel=2,
            )
        for storage in live:
            storage.release()
        with self._cp.cuda.Device(self._index):
            self._cp.cuda.get_current_stream().synchronize()
            self._pool.free_all_blocks()

    # ------------------------------------------------------------------
    # Allocation
    # ------------------------------------------------------------------
    def allocate(self, numel: int, dtype) -> _DeviceStorage:
        """
        Allocate an uninitialized flat device array.

        Raises
        ------
        AllocationFailureError
            If the device is out of memory.
        UnsupportedOperationError
            If the context is closed.
        """
        dtype = np.dtype(dtype)
        nbytes = int(numel) * int(dtype.itemsize)
        with self.activate() as cp:
            try:
                arr = cp.empty(int(numel), dtype=dtype)
            except cp.cuda.memory.OutOfMemoryError as e:
                raise AllocationFailureError(nbytes, str(self._device)) from e
        storage = _DeviceStorage(context=self, nbytes=nbytes, dtype=dtype, _array=arr)
        with self._lock:
            self._storages.add(storage)
        return storage

    # ------------------------------------------------------------------
    # Buffer factories
    # ------------------------------------------------------------------
    def empty(self, height: int, width: int, **kwargs):
        """Build an accelerator `DenseBuffer` with undefined contents."""
        from .buffer._dense_buffer import DenseBuffer

        return DenseBuffer(height, width, context=self, **kwargs)

    def zeros(self, height: int, width: int, **kwargs):
        """Build a zero-filled accelerator `DenseBuffer`."""
        buf = self.empty(height, width, **kwargs)
        buf.fill(0)
        return buf

    def vector(self, length: int, **kwargs):
        """Build an accelerator column vector of `length` elements."""
        return self.empty(length, 1, **kwargs)

    def from_numpy(self, arr, **kwargs):
        """Upload a host array into a new accelerator `DenseBuffer`."""
        from .buffer._dense_buffer import DenseBuffer

        return DenseBuffer.from_numpy(arr, context=self, **kwargs)
