"""
Memory-space and device descriptors.

This module defines the two notions every buffer carries about *where* its
storage lives:

- `MemorySpace`: the category of memory (host-local or accelerator)
- `Device`: a concrete, validated descriptor such as "cpu" or "cuda:0"

Both are plain value objects. They never allocate or touch backend resources,
so they can be used freely across the domain and infrastructure layers.
"""

from enum import Enum
import re


class MemorySpace(Enum):
    """
    Enumeration of supported memory spaces.

    Attributes
    ----------
    LOCAL : MemorySpace
        Host memory, processed by the NumPy backend.
    ACCELERATOR : MemorySpace
        CUDA device memory, processed by compiled CUDA kernels.
    """

    LOCAL = "cpu"
    ACCELERATOR = "cuda"


class Device:
    """
    Concrete device descriptor.

    Parameters
    ----------
    device : str
        Either ``"cpu"`` or ``"cuda:<index>"`` with a non-negative index.

    Raises
    ------
    ValueError
        If the device string is not one of the supported forms.

    Notes
    -----
    Two buffers may take part in the same operation only if their devices
    compare equal; ``cuda:0`` and ``cuda:1`` are different devices even
    though they share a memory space.
    """

    __slots__ = ("memory_space", "index")

    _CUDA_PATTERN = re.compile(r"^cuda:(\d+)$")

    def __init__(self, device: str):
        if device == "cpu":
            self.memory_space = MemorySpace.LOCAL
            self.index = None
        else:
            m = self._CUDA_PATTERN.match(device)
            if not m:
                raise ValueError(
                    f"Invalid device '{device}'. Expected 'cpu' or 'cuda:<index>'"
                )
            self.memory_space = MemorySpace.ACCELERATOR
            self.index = int(m.group(1))

    @classmethod
    def cuda(cls, index: int = 0) -> "Device":
        """Build the descriptor for CUDA ordinal `index`."""
        return cls(f"cuda:{int(index)}")

    def __str__(self) -> str:
        return "cpu" if self.is_local() else f"cuda:{self.index}"

    def __repr__(self) -> str:
        return f"Device('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Device):
            return NotImplemented
        return (self.memory_space, self.index) == (other.memory_space, other.index)

    def __hash__(self) -> int:
        return hash((self.memory_space, self.index))

    def is_local(self) -> bool:
        """Return True for host memory."""
        return self.memory_space is MemorySpace.LOCAL

    def is_accelerator(self) -> bool:
        """Return True for CUDA device memory."""
        return self.memory_space is MemorySpace.ACCELERATOR
