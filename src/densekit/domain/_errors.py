"""
Error taxonomy for densekit.

Every failure raised by a kernel operation is a programming-contract
violation, detected before any element is written. Nothing here is retried
internally; callers see the condition immediately.

Hierarchy
---------
- `DenseKitError`
    - `ShapeMismatchError`          operand shapes/lengths incompatible
    - `UnsupportedOperationError`   functor/dtype/memory-space combination
      not available
        - `MemorySpaceMismatchError`  operands live on different devices
        - `DeviceUnavailableError`    CUDA runtime or CuPy missing
    - `AllocationFailureError`      backing storage could not be obtained
"""

from typing import Sequence


class DenseKitError(RuntimeError):
    """Base class of every densekit error."""


class ShapeMismatchError(DenseKitError, ValueError):
    """
    Raised when operand shapes are incompatible for an operation.

    Attributes
    ----------
    op : str
        Name of the operation that rejected its operands.
    shapes : tuple[tuple[int, ...], ...]
        Shapes of the operands involved, in argument order.
    """

    def __init__(self, op: str, shapes: Sequence[tuple], detail: str = "") -> None:
        self.op = op
        self.shapes = tuple(tuple(s) for s in shapes)
        msg = f"{op}: incompatible shapes {', '.join(str(s) for s in self.shapes)}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class UnsupportedOperationError(DenseKitError):
    """
    Raised when an operation is not defined for the given operands.

    Typical causes are a transcendental functor on an integer buffer, a dtype
    mismatch between operands, or an accelerator buffer whose context has
    already been closed.

    Attributes
    ----------
    op : str
        Name of the rejected operation.
    reason : str
        Human-readable explanation.
    """

    def __init__(self, op: str, reason: str) -> None:
        super().__init__(f"{op} is not supported: {reason}")
        self.op = op
        self.reason = reason


class MemorySpaceMismatchError(UnsupportedOperationError):
    """Raised when the operands of one operation reside on different devices."""

    def __init__(self, op: str, device_a: str, device_b: str) -> None:
        super().__init__(op, f"device mismatch '{device_a}' vs '{device_b}'")
        self.device_a = device_a
        self.device_b = device_b


class DeviceUnavailableError(UnsupportedOperationError):
    """Raised when accelerator memory is requested but CUDA cannot be used."""

    def __init__(self, reason: str) -> None:
        super().__init__("accelerator", reason)


class AllocationFailureError(DenseKitError, MemoryError):
    """
    Raised by buffer construction when storage cannot be obtained.

    Attributes
    ----------
    nbytes : int
        Size of the failed request.
    device : str
        Device on which the allocation was attempted.
    """

    def __init__(self, nbytes: int, device: str) -> None:
        super().__init__(f"could not allocate {nbytes} bytes on '{device}'")
        self.nbytes = int(nbytes)
        self.device = device
