"""
Memory mixin: initialization, host interop and buffer-to-buffer copies.

The methods declared here are dispatched by memory space. They assume their
arguments have already been validated by the public front-ends
(`DenseBuffer.fill`, `densekit.copy`, `densekit.convert`, ...), so they never
raise for shape reasons.
"""

from abc import ABC


class BufferMixinMemory(ABC):
    """Per-memory-space storage primitives."""

    def _fill(self, value) -> None:
        """Write `value`, cast to the element type, into every element."""
        ...

    def _sequence(self) -> None:
        """Write ``0, 1, ..., N-1`` in physical storage order."""
        ...

    def _to_numpy(self):
        """Return a host copy of the logical ``(height, width)`` matrix."""
        ...

    def _copy_from_numpy(self, arr) -> None:
        """Write a host ``(height, width)`` array into the logical matrix."""
        ...

    def _copy_from(self, src) -> None:
        """
        Copy `src` into this buffer by logical position.

        `src` may live in another memory space and use another layout; the
        element dtype may differ only by a lossless cast.
        """
        ...
