"""
Linear-algebra mixin and its per-memory-space control paths.
"""

from ._host import *
from ._cuda import *
from ._base import BufferMixinLinalg

__all__ = [
    BufferMixinLinalg.__name__,
]
