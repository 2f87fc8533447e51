"""
Reduction mixin and its per-memory-space control paths.
"""

from ._host import *
from ._cuda import *
from ._base import BufferMixinReduction

__all__ = [
    BufferMixinReduction.__name__,
]
