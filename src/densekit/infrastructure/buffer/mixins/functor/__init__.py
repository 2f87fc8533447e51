"""
Functor mixin and its per-memory-space control paths.
"""

from ._host import *
from ._cuda import *
from ._base import BufferMixinFunctor

__all__ = [
    BufferMixinFunctor.__name__,
]
