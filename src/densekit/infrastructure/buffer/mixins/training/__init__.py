"""
Training-step mixin and its per-memory-space control paths.
"""

from ._host import *
from ._cuda import *
from ._base import BufferMixinTraining

__all__ = [
    BufferMixinTraining.__name__,
]
