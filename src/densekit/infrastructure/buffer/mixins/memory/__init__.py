"""
Memory mixin and its per-memory-space control paths.

Implementation modules are imported for their side effect of registering
control paths; only the base mixin is public.
"""

from ._host import *
from ._cuda import *
from ._base import BufferMixinMemory

__all__ = [
    BufferMixinMemory.__name__,
]
