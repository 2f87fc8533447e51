"""
Kernel mixins composing `DenseBuffer`.

Each subpackage declares one mixin and registers its host and accelerator
control paths on import.
"""

from .functor import BufferMixinFunctor
from .linalg import BufferMixinLinalg
from .memory import BufferMixinMemory
from .reduction import BufferMixinReduction
from .training import BufferMixinTraining

__all__ = [
    BufferMixinFunctor.__name__,
    BufferMixinLinalg.__name__,
    BufferMixinMemory.__name__,
    BufferMixinReduction.__name__,
    BufferMixinTraining.__name__,
]
