"""
Functor mixin declaring the element-wise kernel entrypoints.

This module declares :class:`BufferMixinFunctor`, whose two methods are the
only places element-wise functors are evaluated. The public front-ends
(`densekit.apply_scalar`, `densekit.apply_binary`) validate shapes, dtypes,
devices and parameter counts first, then call these methods, which are
dispatched by memory space.

Numerical contract
------------------
- Parameters arrive already cast to the element type, so both backends round
  them identically.
- Each element is updated independently; no implementation may read an
  element another work item writes.
"""

from abc import ABC
from typing import Sequence

from .....domain._functors import BinaryFunctor, ScalarFunctor


class BufferMixinFunctor(ABC):
    """Element-wise functor kernels."""

    def _apply_scalar(self, functor: ScalarFunctor, params: Sequence) -> None:
        """
        Replace every element ``x`` with ``f(x, *params)``, in place.

        Parameters
        ----------
        functor : ScalarFunctor
            Functor tag, already validated for this buffer's dtype.
        params : Sequence
            Exactly two element-type scalars; unused trailing ones are zero.
        """
        ...

    def _apply_binary(self, src, functor: BinaryFunctor, params: Sequence) -> None:
        """
        Replace every element ``x`` with ``f(x, y, *params)`` where ``y`` is the
        element of `src` at the same logical position.

        `src` is only read. Layouts of the two operands may differ.
        """
        ...
