"""
Linear-algebra mixin: dense matrix product.

`_product` is called on the destination buffer after the front-end has
checked every shape against the transpose flags, so implementations only
compute

    dst = alpha * op(lhs) @ op(rhs) + beta * dst

where ``op`` is identity or transpose. Transposition is expressed by viewing
the logical matrix transposed; no operand is copied into a new layout.
"""

from abc import ABC


class BufferMixinLinalg(ABC):
    """Matrix product kernel."""

    def _product(self, lhs, rhs, transpose_lhs: bool, transpose_rhs: bool, alpha, beta) -> None:
        ...
