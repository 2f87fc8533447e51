"""
Reduction mixin: vector broadcasts, row/column sums and norms.

Broadcast and reduction kernels work on *logical* rows and columns. The
matrix layout only changes how a flat storage index is mapped back to a
``(row, col)`` pair inside the kernel; results never depend on it.
"""

from abc import ABC


class BufferMixinReduction(ABC):
    """Broadcast, reduction and norm kernels."""

    def _add_broadcast(self, vector, along_rows: bool) -> None:
        """
        Add `vector` to the matrix in place.

        Parameters
        ----------
        vector : DenseBuffer
            Vector of length ``height`` (``along_rows=True``) or ``width``.
        along_rows : bool
            True: ``self[i][j] += vector[i]``; False: ``self[i][j] += vector[j]``.
        """
        ...

    def _reduce_into(self, out, axis: int) -> None:
        """
        Sum the logical matrix along `axis` into the vector `out`.

        ``axis=1`` sums each row (``out[i] = sum_j self[i][j]``), ``axis=0``
        sums each column.
        """
        ...

    def _norm(self, order: int) -> float:
        """Return the L1 (``order=1``) or L2 (``order=2``) norm of all elements."""
        ...
