"""
Broadcast, reduction and norm front-ends.
"""

from __future__ import annotations

from ._checks import (
    require_buffers,
    require_same_device,
    require_same_dtype,
    require_vector,
)


def add_column_broadcast(matrix, column) -> None:
    """
    Add ``column[i]`` to every element of row ``i`` of `matrix`, in place.

    The result is the same for either layout of `matrix`.

    Raises
    ------
    ShapeMismatchError
        If `column` is not a vector of ``matrix.height`` elements.
    MemorySpaceMismatchError
        If the buffers live on different devices.
    UnsupportedOperationError
        If the dtypes differ.
    """
    require_buffers("add_column_broadcast", matrix, column)
    require_vector("add_column_broadcast", column, matrix.height, matrix.shape, "height")
    require_same_device("add_column_broadcast", matrix, column)
    require_same_dtype("add_column_broadcast", matrix, column)
    matrix._add_broadcast(column, True)


def add_row_broadcast(matrix, row) -> None:
    """Add ``row[j]`` to every element of column ``j`` of `matrix`, in place."""
    require_buffers("add_row_broadcast", matrix, row)
    require_vector("add_row_broadcast", row, matrix.width, matrix.shape, "width")
    require_same_device("add_row_broadcast", matrix, row)
    require_same_dtype("add_row_broadcast", matrix, row)
    matrix._add_broadcast(row, False)


def reduce_rows_to_column(out_column, matrix) -> None:
    """
    Sum each row of `matrix`: ``out_column[i] = sum_j matrix[i][j]``.

    Raises
    ------
    ShapeMismatchError
        If `out_column` is not a vector of ``matrix.height`` elements.
    """
    require_buffers("reduce_rows_to_column", out_column, matrix)
    require_vector("reduce_rows_to_column", out_column, matrix.height, matrix.shape, "height")
    require_same_device("reduce_rows_to_column", out_column, matrix)
    require_same_dtype("reduce_rows_to_column", out_column, matrix)
    matrix._reduce_into(out_column, 1)


def reduce_columns_to_row(out_row, matrix) -> None:
    """Sum each column of `matrix`: ``out_row[j] = sum_i matrix[i][j]``."""
    require_buffers("reduce_columns_to_row", out_row, matrix)
    require_vector("reduce_columns_to_row", out_row, matrix.width, matrix.shape, "width")
    require_same_device("reduce_columns_to_row", out_row, matrix)
    require_same_dtype("reduce_columns_to_row", out_row, matrix)
    matrix._reduce_into(out_row, 0)


def norm1(vector) -> float:
    """Return ``sum(|x|)`` over every element, accumulated in float64."""
    require_buffers("norm1", vector)
    return vector._norm(1)


def norm2(vector) -> float:
    """Return ``sqrt(sum(x**2))`` over every element, accumulated in float64."""
    require_buffers("norm2", vector)
    return vector._norm(2)
