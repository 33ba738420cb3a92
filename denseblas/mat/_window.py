"""
Sub-matrix windows.

A window is an m x n block of a column-major matrix starting at (row, col).
Every matrix operation resolves its size/offset keywords into a Window once,
at the boundary, and from then on addresses elements through flat offsets
into the matrix buffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from numpy.typing import NDArray

from denseblas.core.compute import blas
from denseblas.core.validation import check_size, check_window


@dataclass(frozen=True)
class Window:
    """
    Validated m x n block of a matrix at (row, col).

    Attributes:
        a: The matrix (Fortran-contiguous)
        m: Number of rows
        n: Number of columns
        row: First row
        col: First column
    """
    a: NDArray[Any]
    m: int
    n: int
    row: int
    col: int

    @classmethod
    def resolve(
        cls,
        a: NDArray[Any],
        name: str,
        *,
        m: int | None = None,
        n: int | None = None,
        row: int = 0,
        col: int = 0,
    ) -> Window:
        """
        Build a window, defaulting m and n to the rest of the matrix.

        Raises:
            ValidationError: If a size/offset is not an integer
            DimensionError: If the window does not fit inside a
        """
        row = check_size(row, f'{name} row offset')
        col = check_size(col, f'{name} column offset')
        m = max(a.shape[0] - row, 0) if m is None else check_size(m, f'{name} rows')
        n = max(a.shape[1] - col, 0) if n is None else check_size(n, f'{name} columns')
        check_window(a, name, m, n, row, col)
        return cls(a=a, m=m, n=n, row=row, col=col)

    @property
    def ld(self) -> int:
        """Leading dimension of the underlying matrix."""
        return blas.leading_dimension(self.a)

    @property
    def buf(self) -> NDArray[Any]:
        """Flat column-major buffer of the underlying matrix."""
        return blas.flat(self.a)

    @property
    def is_empty(self) -> bool:
        return self.m == 0 or self.n == 0

    @property
    def full_columns(self) -> bool:
        """True if the window spans whole columns (one contiguous block)."""
        return self.m == self.a.shape[0]

    def offset(self, i: int = 0, j: int = 0) -> int:
        """Flat offset of window element (i, j)."""
        return blas.offset(self.a, self.row + i, self.col + j)

    # === Strided sequences as (offset, increment) ===

    def column(self, j: int) -> tuple[int, int]:
        """Column j of the window."""
        return self.offset(0, j), 1

    def row_seq(self, i: int) -> tuple[int, int]:
        """Row i of the window."""
        return self.offset(i, 0), self.ld

    def op_row(self, trans: str, i: int) -> tuple[int, int]:
        """Row i of op(window): row i for 'N', column i for 'T'/'C'."""
        return self.row_seq(i) if trans == 'N' else self.column(i)

    def op_col(self, trans: str, j: int) -> tuple[int, int]:
        """Column j of op(window): column j for 'N', row j for 'T'/'C'."""
        return self.column(j) if trans == 'N' else self.row_seq(j)


def op_shape(a: NDArray[Any], trans: str, row: int, col: int) -> tuple[int, int]:
    """Default (rows, columns) of op(a) below and right of (row, col)."""
    m = max(a.shape[0] - row, 0)
    n = max(a.shape[1] - col, 0)
    return (m, n) if trans == 'N' else (n, m)
