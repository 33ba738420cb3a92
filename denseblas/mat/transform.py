"""
Matrix transformations: transposition, triangle mirroring, packed storage.

All element movement is done by ?copy on the flat column-major buffers:
a column of one window and a row of another differ only in the increment
(1 versus the leading dimension) handed to the routine.

Packed storage lists a triangle column by column:
    upper:  a00 | a01 a11 | a02 a12 a22 | ...
    lower:  a00 a10 a20 ... | a11 a21 ... | ...
"""

from __future__ import annotations

import math
from typing import Any
import numpy as np
from numpy.typing import NDArray

from denseblas.core.compute import blas
from denseblas.core.exceptions import DimensionError
from denseblas.core.validation import (
    check_matrix,
    check_min_length,
    check_same_dtype,
    check_size,
    check_source_matrix,
    check_source_vector,
    check_writeable,
)
from denseblas.mat._window import Window


def transpose_copy(
    a: NDArray[Any],
    b: NDArray[Any],
    *,
    m: int | None = None,
    n: int | None = None,
    ar: int = 0,
    ac: int = 0,
    br: int = 0,
    bc: int = 0,
) -> None:
    """
    Copy the transpose of a sub-matrix of a into a sub-matrix of b.

    The m x n window of a at (ar, ac) is written to the n x m window of
    b at (br, bc). Complex elements are not conjugated.

    Args:
        a: Source matrix
        b: Destination matrix (modified in place)
        m: Rows of the source window (default: dim1(a) - ar)
        n: Columns of the source window (default: dim2(a) - ac)
        ar, ac: Source window offset
        br, bc: Destination window offset

    Raises:
        DimensionError: If either window does not fit its matrix
        ValidationError: If a and b differ in dtype or b is read-only
    """
    a = check_source_matrix(a, 'a')
    check_matrix(b, 'b')
    check_writeable(b, 'b')
    check_same_dtype(a, b, names=('a', 'b'))

    src = Window.resolve(a, 'a', m=m, n=n, row=ar, col=ac)
    dst = Window.resolve(b, 'b', m=src.n, n=src.m, row=br, col=bc)
    if src.is_empty:
        return

    x, y = src.buf, dst.buf
    for j in range(src.n):
        offx, incx = src.column(j)
        offy, incy = dst.row_seq(j)
        blas.copy(x, y, src.m, offx=offx, incx=incx, offy=offy, incy=incy)


def transpose(
    a: NDArray[Any],
    *,
    m: int | None = None,
    n: int | None = None,
    ar: int = 0,
    ac: int = 0,
) -> NDArray[Any]:
    """
    Transpose of a sub-matrix of a, as a fresh n x m matrix.

    Args:
        a: Source matrix
        m: Rows of the window (default: dim1(a) - ar)
        n: Columns of the window (default: dim2(a) - ac)
        ar, ac: Window offset
    """
    a = check_source_matrix(a, 'a')
    src = Window.resolve(a, 'a', m=m, n=n, row=ar, col=ac)
    b = np.empty((src.n, src.m), dtype=a.dtype, order='F')
    transpose_copy(a, b, m=src.m, n=src.n, ar=src.row, ac=src.col)
    return b


def detri(
    a: NDArray[Any],
    *,
    up: bool = True,
    n: int | None = None,
    ar: int = 0,
    ac: int = 0,
) -> None:
    """
    Make a triangular sub-matrix symmetric, in place.

    Only the upper (up=True) or lower triangle of the n x n window is
    read; it is mirrored across the diagonal into the other triangle.

    Args:
        a: Matrix (modified in place)
        up: Mirror the upper triangle (else the lower)
        n: Order of the window (default: dim1(a) - ar)
        ar, ac: Window offset
    """
    check_matrix(a, 'a')
    check_writeable(a, 'a')
    if n is None:
        n = max(a.shape[0] - check_size(ar, 'a row offset'), 0)
    w = Window.resolve(a, 'a', m=n, n=n, row=ar, col=ac)

    buf = w.buf
    for j in range(1, w.n):
        col_off, col_inc = w.column(j)
        row_off, row_inc = w.row_seq(j)
        if up:
            blas.copy(buf, buf, j, offx=col_off, incx=col_inc, offy=row_off, incy=row_inc)
        else:
            blas.copy(buf, buf, j, offx=row_off, incx=row_inc, offy=col_off, incy=col_inc)


def packed(
    a: NDArray[Any],
    *,
    up: bool = True,
    n: int | None = None,
    ar: int = 0,
    ac: int = 0,
) -> NDArray[Any]:
    """
    Triangle of a square sub-matrix in packed storage.

    Args:
        a: Matrix
        up: Pack the upper triangle (else the lower)
        n: Order of the window (default: dim2(a) - ac)
        ar, ac: Window offset

    Returns:
        Vector of n * (n + 1) / 2 elements
    """
    a = check_source_matrix(a, 'a')
    if n is None:
        n = max(a.shape[1] - check_size(ac, 'a column offset'), 0)
    w = Window.resolve(a, 'a', m=n, n=n, row=ar, col=ac)

    x = np.empty(w.n * (w.n + 1) // 2, dtype=a.dtype)
    buf = w.buf
    pos = 0
    for j in range(w.n):
        if up:
            count, start = j + 1, w.offset(0, j)
        else:
            count, start = w.n - j, w.offset(j, j)
        blas.copy(buf, x, count, offx=start, offy=pos)
        pos += count
    return x


def unpacked(
    x: NDArray[Any],
    *,
    up: bool = True,
    n: int | None = None,
) -> NDArray[Any]:
    """
    Triangular matrix from packed storage.

    The triangle not stored in x is filled with zeros.

    Args:
        x: Packed triangle
        up: x holds the upper triangle (else the lower)
        n: Order of the result (default: derived from dim(x) = n(n+1)/2)

    Raises:
        DimensionError: If dim(x) is not a triangular number (n omitted)
            or is smaller than n * (n + 1) / 2 (n given)
    """
    x = check_source_vector(x, 'x')
    if n is None:
        n = _packed_order(x.shape[0])
    else:
        n = check_size(n, 'n')
        check_min_length(x, n * (n + 1) // 2, 'x')

    a = np.zeros((n, n), dtype=x.dtype, order='F')
    buf = blas.flat(a)
    pos = 0
    for j in range(n):
        if up:
            count, start = j + 1, blas.offset(a, 0, j)
        else:
            count, start = n - j, blas.offset(a, j, j)
        blas.copy(x, buf, count, offx=pos, offy=start)
        pos += count
    return a


def _packed_order(length: int) -> int:
    """Solve n * (n + 1) / 2 == length for n."""
    n = (math.isqrt(8 * length + 1) - 1) // 2
    if n * (n + 1) // 2 != length:
        raise DimensionError(
            f"x: packed length {length} is not n*(n+1)/2 for any n"
        )
    return n
