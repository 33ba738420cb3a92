"""
Iterators over matrices.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar
import numpy as np
from numpy.typing import NDArray

from denseblas.core.validation import (
    check_matrix,
    check_scalar,
    check_size,
    check_writeable,
)
from denseblas.mat._window import Window

A = TypeVar('A')  # Accumulator type


def map(
    f: Callable[[Any], Any],
    a: NDArray[Any],
    *,
    m: int | None = None,
    n: int | None = None,
    br: int = 0,
    bc: int = 0,
    b: NDArray[Any] | None = None,
    ar: int = 0,
    ac: int = 0,
) -> NDArray[Any]:
    """
    Apply f to each element of a sub-matrix.

    b[br + i, bc + j] = f(a[ar + i, ac + j]) for the m x n window,
    visited column by column.

    Args:
        f: Element function
        a: Source matrix
        m: Rows of the window (default: dim1(a) - ar)
        n: Columns of the window (default: dim2(a) - ac)
        br, bc: Destination window offset
        b: Destination (default: fresh m x n matrix of a's dtype)
        ar, ac: Source window offset

    Returns:
        b
    """
    check_matrix(a, 'a', fortran=False)
    src = Window.resolve(a, 'a', m=m, n=n, row=ar, col=ac)
    if b is None:
        b = np.empty((src.m, src.n), dtype=a.dtype, order='F')
    else:
        check_matrix(b, 'b', fortran=False)
        check_writeable(b, 'b')
    dst = Window.resolve(b, 'b', m=src.m, n=src.n, row=br, col=bc)

    for j in range(src.n):
        for i in range(src.m):
            value = f(a[src.row + i, src.col + j])
            b[dst.row + i, dst.col + j] = check_scalar(value, b.dtype, 'f result')
    return b


def fold_cols(
    f: Callable[[A, NDArray[Any]], A],
    acc: A,
    a: NDArray[Any],
    *,
    n: int | None = None,
    ac: int = 0,
) -> A:
    """
    Fold f over the columns of a.

    Columns ac .. ac + n - 1 are passed in order, each as a vector
    sharing data with a.

    Args:
        f: Called as f(acc, column)
        acc: Initial accumulator
        a: Matrix
        n: Number of columns (default: dim2(a) - ac)
        ac: First column
    """
    check_matrix(a, 'a', fortran=False)
    ac = check_size(ac, 'ac')
    if n is None:
        n = max(a.shape[1] - ac, 0)
    w = Window.resolve(a, 'a', m=a.shape[0], n=n, row=0, col=ac)
    for j in range(w.n):
        acc = f(acc, a[:, w.col + j])
    return acc
