"""
Arithmetic on (sub-)matrices and BLAS-backed reductions.

Each operation resolves its windows once, then walks them column by column
(or row by row) issuing level-1 BLAS calls on the flat buffers:

    scal / scal_cols / scal_rows  ->  ?scal
    axpy                          ->  ?axpy
    copy_diag                     ->  ?copy with stride ld + 1
    *_diag / *_trace              ->  ?dotu / ?dotc

Transpose flags follow BLAS: 'N' (none), 'T' (transpose), 'C' (conjugate
transpose, same as 'T' for real data).
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from denseblas.core.compute import blas
from denseblas.core.compute.precision import is_complex, to_python
from denseblas.core.exceptions import ValidationError
from denseblas.core.validation import (
    check_matrix,
    check_min_length,
    check_same_dtype,
    check_source_matrix,
    check_scalar,
    check_size,
    check_trans,
    check_vector,
    check_writeable,
)
from denseblas.mat._window import Window, op_shape


# === Diagonal and trace ===


def copy_diag(a: NDArray[Any]) -> NDArray[Any]:
    """
    Diagonal of a as a fresh vector.

    For a non-square matrix the longest possible diagonal
    (min(dim1, dim2) elements) is returned.
    """
    a = check_source_matrix(a, 'a')
    n = min(a.shape)
    y = np.empty(n, dtype=a.dtype)
    blas.copy(blas.flat(a), y, n, incx=blas.leading_dimension(a) + 1)
    return y


def trace(a: NDArray[Any]) -> float | complex:
    """Sum of the longest possible diagonal of a."""
    return to_python(copy_diag(a).sum(), a.dtype)


# === Scaling ===


def scal(
    alpha: Any,
    a: NDArray[Any],
    *,
    m: int | None = None,
    n: int | None = None,
    ar: int = 0,
    ac: int = 0,
) -> None:
    """
    Scale a sub-matrix by alpha, in place.

    Args:
        alpha: Scale factor
        a: Matrix (modified in place)
        m: Rows of the window (default: dim1(a) - ar)
        n: Columns of the window (default: dim2(a) - ac)
        ar, ac: Window offset
    """
    check_matrix(a, 'a')
    check_writeable(a, 'a')
    alpha = check_scalar(alpha, a.dtype, 'alpha')
    w = Window.resolve(a, 'a', m=m, n=n, row=ar, col=ac)
    if w.is_empty:
        return

    buf = w.buf
    if w.full_columns:
        blas.scal(alpha, buf, w.m * w.n, offx=w.offset())
        return
    for j in range(w.n):
        blas.scal(alpha, buf, w.m, offx=w.offset(0, j))


def scal_cols(
    a: NDArray[Any],
    alphas: NDArray[Any],
    *,
    m: int | None = None,
    n: int | None = None,
    ar: int = 0,
    ac: int = 0,
    ofs: int = 0,
) -> None:
    """
    Scale column j of a sub-matrix by alphas[ofs + j], in place.

    Args:
        a: Matrix (modified in place)
        alphas: Scale factors, at least ofs + n elements
        m: Rows of the window (default: dim1(a) - ar)
        n: Columns of the window (default: dim2(a) - ac)
        ar, ac: Window offset
        ofs: Offset into alphas
    """
    check_matrix(a, 'a')
    check_writeable(a, 'a')
    check_vector(alphas, 'alphas', contiguous=False)
    check_same_dtype(a, alphas, names=('a', 'alphas'))
    w = Window.resolve(a, 'a', m=m, n=n, row=ar, col=ac)
    ofs = check_size(ofs, 'ofs')
    check_min_length(alphas, ofs + w.n, 'alphas')
    if w.is_empty:
        return

    buf = w.buf
    for j in range(w.n):
        blas.scal(alphas[ofs + j], buf, w.m, offx=w.offset(0, j))


def scal_rows(
    alphas: NDArray[Any],
    a: NDArray[Any],
    *,
    m: int | None = None,
    n: int | None = None,
    ofs: int = 0,
    ar: int = 0,
    ac: int = 0,
) -> None:
    """
    Scale row i of a sub-matrix by alphas[ofs + i], in place.

    Args:
        alphas: Scale factors, at least ofs + m elements
        a: Matrix (modified in place)
        m: Rows of the window (default: dim1(a) - ar)
        n: Columns of the window (default: dim2(a) - ac)
        ofs: Offset into alphas
        ar, ac: Window offset
    """
    check_matrix(a, 'a')
    check_writeable(a, 'a')
    check_vector(alphas, 'alphas', contiguous=False)
    check_same_dtype(a, alphas, names=('a', 'alphas'))
    w = Window.resolve(a, 'a', m=m, n=n, row=ar, col=ac)
    ofs = check_size(ofs, 'ofs')
    check_min_length(alphas, ofs + w.m, 'alphas')
    if w.is_empty:
        return

    buf = w.buf
    for i in range(w.m):
        offx, incx = w.row_seq(i)
        blas.scal(alphas[ofs + i], buf, w.n, offx=offx, incx=incx)


def axpy(
    x: NDArray[Any],
    y: NDArray[Any],
    *,
    alpha: Any = 1,
    m: int | None = None,
    n: int | None = None,
    xr: int = 0,
    xc: int = 0,
    yr: int = 0,
    yc: int = 0,
) -> None:
    """
    y_window += alpha * x_window, in place.

    Args:
        x: Source matrix
        y: Destination matrix (modified in place)
        alpha: Scale factor applied to x
        m: Rows of the windows (default: dim1(x) - xr)
        n: Columns of the windows (default: dim2(x) - xc)
        xr, xc: Source window offset
        yr, yc: Destination window offset
    """
    x = check_source_matrix(x, 'x')
    check_matrix(y, 'y')
    check_writeable(y, 'y')
    check_same_dtype(x, y, names=('x', 'y'))
    alpha = check_scalar(alpha, y.dtype, 'alpha')
    src = Window.resolve(x, 'x', m=m, n=n, row=xr, col=xc)
    dst = Window.resolve(y, 'y', m=src.m, n=src.n, row=yr, col=yc)
    if src.is_empty:
        return

    xbuf, ybuf = src.buf, dst.buf
    if src.full_columns and dst.full_columns:
        blas.axpy(alpha, xbuf, ybuf, src.m * src.n, offx=src.offset(), offy=dst.offset())
        return
    for j in range(src.n):
        blas.axpy(alpha, xbuf, ybuf, src.m, offx=src.offset(0, j), offy=dst.offset(0, j))


# === Diagonals and traces of products ===


def _resolve_op(
    a: NDArray[Any],
    name: str,
    trans: str,
    rows: int | None,
    cols: int | None,
    row: int,
    col: int,
) -> Window:
    """Window whose op() is rows x cols."""
    row = check_size(row, f'{name} row offset')
    col = check_size(col, f'{name} column offset')
    default_rows, default_cols = op_shape(a, trans, row, col)
    rows = default_rows if rows is None else rows
    cols = default_cols if cols is None else cols
    if trans == 'N':
        return Window.resolve(a, name, m=rows, n=cols, row=row, col=col)
    return Window.resolve(a, name, m=cols, n=rows, row=row, col=col)


def _output_vector(
    y: NDArray[Any] | None,
    dtype: np.dtype,
    n: int,
    ofsy: int,
) -> NDArray[Any]:
    if y is None:
        return np.zeros(n + ofsy, dtype=dtype)
    check_vector(y, 'y')
    check_writeable(y, 'y')
    if y.dtype != dtype:
        raise ValidationError(f"Inconsistent dtypes: a={dtype}, y={y.dtype}")
    check_min_length(y, ofsy + n, 'y')
    return y


def _update_diag(
    y: NDArray[Any],
    diag: NDArray[Any],
    alpha: Any,
    beta: Any,
    ofsy: int,
) -> None:
    """y[ofsy:ofsy+n] = alpha * diag + beta * y[ofsy:ofsy+n]."""
    n = diag.shape[0]
    if beta == 0:
        # y is not read, so NaN/Inf in it do not propagate
        y[ofsy:ofsy + n] = 0
    elif beta != 1:
        blas.scal(beta, y, n, offx=ofsy)
    blas.axpy(alpha, diag, y, n, offy=ofsy)


def gemm_diag(
    a: NDArray[Any],
    b: NDArray[Any],
    *,
    n: int | None = None,
    k: int | None = None,
    beta: Any = 0,
    ofsy: int = 0,
    y: NDArray[Any] | None = None,
    transa: str = 'N',
    alpha: Any = 1,
    ar: int = 0,
    ac: int = 0,
    transb: str = 'N',
    br: int = 0,
    bc: int = 0,
) -> NDArray[Any]:
    """
    Diagonal of the product of two (sub-)matrices.

    Computes y[ofsy + i] = alpha * (op(A) op(B))[i, i] + beta * y[ofsy + i]
    for i < n. Each diagonal element is a dot product of length k, so the
    full product is never formed.

    Args:
        a, b: Matrices
        n: Diagonal elements to compute (default: rows of op(A))
        k: Length of each dot product (default: columns of op(A))
        beta: Scale applied to the existing contents of y
        ofsy: Offset into y
        y: Destination (default: fresh zero vector of length n + ofsy)
        transa, transb: 'N', 'T' or 'C'
        alpha: Scale applied to the product
        ar, ac: Window offset in a
        br, bc: Window offset in b

    Returns:
        y
    """
    a = check_source_matrix(a, 'a')
    b = check_source_matrix(b, 'b')
    check_same_dtype(a, b, names=('a', 'b'))
    transa = check_trans(transa, 'transa')
    transb = check_trans(transb, 'transb')
    alpha = check_scalar(alpha, a.dtype, 'alpha')
    beta = check_scalar(beta, a.dtype, 'beta')
    ofsy = check_size(ofsy, 'ofsy')

    wa = _resolve_op(a, 'a', transa, n, k, ar, ac)
    rows_a, cols_a = (wa.m, wa.n) if transa == 'N' else (wa.n, wa.m)
    wb = _resolve_op(b, 'b', transb, cols_a, rows_a, br, bc)
    y = _output_vector(y, a.dtype, rows_a, ofsy)

    conj_a = transa == 'C' and is_complex(a.dtype)
    conj_b = transb == 'C' and is_complex(b.dtype)
    abuf, bbuf = wa.buf, wb.buf
    diag = np.empty(rows_a, dtype=a.dtype)
    for i in range(rows_a):
        offx, incx = wa.op_row(transa, i)
        offy, incy = wb.op_col(transb, i)
        diag[i] = blas.dot(
            abuf, bbuf, cols_a,
            offx=offx, incx=incx, offy=offy, incy=incy,
            conj_x=conj_a, conj_y=conj_b,
        )
    _update_diag(y, diag, alpha, beta, ofsy)
    return y


def syrk_diag(
    a: NDArray[Any],
    *,
    n: int | None = None,
    k: int | None = None,
    beta: Any = 0,
    ofsy: int = 0,
    y: NDArray[Any] | None = None,
    trans: str = 'N',
    alpha: Any = 1,
    ar: int = 0,
    ac: int = 0,
) -> NDArray[Any]:
    """
    Diagonal of the symmetric rank-k product of a (sub-)matrix.

    Computes y[ofsy + i] = alpha * (op(A) op(A)^T)[i, i] + beta * y[ofsy + i]
    for i < n, without conjugation.

    Args:
        a: Matrix
        n: Diagonal elements to compute (default: rows of op(A))
        k: Length of each dot product (default: columns of op(A))
        beta: Scale applied to the existing contents of y
        ofsy: Offset into y
        y: Destination (default: fresh zero vector of length n + ofsy)
        trans: 'N' (A A^T) or 'T' (A^T A)
        alpha: Scale applied to the product
        ar, ac: Window offset

    Returns:
        y
    """
    a = check_source_matrix(a, 'a')
    trans = check_trans(trans, 'trans', allowed='NT')
    alpha = check_scalar(alpha, a.dtype, 'alpha')
    beta = check_scalar(beta, a.dtype, 'beta')
    ofsy = check_size(ofsy, 'ofsy')

    w = _resolve_op(a, 'a', trans, n, k, ar, ac)
    rows, cols = (w.m, w.n) if trans == 'N' else (w.n, w.m)
    y = _output_vector(y, a.dtype, rows, ofsy)

    buf = w.buf
    diag = np.empty(rows, dtype=a.dtype)
    for i in range(rows):
        off, inc = w.op_row(trans, i)
        diag[i] = blas.dot(buf, buf, cols, offx=off, incx=inc, offy=off, incy=inc)
    _update_diag(y, diag, alpha, beta, ofsy)
    return y


def gemm_trace(
    a: NDArray[Any],
    b: NDArray[Any],
    *,
    n: int | None = None,
    k: int | None = None,
    transa: str = 'N',
    ar: int = 0,
    ac: int = 0,
    transb: str = 'N',
    br: int = 0,
    bc: int = 0,
) -> float | complex:
    """
    Trace of the product of two (sub-)matrices (the Frobenius product).

    Computes trace(op(A) op(B)) where op(A) is n x k and op(B) is k x n.
    Uses trace(op(A) op(B)) == trace(op(B) op(A)) to issue
    min(n, k) dot products.

    Args:
        a, b: Matrices
        n: Rows of op(A) and columns of op(B) (default: rows of op(A))
        k: Columns of op(A) and rows of op(B) (default: columns of op(A))
        transa, transb: 'N', 'T' or 'C'
        ar, ac: Window offset in a
        br, bc: Window offset in b
    """
    a = check_source_matrix(a, 'a')
    b = check_source_matrix(b, 'b')
    check_same_dtype(a, b, names=('a', 'b'))
    transa = check_trans(transa, 'transa')
    transb = check_trans(transb, 'transb')

    wa = _resolve_op(a, 'a', transa, n, k, ar, ac)
    rows_a, cols_a = (wa.m, wa.n) if transa == 'N' else (wa.n, wa.m)
    wb = _resolve_op(b, 'b', transb, cols_a, rows_a, br, bc)

    conj_a = transa == 'C' and is_complex(a.dtype)
    conj_b = transb == 'C' and is_complex(b.dtype)
    abuf, bbuf = wa.buf, wb.buf
    total = a.dtype.type(0)
    if rows_a <= cols_a:
        # sum_i op(A)[i, :] . op(B)[:, i]
        for i in range(rows_a):
            offx, incx = wa.op_row(transa, i)
            offy, incy = wb.op_col(transb, i)
            total += blas.dot(
                abuf, bbuf, cols_a,
                offx=offx, incx=incx, offy=offy, incy=incy,
                conj_x=conj_a, conj_y=conj_b,
            )
    else:
        # sum_l op(B)[l, :] . op(A)[:, l]
        for l in range(cols_a):
            offx, incx = wb.op_row(transb, l)
            offy, incy = wa.op_col(transa, l)
            total += blas.dot(
                bbuf, abuf, rows_a,
                offx=offx, incx=incx, offy=offy, incy=incy,
                conj_x=conj_b, conj_y=conj_a,
            )
    return to_python(total, a.dtype)


def syrk_trace(
    a: NDArray[Any],
    *,
    n: int | None = None,
    k: int | None = None,
    ar: int = 0,
    ac: int = 0,
) -> float | complex:
    """
    Trace of A^T A for a (sub-)matrix A (equal to trace of A A^T).

    For real data this is the squared Frobenius norm. Complex elements
    are not conjugated, so the result is the sum of squared elements.

    Args:
        a: Matrix
        n: Rows of the window (default: dim1(a) - ar)
        k: Columns of the window (default: dim2(a) - ac)
        ar, ac: Window offset
    """
    a = check_source_matrix(a, 'a')
    w = Window.resolve(a, 'a', m=n, n=k, row=ar, col=ac)

    buf = w.buf
    total = a.dtype.type(0)
    if w.n <= w.m:
        for j in range(w.n):
            off, inc = w.column(j)
            total += blas.dot(buf, buf, w.m, offx=off, incx=inc, offy=off, incy=inc)
    else:
        for i in range(w.m):
            off, inc = w.row_seq(i)
            total += blas.dot(buf, buf, w.n, offx=off, incx=inc, offy=off, incy=inc)
    return to_python(total, a.dtype)


def symm2_trace(
    a: NDArray[Any],
    b: NDArray[Any],
    *,
    n: int | None = None,
    upa: bool = True,
    ar: int = 0,
    ac: int = 0,
    upb: bool = True,
    br: int = 0,
    bc: int = 0,
) -> float | complex:
    """
    Trace of the product of two symmetric (sub-)matrices.

    Only one triangle of each n x n window is read:
        trace(A B) = sum_i A_ii B_ii + 2 * sum_{i<j} A_ij B_ij

    Args:
        a, b: Matrices
        n: Order of both windows (default: dim1(a) - ar)
        upa: Read the upper triangle of a (else the lower)
        ar, ac: Window offset in a
        upb: Read the upper triangle of b (else the lower)
        br, bc: Window offset in b
    """
    a = check_source_matrix(a, 'a')
    b = check_source_matrix(b, 'b')
    check_same_dtype(a, b, names=('a', 'b'))
    if n is None:
        n = max(a.shape[0] - check_size(ar, 'a row offset'), 0)
    wa = Window.resolve(a, 'a', m=n, n=n, row=ar, col=ac)
    wb = Window.resolve(b, 'b', m=n, n=n, row=br, col=bc)

    abuf, bbuf = wa.buf, wb.buf
    diag = blas.dot(
        abuf, bbuf, wa.n,
        offx=wa.offset(), incx=wa.ld + 1, offy=wb.offset(), incy=wb.ld + 1,
    )

    # Strict triangle, one segment per column j: A_ij (i < j) either
    # from column j of the upper triangle or row j of the lower one.
    off_diag = a.dtype.type(0)
    for j in range(1, wa.n):
        offx, incx = wa.column(j) if upa else wa.row_seq(j)
        offy, incy = wb.column(j) if upb else wb.row_seq(j)
        off_diag += blas.dot(abuf, bbuf, j, offx=offx, incx=incx, offy=offy, incy=incy)
    return to_python(diag + 2 * off_diag, a.dtype)
