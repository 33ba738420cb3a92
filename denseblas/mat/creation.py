"""
Matrix creation and accessors.

A matrix is a 2D numpy.ndarray in Fortran (column-major) order holding
one of the four BLAS element types. Functions documented as sharing data
return views: writes through the result are visible in the argument.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray

from denseblas.core.compute import blas
from denseblas.core.compute.precision import resolve_dtype
from denseblas.core.exceptions import DimensionError
from denseblas.core.validation import (
    check_array,
    check_index,
    check_matrix,
    check_min_length,
    check_ndim,
    check_same_dtype,
    check_scalar,
    check_size,
    check_source_matrix,
    check_vector,
    check_writeable,
)


# === Creation ===


def create(m: int, n: int, *, dtype: Any = None) -> NDArray[Any]:
    """Uninitialized m x n matrix."""
    m = check_size(m, 'm')
    n = check_size(n, 'n')
    return np.empty((m, n), dtype=resolve_dtype(dtype), order='F')


def make(m: int, n: int, x: Any, *, dtype: Any = None) -> NDArray[Any]:
    """m x n matrix with every element equal to x."""
    a = create(m, n, dtype=dtype)
    a.fill(check_scalar(x, a.dtype, 'x'))
    return a


def make0(m: int, n: int, *, dtype: Any = None) -> NDArray[Any]:
    """m x n matrix of zeros."""
    m = check_size(m, 'm')
    n = check_size(n, 'n')
    return np.zeros((m, n), dtype=resolve_dtype(dtype), order='F')


def empty(*, dtype: Any = None) -> NDArray[Any]:
    """The 0 x 0 matrix."""
    return create(0, 0, dtype=dtype)


def identity(n: int, *, dtype: Any = None) -> NDArray[Any]:
    """n x n identity matrix."""
    n = check_size(n, 'n')
    return np.asfortranarray(np.eye(n, dtype=resolve_dtype(dtype)))


def of_diag(v: NDArray[Any]) -> NDArray[Any]:
    """Square diagonal matrix with v on its diagonal."""
    check_vector(v, 'v', contiguous=False)
    n = v.shape[0]
    a = np.zeros((n, n), dtype=v.dtype, order='F')
    if n:
        # diagonal of a column-major n x n matrix has stride n + 1
        blas.copy(np.ascontiguousarray(v), blas.flat(a), n, incy=n + 1)
    return a


def of_array(rows: ArrayLike, *, dtype: Any = None) -> NDArray[Any]:
    """
    Matrix from a row-major nested sequence.

    An empty sequence gives the 0 x 0 matrix.

    Raises:
        ValidationError: If rows are ragged or non-numeric
        DimensionError: If rows is not two-dimensional
    """
    arr = check_array(rows, 'rows', dtype)
    if arr.ndim == 1 and arr.shape[0] == 0:
        return empty(dtype=arr.dtype)
    check_ndim(arr, 2, 'rows')
    return np.array(arr, order='F', copy=True)


def to_array(a: NDArray[Any]) -> list[list[Any]]:
    """Rows of a as nested lists of Python scalars."""
    return check_matrix(a, 'a', fortran=False).tolist()


def init_rows(m: int, n: int, f: Callable[[int, int], Any], *, dtype: Any = None) -> NDArray[Any]:
    """m x n matrix with element (i, j) = f(i, j); f is called row by row."""
    a = create(m, n, dtype=dtype)
    for i in range(a.shape[0]):
        for j in range(a.shape[1]):
            a[i, j] = check_scalar(f(i, j), a.dtype, f'f({i}, {j})')
    return a


def init_cols(m: int, n: int, f: Callable[[int, int], Any], *, dtype: Any = None) -> NDArray[Any]:
    """m x n matrix with element (i, j) = f(i, j); f is called column by column."""
    a = create(m, n, dtype=dtype)
    for j in range(a.shape[1]):
        for i in range(a.shape[0]):
            a[i, j] = check_scalar(f(i, j), a.dtype, f'f({i}, {j})')
    return a


# === Columns and vectors ===


def of_col_vecs(vecs: Sequence[NDArray[Any]]) -> NDArray[Any]:
    """
    Matrix whose columns are copies of vecs.

    An empty sequence gives the 0 x 0 matrix.

    Raises:
        DimensionError: If the vectors differ in length
        ValidationError: If the vectors differ in dtype
    """
    vecs = list(vecs)
    if not vecs:
        return empty()
    for j, v in enumerate(vecs):
        check_vector(v, f'vecs[{j}]', contiguous=False)
    check_same_dtype(*vecs, names=tuple(f'vecs[{j}]' for j in range(len(vecs))))

    m = vecs[0].shape[0]
    lengths = [v.shape[0] for v in vecs]
    if any(length != m for length in lengths):
        raise DimensionError(f"vecs: columns must have equal length, got {lengths}")

    a = create(m, len(vecs), dtype=vecs[0].dtype)
    buf = blas.flat(a)
    for j, v in enumerate(vecs):
        blas.copy(np.ascontiguousarray(v), buf, m, offy=blas.offset(a, 0, j))
    return a


def to_col_vecs(a: NDArray[Any]) -> list[NDArray[Any]]:
    """Copies of the columns of a."""
    check_matrix(a, 'a', fortran=False)
    return [np.array(a[:, j], copy=True) for j in range(a.shape[1])]


def as_vec(a: NDArray[Any]) -> NDArray[Any]:
    """All elements of a in column-major order; data is shared."""
    return blas.flat(check_matrix(a, 'a'))


def col(a: NDArray[Any], j: int) -> NDArray[Any]:
    """Column j of a as a vector; data is shared."""
    check_matrix(a, 'a')
    j = check_index(j, a.shape[1], 'j')
    return a[:, j]


def copy_row(a: NDArray[Any], i: int, *, vec: NDArray[Any] | None = None) -> NDArray[Any]:
    """
    Copy row i of a into vec.

    Args:
        a: Matrix
        i: Row index
        vec: Destination holding at least dim2(a) elements
            (default: fresh vector of length dim2(a))

    Returns:
        vec
    """
    a = check_source_matrix(a, 'a')
    i = check_index(i, a.shape[0], 'i')
    n = a.shape[1]
    if vec is None:
        vec = np.empty(n, dtype=a.dtype)
    else:
        check_vector(vec, 'vec')
        check_writeable(vec, 'vec')
        check_same_dtype(a, vec, names=('a', 'vec'))
        check_min_length(vec, n, 'vec')
    blas.copy(blas.flat(a), vec, n, offx=i, incx=blas.leading_dimension(a))
    return vec


def from_col_vec(v: NDArray[Any]) -> NDArray[Any]:
    """n x 1 matrix backed by v; data is shared."""
    check_vector(v, 'v')
    return v.reshape((v.shape[0], 1), order='F')


def from_row_vec(v: NDArray[Any]) -> NDArray[Any]:
    """1 x n matrix backed by v; data is shared."""
    check_vector(v, 'v')
    return v.reshape((1, v.shape[0]), order='F')


# === One-column matrices ===


def create_mvec(m: int, *, dtype: Any = None) -> NDArray[Any]:
    """Uninitialized matrix with m rows and one column."""
    return create(m, 1, dtype=dtype)


def make_mvec(m: int, x: Any, *, dtype: Any = None) -> NDArray[Any]:
    """Matrix with m rows and one column, every element equal to x."""
    return make(m, 1, x, dtype=dtype)


def mvec_of_array(values: ArrayLike, *, dtype: Any = None) -> NDArray[Any]:
    """One-column matrix holding values."""
    arr = check_array(values, 'values', dtype)
    check_ndim(arr, 1, 'values')
    return np.array(arr.reshape(-1, 1), order='F', copy=True)


def mvec_to_array(a: NDArray[Any]) -> list[Any]:
    """
    First column of a as a list.

    The matrix may have more than one column.

    Raises:
        DimensionError: If a has no columns
    """
    check_matrix(a, 'a', fortran=False)
    if a.shape[1] == 0:
        raise DimensionError("a: matrix has no columns")
    return a[:, 0].tolist()


# === Dimensions ===


def dim1(a: NDArray[Any]) -> int:
    """Number of rows of a."""
    return check_matrix(a, 'a', fortran=False).shape[0]


def dim2(a: NDArray[Any]) -> int:
    """Number of columns of a."""
    return check_matrix(a, 'a', fortran=False).shape[1]
