"""
Dense matrices.

A matrix is a 2D numpy.ndarray in Fortran (column-major) order holding
float32, float64, complex64 or complex128 elements. Operations take
sub-matrix windows through size (m, n, k) and offset (ar, ac, br, bc, ...)
keywords; offsets are 0-based and sizes default to the rest of the matrix.

Public API:
    Creation:    create, make, make0, empty, identity, of_diag, of_array,
                 to_array, init_rows, init_cols, of_col_vecs, to_col_vecs,
                 as_vec, col, copy_row, from_col_vec, from_row_vec,
                 create_mvec, make_mvec, mvec_of_array, mvec_to_array,
                 dim1, dim2
    Transforms:  transpose_copy, transpose, detri, packed, unpacked
    Arithmetic:  copy_diag, trace, scal, scal_cols, scal_rows, axpy,
                 gemm_diag, syrk_diag, gemm_trace, syrk_trace, symm2_trace
    Iterators:   map, fold_cols

Example:
    >>> from denseblas import mat
    >>> a = mat.of_array([[1.0, 2.0], [3.0, 4.0]])
    >>> mat.scal(2.0, a, n=1)
    >>> mat.to_array(a)
    [[2.0, 2.0], [6.0, 4.0]]
"""

from denseblas.mat.creation import (
    as_vec,
    col,
    copy_row,
    create,
    create_mvec,
    dim1,
    dim2,
    empty,
    from_col_vec,
    from_row_vec,
    identity,
    init_cols,
    init_rows,
    make,
    make0,
    make_mvec,
    mvec_of_array,
    mvec_to_array,
    of_array,
    of_col_vecs,
    of_diag,
    to_array,
    to_col_vecs,
)
from denseblas.mat.transform import (
    detri,
    packed,
    transpose,
    transpose_copy,
    unpacked,
)
from denseblas.mat.arith import (
    axpy,
    copy_diag,
    gemm_diag,
    gemm_trace,
    scal,
    scal_cols,
    scal_rows,
    symm2_trace,
    syrk_diag,
    syrk_trace,
    trace,
)
from denseblas.mat.iter import fold_cols, map

__all__ = [
    # Creation
    "as_vec",
    "col",
    "copy_row",
    "create",
    "create_mvec",
    "dim1",
    "dim2",
    "empty",
    "from_col_vec",
    "from_row_vec",
    "identity",
    "init_cols",
    "init_rows",
    "make",
    "make0",
    "make_mvec",
    "mvec_of_array",
    "mvec_to_array",
    "of_array",
    "of_col_vecs",
    "of_diag",
    "to_array",
    "to_col_vecs",
    # Transforms
    "detri",
    "packed",
    "transpose",
    "transpose_copy",
    "unpacked",
    # Arithmetic
    "axpy",
    "copy_diag",
    "gemm_diag",
    "gemm_trace",
    "scal",
    "scal_cols",
    "scal_rows",
    "symm2_trace",
    "syrk_diag",
    "syrk_trace",
    "trace",
    # Iterators
    "fold_cols",
    "map",
]
