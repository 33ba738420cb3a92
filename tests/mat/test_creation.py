"""
Tests for matrix creation and accessors.

Validates:
    - Creation functions return Fortran-ordered matrices of the requested dtype
    - Conversions to and from nested lists and column vectors
    - Functions documented as sharing data return views
    - One-column matrix helpers and dimension accessors
"""

import numpy as np
import pytest

from denseblas import mat
from denseblas.core.exceptions import DimensionError, ValidationError


# ═══════════════════════════════════════════════════════════════════════
# Creation
# ═══════════════════════════════════════════════════════════════════════


class TestCreate:
    """Every creator returns a Fortran-contiguous matrix."""

    def test_create(self, dtype):
        a = mat.create(3, 2, dtype=dtype)
        assert a.shape == (3, 2)
        assert a.dtype == dtype
        assert a.flags.f_contiguous

    def test_make(self):
        a = mat.make(2, 3, 7.0)
        np.testing.assert_array_equal(a, np.full((2, 3), 7.0))
        assert a.flags.f_contiguous

    def test_make_complex_for_real_rejected(self):
        with pytest.raises(ValidationError, match="x"):
            mat.make(2, 2, 1j)

    def test_make0(self, dtype):
        a = mat.make0(2, 4, dtype=dtype)
        np.testing.assert_array_equal(a, np.zeros((2, 4)))
        assert a.flags.f_contiguous

    def test_empty(self):
        a = mat.empty(dtype='z')
        assert a.shape == (0, 0)
        assert a.dtype == np.complex128

    def test_negative_dimension(self):
        with pytest.raises(DimensionError, match="m"):
            mat.make0(-2, 3)

    def test_identity(self, dtype):
        a = mat.identity(3, dtype=dtype)
        np.testing.assert_array_equal(a, np.eye(3))
        assert a.dtype == dtype
        assert a.flags.f_contiguous


class TestOfDiag:

    def test_square_diagonal(self, random_vector, dtype):
        v = random_vector(4, dtype)
        a = mat.of_diag(v)
        np.testing.assert_array_equal(a, np.diag(v))
        assert a.flags.f_contiguous

    def test_strided_vector(self):
        v = np.arange(6.0)[::2]
        np.testing.assert_array_equal(mat.of_diag(v), np.diag([0.0, 2.0, 4.0]))

    def test_empty(self):
        assert mat.of_diag(np.zeros(0)).shape == (0, 0)


class TestInit:

    def test_init_rows_order(self):
        seen = []
        a = mat.init_rows(2, 2, lambda i, j: seen.append((i, j)) or 10 * i + j)
        assert seen == [(0, 0), (0, 1), (1, 0), (1, 1)]
        np.testing.assert_array_equal(a, [[0.0, 1.0], [10.0, 11.0]])

    def test_init_cols_order(self):
        seen = []
        a = mat.init_cols(2, 2, lambda i, j: seen.append((i, j)) or 10 * i + j)
        assert seen == [(0, 0), (1, 0), (0, 1), (1, 1)]
        np.testing.assert_array_equal(a, [[0.0, 1.0], [10.0, 11.0]])

    def test_bad_result(self):
        with pytest.raises(ValidationError, match=r"f\(0, 0\)"):
            mat.init_cols(1, 1, lambda i, j: None)


# ═══════════════════════════════════════════════════════════════════════
# Conversions
# ═══════════════════════════════════════════════════════════════════════


class TestArrays:

    def test_of_array_row_major_input(self):
        a = mat.of_array([[1, 2, 3], [4, 5, 6]])
        assert a.shape == (2, 3)
        assert a[1, 0] == 4.0
        assert a.flags.f_contiguous

    def test_of_array_copies(self):
        src = np.asfortranarray(np.ones((2, 2)))
        a = mat.of_array(src)
        a[0, 0] = 5.0
        assert src[0, 0] == 1.0

    def test_of_array_empty(self):
        a = mat.of_array([])
        assert a.shape == (0, 0)

    def test_of_array_ragged(self):
        with pytest.raises(ValidationError):
            mat.of_array([[1.0, 2.0], [3.0]])

    def test_of_array_1d_rejected(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            mat.of_array([1.0, 2.0])

    def test_to_array(self):
        assert mat.to_array(mat.of_array([[1, 2], [3, 4]])) == [[1.0, 2.0], [3.0, 4.0]]

    def test_to_array_complex(self):
        result = mat.to_array(mat.of_array([[1j]], dtype='z'))
        assert result == [[1j]]


class TestColumnVectors:

    def test_of_col_vecs(self, random_vector, dtype):
        cols = [random_vector(3, dtype) for _ in range(4)]
        a = mat.of_col_vecs(cols)
        assert a.shape == (3, 4)
        assert a.flags.f_contiguous
        for j, c in enumerate(cols):
            np.testing.assert_array_equal(a[:, j], c)

    def test_of_col_vecs_empty(self):
        assert mat.of_col_vecs([]).shape == (0, 0)

    def test_of_col_vecs_unequal_lengths(self):
        with pytest.raises(DimensionError, match="equal length"):
            mat.of_col_vecs([np.zeros(2), np.zeros(3)])

    def test_of_col_vecs_mixed_dtypes(self):
        with pytest.raises(ValidationError, match="Inconsistent dtypes"):
            mat.of_col_vecs([np.zeros(2), np.zeros(2, dtype=np.complex128)])

    def test_to_col_vecs_copies(self, random_matrix):
        a = random_matrix(3, 2)
        cols = mat.to_col_vecs(a)
        assert len(cols) == 2
        np.testing.assert_array_equal(cols[1], a[:, 1])
        cols[0][0] = 100.0
        assert a[0, 0] != 100.0

    def test_as_vec_shares_data(self):
        a = mat.of_array([[1, 2], [3, 4]])
        v = mat.as_vec(a)
        np.testing.assert_array_equal(v, [1.0, 3.0, 2.0, 4.0])
        v[3] = 0.0
        assert a[1, 1] == 0.0

    def test_as_vec_requires_fortran(self):
        with pytest.raises(ValidationError, match="Fortran"):
            mat.as_vec(np.ones((2, 2)))

    def test_col_shares_data(self, random_matrix):
        a = random_matrix(3, 3)
        c = mat.col(a, 2)
        c[0] = 42.0
        assert a[0, 2] == 42.0

    def test_col_out_of_range(self, random_matrix):
        with pytest.raises(DimensionError, match="out of range"):
            mat.col(random_matrix(3, 3), 3)

    def test_copy_row(self, random_matrix, dtype):
        a = random_matrix(4, 3, dtype)
        np.testing.assert_array_equal(mat.copy_row(a, 2), a[2, :])

    def test_copy_row_c_ordered_source(self):
        a = np.arange(6.0).reshape(2, 3)
        np.testing.assert_array_equal(mat.copy_row(a, 1), [3.0, 4.0, 5.0])

    def test_copy_row_into_vec(self, random_matrix):
        a = random_matrix(2, 3)
        dest = np.full(5, -1.0)
        result = mat.copy_row(a, 1, vec=dest)
        assert result is dest
        np.testing.assert_array_equal(dest[:3], a[1, :])
        np.testing.assert_array_equal(dest[3:], [-1.0, -1.0])

    def test_copy_row_vec_too_short(self, random_matrix):
        with pytest.raises(DimensionError, match="vec"):
            mat.copy_row(random_matrix(2, 3), 0, vec=np.zeros(2))

    def test_from_col_vec_shares_data(self):
        v = np.arange(3.0)
        a = mat.from_col_vec(v)
        assert a.shape == (3, 1)
        assert a.flags.f_contiguous
        a[2, 0] = -1.0
        assert v[2] == -1.0

    def test_from_row_vec_shares_data(self):
        v = np.arange(3.0)
        a = mat.from_row_vec(v)
        assert a.shape == (1, 3)
        assert a.flags.f_contiguous
        a[0, 1] = -1.0
        assert v[1] == -1.0


# ═══════════════════════════════════════════════════════════════════════
# One-column matrices and dimensions
# ═══════════════════════════════════════════════════════════════════════


class TestMvec:

    def test_create_mvec(self):
        assert mat.create_mvec(4, dtype='s').shape == (4, 1)

    def test_make_mvec(self):
        np.testing.assert_array_equal(mat.make_mvec(2, 3.0), [[3.0], [3.0]])

    def test_mvec_of_array(self):
        a = mat.mvec_of_array([1, 2, 3])
        assert a.shape == (3, 1)
        assert a.flags.f_contiguous

    def test_mvec_to_array_first_column(self):
        a = mat.of_array([[1, 2], [3, 4]])
        assert mat.mvec_to_array(a) == [1.0, 3.0]

    def test_mvec_to_array_no_columns(self):
        with pytest.raises(DimensionError, match="no columns"):
            mat.mvec_to_array(mat.make0(3, 0))


class TestDimensions:

    def test_dim1_dim2(self):
        a = mat.make0(3, 5)
        assert mat.dim1(a) == 3
        assert mat.dim2(a) == 5

    def test_c_order_accepted(self):
        assert mat.dim1(np.zeros((2, 7))) == 2

    def test_vector_rejected(self):
        with pytest.raises(DimensionError):
            mat.dim2(np.zeros(3))
