"""
Tests for the native BLAS binding.

Validates:
    - Routine lookup per element type
    - Flat buffer addressing (offsets, leading dimension)
    - In-place semantics of scal/axpy/copy, including strided buffers
    - dot with every conjugation combination
    - Rejected native calls surface as NativeCallError
"""

import numpy as np
import pytest

from denseblas.core.compute import blas
from denseblas.core.exceptions import NativeCallError


# ═══════════════════════════════════════════════════════════════════════
# Lookup and addressing
# ═══════════════════════════════════════════════════════════════════════


class TestGetRoutine:

    @pytest.mark.parametrize("prefix", ['s', 'd', 'c', 'z'])
    def test_prefixed_routine(self, prefix):
        routine = blas.get_routine('axpy', prefix)
        assert routine.typecode == prefix

    def test_cached(self):
        assert blas.get_routine('scal', np.float64) is blas.get_routine('scal', 'd')

    def test_real_dotc_is_dot(self):
        assert blas.get_routine('dotc', np.float64) is blas.get_routine('dotu', np.float64)

    def test_unknown_routine(self):
        with pytest.raises(ValueError, match="Unknown BLAS routine"):
            blas.get_routine('gemm', 'd')


class TestAddressing:

    def test_flat_is_column_major_view(self):
        a = np.asfortranarray(np.arange(6.0).reshape(2, 3))
        f = blas.flat(a)
        np.testing.assert_array_equal(f, [0.0, 3.0, 1.0, 4.0, 2.0, 5.0])
        f[1] = -1.0
        assert a[1, 0] == -1.0

    def test_offset(self):
        a = np.zeros((4, 3), order='F')
        assert blas.offset(a, 0, 0) == 0
        assert blas.offset(a, 2, 1) == 6
        assert blas.offset(a, 3, 2) == a.size - 1

    def test_leading_dimension(self):
        assert blas.leading_dimension(np.zeros((4, 3), order='F')) == 4
        assert blas.leading_dimension(np.zeros((0, 3), order='F')) == 1


# ═══════════════════════════════════════════════════════════════════════
# In-place forwards
# ═══════════════════════════════════════════════════════════════════════


class TestScal:

    def test_strided_segment(self, dtype):
        x = np.arange(8).astype(dtype)
        expected = x.copy()
        expected[1:7:3] *= 3
        blas.scal(3, x, 2, offx=1, incx=3)
        np.testing.assert_array_equal(x, expected)

    def test_non_contiguous_buffer_written_back(self):
        base = np.arange(6.0)
        view = base[::2]
        blas.scal(2.0, view, 3)
        np.testing.assert_array_equal(base, [0.0, 1.0, 4.0, 3.0, 8.0, 5.0])

    def test_zero_count_is_noop(self):
        x = np.empty(0)
        blas.scal(2.0, x, 0)
        assert x.shape == (0,)


class TestAxpy:

    def test_offsets_and_strides(self, dtype, tol):
        x = np.arange(1, 7).astype(dtype)
        y = np.ones(6, dtype=dtype)
        expected = y.astype(np.complex128)
        expected[0:6:2] += 2 * np.array([2, 3, 4])
        blas.axpy(2, x, y, 3, offx=1, offy=0, incy=2)
        np.testing.assert_allclose(y, expected, **tol)

    def test_x_unchanged(self):
        x = np.arange(3.0)
        blas.axpy(5.0, x, np.zeros(3), 3)
        np.testing.assert_array_equal(x, [0.0, 1.0, 2.0])


class TestCopy:

    def test_diagonal_stride(self, dtype):
        a = np.asfortranarray(np.arange(9).reshape(3, 3).astype(dtype))
        y = np.zeros(3, dtype=dtype)
        blas.copy(blas.flat(a), y, 3, incx=4)
        np.testing.assert_array_equal(y, np.diag(a))

    def test_into_offset(self):
        y = np.zeros(5)
        blas.copy(np.array([7.0, 8.0]), y, 2, offy=3)
        np.testing.assert_array_equal(y, [0.0, 0.0, 0.0, 7.0, 8.0])


# ═══════════════════════════════════════════════════════════════════════
# dot
# ═══════════════════════════════════════════════════════════════════════


class TestDot:

    @pytest.mark.parametrize("conj_x,conj_y", [
        (False, False), (True, False), (False, True), (True, True),
    ])
    def test_conjugation(self, random_vector, conj_x, conj_y):
        x = random_vector(5, np.complex128)
        y = random_vector(5, np.complex128)
        lhs = np.conj(x) if conj_x else x
        rhs = np.conj(y) if conj_y else y
        result = blas.dot(x, y, 5, conj_x=conj_x, conj_y=conj_y)
        np.testing.assert_allclose(result, np.sum(lhs * rhs))

    def test_conjugation_ignored_for_real(self, random_vector):
        x = random_vector(4)
        y = random_vector(4)
        np.testing.assert_allclose(blas.dot(x, y, 4, conj_x=True), x @ y)

    def test_strided(self, random_vector, dtype, tol):
        x = random_vector(9, dtype)
        y = random_vector(6, dtype)
        expected = np.sum(x.astype(np.complex128)[2:9:3] * y.astype(np.complex128)[0:6:2])
        result = blas.dot(x, y, 3, offx=2, incx=3, offy=0, incy=2)
        np.testing.assert_allclose(result, expected, **tol)

    def test_result_dtype(self, random_vector, dtype):
        x = random_vector(3, dtype)
        assert blas.dot(x, x, 3).dtype == dtype

    def test_zero_count(self):
        result = blas.dot(np.empty(0, dtype=np.complex64), np.empty(0, dtype=np.complex64), 0)
        assert result == 0
        assert result.dtype == np.complex64


# ═══════════════════════════════════════════════════════════════════════
# Native errors
# ═══════════════════════════════════════════════════════════════════════


class TestNativeCallError:

    def test_offset_past_buffer(self):
        with pytest.raises(NativeCallError) as exc_info:
            blas.scal(2.0, np.zeros(3), 2, offx=5)
        assert exc_info.value.routine == 'dscal'
        assert exc_info.value.arguments['offx'] == 5

    def test_count_past_buffer(self):
        with pytest.raises(NativeCallError, match="daxpy"):
            blas.axpy(1.0, np.zeros(2), np.zeros(2), 3)
