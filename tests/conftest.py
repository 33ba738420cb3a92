"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from denseblas.core.compute.tolerances import select_tolerance


DTYPES = [np.float32, np.float64, np.complex64, np.complex128]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(params=DTYPES, ids=['s', 'd', 'c', 'z'])
def dtype(request):
    """Each of the four BLAS element types."""
    return np.dtype(request.param)


@pytest.fixture
def tol(dtype):
    """assert_allclose keyword arguments for the current dtype."""
    tier = select_tolerance(dtype)
    return {'rtol': tier.rtol, 'atol': tier.atol}


@pytest.fixture
def random_matrix(rng):
    """Factory for random Fortran-ordered matrices of a given dtype."""
    def make(m, n, dtype=np.float64):
        dtype = np.dtype(dtype)
        a = rng.standard_normal((m, n))
        if dtype.kind == 'c':
            a = a + 1j * rng.standard_normal((m, n))
        return np.asfortranarray(a.astype(dtype))
    return make


@pytest.fixture
def random_vector(rng):
    """Factory for random vectors of a given dtype."""
    def make(n, dtype=np.float64):
        dtype = np.dtype(dtype)
        v = rng.standard_normal(n)
        if dtype.kind == 'c':
            v = v + 1j * rng.standard_normal(n)
        return v.astype(dtype)
    return make
