"""
Vector creation.

A vector is a contiguous 1D numpy.ndarray of one of the four BLAS element
types. These helpers mirror the matrix creation functions so callers can
build the vector arguments (scaling factors, diagonals, packed storage)
the matrix operations take.
"""

from __future__ import annotations

from typing import Any, Callable
import numpy as np
from numpy.typing import ArrayLike, NDArray

from denseblas.core.compute.precision import resolve_dtype
from denseblas.core.validation import (
    check_array,
    check_ndim,
    check_scalar,
    check_size,
    check_vector,
)


def create(n: int, *, dtype: Any = None) -> NDArray[Any]:
    """Uninitialized vector of n elements."""
    n = check_size(n, 'n')
    return np.empty(n, dtype=resolve_dtype(dtype))


def make(n: int, x: Any, *, dtype: Any = None) -> NDArray[Any]:
    """Vector of n elements, each equal to x."""
    n = check_size(n, 'n')
    target = resolve_dtype(dtype)
    return np.full(n, check_scalar(x, target, 'x'), dtype=target)


def make0(n: int, *, dtype: Any = None) -> NDArray[Any]:
    """Vector of n zeros."""
    n = check_size(n, 'n')
    return np.zeros(n, dtype=resolve_dtype(dtype))


def init(n: int, f: Callable[[int], Any], *, dtype: Any = None) -> NDArray[Any]:
    """Vector whose element i is f(i)."""
    v = create(n, dtype=dtype)
    for i in range(v.shape[0]):
        v[i] = check_scalar(f(i), v.dtype, f'f({i})')
    return v


def of_array(values: ArrayLike, *, dtype: Any = None) -> NDArray[Any]:
    """
    Vector initialized from a sequence.

    Raises:
        ValidationError: If values are not numeric
        DimensionError: If values are not one-dimensional
    """
    arr = check_array(values, 'values', dtype)
    check_ndim(arr, 1, 'values')
    return np.array(arr, copy=True)


def to_array(v: NDArray[Any]) -> list[Any]:
    """Elements of v as a list of Python scalars."""
    return check_vector(v, 'v', contiguous=False).tolist()


def dim(v: NDArray[Any]) -> int:
    """Number of elements of v."""
    return check_vector(v, 'v', contiguous=False).shape[0]
