"""
Element types and precision utilities.

denseblas supports the four BLAS element types, named by the prefix the
native routines carry:

    s  float32      d  float64
    c  complex64    z  complex128
"""

from __future__ import annotations

from typing import Any
import numpy as np

from denseblas.core.exceptions import ValidationError


PREFIX_DTYPES: dict[str, np.dtype] = {
    's': np.dtype(np.float32),
    'd': np.dtype(np.float64),
    'c': np.dtype(np.complex64),
    'z': np.dtype(np.complex128),
}

DTYPE_PREFIXES: dict[np.dtype, str] = {
    dtype: prefix for prefix, dtype in PREFIX_DTYPES.items()
}

DEFAULT_DTYPE: np.dtype = PREFIX_DTYPES['d']


def resolve_dtype(dtype: Any = None) -> np.dtype:
    """
    Normalize a dtype specification to one of the four supported dtypes.

    Args:
        dtype: None (float64), a BLAS prefix letter ('s', 'd', 'c', 'z',
            case-insensitive), a numpy dtype, or a Python/numpy type

    Returns:
        The matching numpy dtype

    Raises:
        ValidationError: If the dtype is not one of float32, float64,
            complex64, complex128
    """
    if dtype is None:
        return DEFAULT_DTYPE

    if isinstance(dtype, str) and dtype.lower() in PREFIX_DTYPES:
        return PREFIX_DTYPES[dtype.lower()]

    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"dtype: cannot interpret {dtype!r}: {e}") from e

    if resolved not in DTYPE_PREFIXES:
        raise ValidationError(
            f"dtype: unsupported element type {resolved}, "
            f"expected one of float32, float64, complex64, complex128"
        )
    return resolved


def blas_prefix(dtype: Any) -> str:
    """BLAS routine prefix ('s', 'd', 'c' or 'z') for a dtype."""
    return DTYPE_PREFIXES[resolve_dtype(dtype)]


def is_complex(dtype: Any) -> bool:
    """True for complex64 and complex128."""
    return resolve_dtype(dtype).kind == 'c'


def machine_epsilon(dtype: Any = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    For complex dtypes this is the epsilon of the component type.
    """
    return float(np.finfo(resolve_dtype(dtype)).eps)


def to_python(value: Any, dtype: Any) -> float | complex:
    """Convert a numpy scalar to a Python float or complex matching dtype."""
    if is_complex(dtype):
        return complex(value)
    return float(value)
