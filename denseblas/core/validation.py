"""
Input validation utilities for denseblas.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. Every public operation validates
its arguments here before a native routine sees them.

Design principles:
    - No silent type coercion (except np.asarray on array-likes in check_array)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from __future__ import annotations

import operator
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from denseblas.core.compute.precision import DTYPE_PREFIXES, resolve_dtype
from denseblas.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
    dtype: Any = None,
) -> NDArray[Any]:
    """
    Validate and convert input to a numpy array of a supported dtype.

    Accepts any array-like and converts it. Rejects inputs that result in
    object dtype (indicating mixed types or ragged data) or that cannot be
    represented in the requested element type.

    Args:
        array: Input to validate
        name: Parameter name for error messages
        dtype: Target element type (see resolve_dtype)

    Returns:
        numpy.ndarray with the requested dtype

    Raises:
        ValidationError: If input cannot be converted
    """
    target = resolve_dtype(dtype)
    try:
        raw = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if raw.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged or non-numeric data"
        )

    if raw.size and not np.issubdtype(raw.dtype, np.number) and raw.dtype != np.bool_:
        raise ValidationError(
            f"{name}: non-numeric dtype {raw.dtype}, expected numeric data"
        )

    if np.iscomplexobj(raw) and target.kind != 'c':
        raise ValidationError(
            f"{name}: complex data cannot be stored as {target}"
        )

    return raw.astype(target, copy=False)


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_dtype(array: NDArray[Any], name: str) -> None:
    """
    Verify array holds one of the four BLAS element types.

    Raises:
        ValidationError: If the dtype is unsupported
    """
    if array.dtype not in DTYPE_PREFIXES:
        raise ValidationError(
            f"{name}: unsupported dtype {array.dtype}, "
            f"expected one of float32, float64, complex64, complex128"
        )


def check_matrix(a: Any, name: str, *, fortran: bool = True) -> NDArray[Any]:
    """
    Verify a matrix argument.

    A matrix is a 2D numpy.ndarray of a supported dtype. When fortran is
    True the array must also be Fortran-contiguous, because its buffer is
    handed to BLAS (or shared with the caller) as a flat column-major
    vector.

    Args:
        a: Matrix to check
        name: Parameter name for error messages
        fortran: Require Fortran (column-major) contiguity

    Returns:
        The matrix itself (never a copy)

    Raises:
        ValidationError: If a is not an ndarray, has an unsupported dtype,
            or is not Fortran-contiguous when required
        DimensionError: If a is not 2D
    """
    if not isinstance(a, np.ndarray):
        raise ValidationError(
            f"{name}: expected numpy.ndarray, got {type(a).__name__}"
        )
    check_ndim(a, 2, name)
    check_dtype(a, name)
    if fortran and not a.flags.f_contiguous:
        raise ValidationError(
            f"{name}: matrix must be Fortran-contiguous (column-major); "
            f"use numpy.asfortranarray or denseblas.mat creation functions"
        )
    return a


def check_vector(v: Any, name: str, *, contiguous: bool = True) -> NDArray[Any]:
    """
    Verify a vector argument.

    A vector is a 1D numpy.ndarray of a supported dtype; contiguous
    vectors can be handed to BLAS directly.

    Raises:
        ValidationError: If v is not an ndarray, has an unsupported dtype,
            or is not contiguous when required
        DimensionError: If v is not 1D
    """
    if not isinstance(v, np.ndarray):
        raise ValidationError(
            f"{name}: expected numpy.ndarray, got {type(v).__name__}"
        )
    check_ndim(v, 1, name)
    check_dtype(v, name)
    if contiguous and not v.flags.c_contiguous:
        raise ValidationError(f"{name}: vector must be contiguous")
    return v


def check_source_matrix(a: Any, name: str) -> NDArray[Any]:
    """
    Verify a matrix that is only read, in any memory layout.

    Returns:
        a itself if it is Fortran-contiguous, else a Fortran-ordered copy
    """
    return np.asfortranarray(check_matrix(a, name, fortran=False))


def check_source_vector(v: Any, name: str) -> NDArray[Any]:
    """
    Verify a vector that is only read, with any stride.

    Returns:
        v itself if it is contiguous, else a contiguous copy
    """
    return np.ascontiguousarray(check_vector(v, name, contiguous=False))


def check_writeable(array: NDArray[Any], name: str) -> None:
    """
    Verify array can be modified in place.

    Raises:
        ValidationError: If the array is read-only
    """
    if not array.flags.writeable:
        raise ValidationError(f"{name}: array is read-only")


def check_same_dtype(*arrays: NDArray[Any], names: tuple[str, ...]) -> None:
    """
    Verify all arrays share one element type.

    Raises:
        ValueError: If number of names doesn't match number of arrays
        ValidationError: If the dtypes differ
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    dtypes = [arr.dtype for arr in arrays]
    if len(set(dtypes)) > 1:
        details = ", ".join(f"{name}={dtype}" for name, dtype in zip(names, dtypes))
        raise ValidationError(f"Inconsistent dtypes: {details}")


def check_size(value: Any, name: str) -> int:
    """
    Verify a size or offset is a non-negative integer.

    Args:
        value: Integer-like value (Python or numpy integer)
        name: Parameter name for error messages

    Returns:
        The value as a Python int

    Raises:
        ValidationError: If value is not an integer
        DimensionError: If value is negative
    """
    if isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"{name}: expected integer, got bool")
    try:
        result = operator.index(value)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected integer, got {type(value).__name__}"
        ) from e
    if result < 0:
        raise DimensionError(f"{name}: must be non-negative, got {result}")
    return result


def check_window(
    a: NDArray[Any],
    name: str,
    m: int,
    n: int,
    row: int,
    col: int,
) -> None:
    """
    Verify an m x n sub-matrix starting at (row, col) lies inside a.

    Raises:
        DimensionError: If the window extends past the matrix
    """
    rows, cols = a.shape
    if row + m > rows:
        raise DimensionError(
            f"{name}: rows {row}..{row + m - 1} requested, matrix has {rows} rows"
        )
    if col + n > cols:
        raise DimensionError(
            f"{name}: columns {col}..{col + n - 1} requested, matrix has {cols} columns"
        )


def check_index(index: Any, bound: int, name: str) -> int:
    """
    Verify 0 <= index < bound.

    Raises:
        ValidationError: If index is not an integer
        DimensionError: If index is out of range
    """
    result = check_size(index, name)
    if result >= bound:
        raise DimensionError(f"{name}: index {result} out of range [0, {bound})")
    return result


def check_min_length(v: NDArray[Any], length: int, name: str) -> None:
    """
    Verify vector has at least the required number of elements.

    Raises:
        DimensionError: If v is too short
    """
    if v.shape[0] < length:
        raise DimensionError(
            f"{name}: requires at least {length} elements, got {v.shape[0]}"
        )


def check_trans(trans: Any, name: str, allowed: str = 'NTC') -> str:
    """
    Verify a transpose flag.

    Args:
        trans: Flag ('N', 'T' or 'C', case-insensitive)
        name: Parameter name for error messages
        allowed: Accepted flags

    Returns:
        The upper-case flag

    Raises:
        ValidationError: If the flag is not one of allowed
    """
    if not isinstance(trans, str) or trans.upper() not in allowed or len(trans) != 1:
        raise ValidationError(
            f"{name}: expected one of {', '.join(repr(c) for c in allowed)}, got {trans!r}"
        )
    return trans.upper()


def check_scalar(value: Any, dtype: np.dtype, name: str) -> Any:
    """
    Convert a scalar to the element type of an operation.

    Raises:
        ValidationError: If the value is not numeric, is complex for a
            real dtype, or is finite but out of range for dtype
    """
    if isinstance(value, (str, bytes)) or not np.isscalar(value):
        raise ValidationError(
            f"{name}: expected numeric scalar, got {type(value).__name__}"
        )
    if np.iscomplexobj(value) and dtype.kind != 'c':
        raise ValidationError(f"{name}: complex scalar {value!r} for real dtype {dtype}")
    try:
        with np.errstate(over='ignore'):
            result = dtype.type(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValidationError(f"{name}: cannot convert {value!r} to {dtype}: {e}") from e
    if np.isfinite(complex(value)) and not np.isfinite(result):
        raise ValidationError(f"{name}: {value!r} overflows {dtype}")
    return result
