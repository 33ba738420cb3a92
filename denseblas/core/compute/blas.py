"""
Native BLAS binding.

Maps matrices onto the flat column-major buffers the native routines work
on and forwards (count, offset, stride) triples to the prefixed BLAS
routine exposed by scipy.linalg.blas.

Every routine used here has an in/out buffer argument. When the buffer is
contiguous and of the routine's dtype the native call writes into it
directly; otherwise the result is copied back, so callers always observe
in-place semantics.

IMPORTANT: callers validate windows before calling in here. The f2py
argument checks in scipy only guard against out-of-buffer access.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Callable
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import blas as sp_blas

from denseblas.core.compute.precision import PREFIX_DTYPES, blas_prefix, resolve_dtype
from denseblas.core.exceptions import NativeCallError


# Routines denseblas forwards to; 'dotu'/'dotc' resolve to '?dot' for real types
ROUTINES = frozenset({'scal', 'axpy', 'copy', 'dotu', 'dotc'})


@lru_cache(maxsize=None)
def _lookup(name: str, prefix: str) -> Callable[..., Any]:
    return sp_blas.get_blas_funcs(name, dtype=PREFIX_DTYPES[prefix])


def get_routine(name: str, dtype: Any) -> Callable[..., Any]:
    """
    Get the native BLAS routine for an element type.

    Args:
        name: Unprefixed routine name ('scal', 'axpy', 'copy', 'dotu', 'dotc')
        dtype: Element type (see resolve_dtype)

    Returns:
        The f2py wrapper of the prefixed routine (e.g. scipy's dscal)

    Raises:
        ValueError: If the routine is not one denseblas forwards to
    """
    if name not in ROUTINES:
        raise ValueError(f"Unknown BLAS routine: {name!r}")
    return _lookup(name, blas_prefix(dtype))


def flat(a: NDArray[Any]) -> NDArray[Any]:
    """
    Column-major flat view of a Fortran-contiguous matrix.

    The view shares data with a; writes through it are visible in a.
    """
    return a.reshape(-1, order='F')


def offset(a: NDArray[Any], row: int, col: int) -> int:
    """Flat offset of element (row, col) of a column-major matrix."""
    return row + col * a.shape[0]


def leading_dimension(a: NDArray[Any]) -> int:
    """Stride between consecutive columns of a column-major matrix."""
    return max(a.shape[0], 1)


def _call(name: str, buf_dtype: np.dtype, *args: Any, **kwargs: Any) -> Any:
    routine = get_routine(name, buf_dtype)
    try:
        return routine(*args, **kwargs)
    except Exception as e:
        # f2py argument checks raise the extension module's own error type
        routine_name = blas_prefix(buf_dtype) + name
        raise NativeCallError(
            f"{routine_name}: native call rejected arguments {kwargs}: {e}",
            routine=routine_name,
            arguments=kwargs,
        ) from e


def _writeback(buf: NDArray[Any], out: NDArray[Any]) -> None:
    if not np.may_share_memory(buf, out):
        buf[...] = out


# === Level 1 forwards on flat buffers ===


def scal(alpha: Any, x: NDArray[Any], n: int, offx: int = 0, incx: int = 1) -> None:
    """x[offx + i*incx] *= alpha for i < n, in place."""
    if n == 0:
        return
    out = _call('scal', x.dtype, alpha, x, n=n, offx=offx, incx=incx)
    _writeback(x, out)


def axpy(
    alpha: Any,
    x: NDArray[Any],
    y: NDArray[Any],
    n: int,
    offx: int = 0,
    incx: int = 1,
    offy: int = 0,
    incy: int = 1,
) -> None:
    """y[offy + i*incy] += alpha * x[offx + i*incx] for i < n, in place."""
    if n == 0:
        return
    out = _call(
        'axpy', y.dtype, x, y,
        n=n, a=alpha, offx=offx, incx=incx, offy=offy, incy=incy,
    )
    _writeback(y, out)


def copy(
    x: NDArray[Any],
    y: NDArray[Any],
    n: int,
    offx: int = 0,
    incx: int = 1,
    offy: int = 0,
    incy: int = 1,
) -> None:
    """y[offy + i*incy] = x[offx + i*incx] for i < n, in place."""
    if n == 0:
        return
    out = _call('copy', y.dtype, x, y, n=n, offx=offx, incx=incx, offy=offy, incy=incy)
    _writeback(y, out)


def dot(
    x: NDArray[Any],
    y: NDArray[Any],
    n: int,
    offx: int = 0,
    incx: int = 1,
    offy: int = 0,
    incy: int = 1,
    *,
    conj_x: bool = False,
    conj_y: bool = False,
) -> Any:
    """
    Dot product of two strided sequences, with optional conjugation.

    Uses ?dotu when no operand is conjugated and ?dotc (which conjugates
    its first argument) otherwise. For real types both flags are ignored.

    Returns:
        numpy scalar of the buffers' dtype; zero when n == 0
    """
    dtype = resolve_dtype(x.dtype)
    if n == 0:
        return dtype.type(0)

    if dtype.kind != 'c' or not (conj_x or conj_y):
        return dtype.type(_call('dotu', dtype, x, y, n=n, offx=offx, incx=incx, offy=offy, incy=incy))

    if conj_x and conj_y:
        result = _call('dotu', dtype, x, y, n=n, offx=offx, incx=incx, offy=offy, incy=incy)
        return dtype.type(np.conj(result))

    if conj_x:
        return dtype.type(_call('dotc', dtype, x, y, n=n, offx=offx, incx=incx, offy=offy, incy=incy))

    # conj(y) . x == y^H x
    return dtype.type(_call('dotc', dtype, y, x, n=n, offx=offy, incx=incy, offy=offx, incy=incx))
