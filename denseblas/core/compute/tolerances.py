"""
Tolerance tiers for numerical validation.

Defines precision expectations for the two component widths BLAS works in:
- single (float32 / complex64): relaxed for single-precision accumulation
- double (float64 / complex128): close to machine precision

Used by the test suite and by callers comparing results across precisions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from denseblas.core.compute.precision import blas_prefix


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


SINGLE = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='single',
    description='float32 / complex64: single-precision accumulation',
)

DOUBLE = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='double',
    description='float64 / complex128: reference precision',
)


def select_tolerance(dtype: Any) -> ToleranceTier:
    """Select appropriate tolerance tier for a given element type."""
    if blas_prefix(dtype) in ('s', 'c'):
        return SINGLE
    return DOUBLE
