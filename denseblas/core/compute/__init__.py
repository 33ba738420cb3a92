"""
Shared compute infrastructure for denseblas.

Submodules:
    precision: Supported element types and their BLAS prefixes
    tolerances: Tolerance tiers per precision
    blas: Native routine lookup and flat-buffer forwarding
"""

from denseblas.core.compute.precision import (
    DEFAULT_DTYPE,
    blas_prefix,
    is_complex,
    resolve_dtype,
)
from denseblas.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Precision
    "DEFAULT_DTYPE",
    "blas_prefix",
    "is_complex",
    "resolve_dtype",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
