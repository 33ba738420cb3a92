"""
Core infrastructure for denseblas.

This module provides shared abstractions and utilities used by the matrix,
vector and configuration sub-packages.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Element types, tolerances and the native BLAS binding
"""

from denseblas.core.exceptions import (
    DenseBLASError,
    ValidationError,
    DimensionError,
    ConfigurationError,
    NativeCallError,
)

__all__ = [
    "DenseBLASError",
    "ValidationError",
    "DimensionError",
    "ConfigurationError",
    "NativeCallError",
]
