"""
Exception hierarchy for denseblas.

All exceptions inherit from DenseBLASError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Inputs are rejected before any native routine is called
"""

from __future__ import annotations

from typing import Any


class DenseBLASError(Exception):
    """Base exception for all denseblas errors."""
    pass


class ValidationError(DenseBLASError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks: wrong
    container type, unsupported element type, unknown transpose flag,
    or a matrix whose memory layout cannot be shared with BLAS.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when a sub-matrix window does not fit inside its matrix,
    when a vector is too short for the requested operation, or when
    two arguments have incompatible shapes.
    """
    pass


class ConfigurationError(DenseBLASError):
    """
    Build configuration could not be produced.

    Raised by the build probe, e.g. when the output directory for
    the flag files does not exist.
    """
    pass


class NativeCallError(DenseBLASError):
    """
    A native BLAS routine rejected its arguments.

    Arguments are validated before every call, so this signals a
    mismatch between the computed (offset, stride, count) triple and
    the buffer handed to the routine.

    Attributes:
        routine: Name of the prefixed routine (e.g. 'dscal')
        arguments: Keyword arguments passed to the routine
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        arguments: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.routine = routine
        self.arguments = arguments if arguments is not None else {}
