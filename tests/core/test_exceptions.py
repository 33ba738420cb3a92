"""
Tests for the denseblas exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via DenseBLASError)
    - Diagnostic attributes on NativeCallError
    - Default attribute values for optional attributes
"""

import pytest

from denseblas.core.exceptions import (
    ConfigurationError,
    DenseBLASError,
    DimensionError,
    NativeCallError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via DenseBLASError."""

    def test_validation_error_is_denseblas_error(self):
        with pytest.raises(DenseBLASError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("window too large")

    def test_configuration_error_is_denseblas_error(self):
        with pytest.raises(DenseBLASError):
            raise ConfigurationError("no such directory")

    def test_configuration_error_is_not_validation_error(self):
        assert not isinstance(ConfigurationError("x"), ValidationError)

    def test_native_call_error_is_denseblas_error(self):
        with pytest.raises(DenseBLASError):
            raise NativeCallError("dscal failed")

    def test_native_call_error_is_not_validation_error(self):
        """A rejected native call is not an input error."""
        assert not isinstance(NativeCallError("x"), ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# NativeCallError attributes
# ═══════════════════════════════════════════════════════════════════════


class TestNativeCallError:

    def test_attributes(self):
        err = NativeCallError("rejected", routine='daxpy', arguments={'n': 3, 'offx': 7})
        assert err.routine == 'daxpy'
        assert err.arguments == {'n': 3, 'offx': 7}

    def test_defaults(self):
        err = NativeCallError("rejected")
        assert err.routine is None
        assert err.arguments == {}

    def test_message(self):
        err = NativeCallError("zcopy: bad stride", routine='zcopy')
        assert str(err) == "zcopy: bad stride"
