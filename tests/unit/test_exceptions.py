"""Tests for converter exceptions."""

import pytest

from response_converter.exceptions import (
    ConfigurationError,
    ConverterError,
    MaxDepthExceededError,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc",
    [
        ConfigurationError("bad"),
        ValidationError("bad"),
        MaxDepthExceededError(3),
    ],
)
def test_hierarchy(exc):
    """Test that all errors share the RuntimeError-based hierarchy."""
    assert isinstance(exc, ConverterError)
    assert isinstance(exc, RuntimeError)


def test_configuration_error_to_dict():
    """Test dictionary format of ConfigurationError."""
    exc = ConfigurationError("classes mapping must be an array", config_key="response_builder.classes")

    assert exc.to_dict() == {
        "error_code": "CONFIGURATION_ERROR",
        "message": "classes mapping must be an array",
        "details": {"config_key": "response_builder.classes"},
    }
    assert str(exc) == "CONFIGURATION_ERROR: classes mapping must be an array"


def test_validation_error_path():
    """Test that the failing location is kept."""
    exc = ValidationError("inconsistent keys", path="$[0]", details={"labeled": 1})

    assert exc.path == "$[0]"
    assert exc.details == {"labeled": 1, "path": "$[0]"}
    assert "ValidationError" in repr(exc)


def test_max_depth_error():
    """Test MaxDepthExceededError defaults."""
    exc = MaxDepthExceededError(5, path="$")

    assert isinstance(exc, ValidationError)
    assert exc.error_code == "MAX_DEPTH_EXCEEDED"
    assert exc.max_depth == 5
    assert exc.details == {"path": "$", "max_depth": 5}
    assert "5" in exc.message


def test_default_error_code():
    """Test that the base error derives its code from the class name."""
    assert ConverterError("x").error_code == "CONVERTERERROR"
