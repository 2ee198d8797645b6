"""Tests for structured logging setup."""

import io
import json
import logging

import pytest
import structlog

from response_converter.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    """Reset structlog and root logger after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def _last_line(stream: io.StringIO) -> str:
    return stream.getvalue().strip().splitlines()[-1]


def test_json_output():
    """Test that events are rendered as JSON with level and timestamp."""
    stream = io.StringIO()
    setup_logging(log_level="INFO", log_format="json", stream=stream)

    get_logger("test").info("mapping_registry_built", rule_count=3)

    record = json.loads(_last_line(stream))
    assert record["event"] == "mapping_registry_built"
    assert record["rule_count"] == 3
    assert record["level"] == "info"
    assert "timestamp" in record


def test_console_output():
    """Test the human readable renderer."""
    stream = io.StringIO()
    setup_logging(log_level="DEBUG", log_format="console", stream=stream)

    get_logger("test").debug("object_passed_through", cls="pkg.Cls")

    line = _last_line(stream)
    assert "object_passed_through" in line
    assert "pkg.Cls" in line


def test_level_filtering():
    """Test that events below the configured level are dropped."""
    stream = io.StringIO()
    setup_logging(log_level="WARNING", log_format="json", stream=stream)

    get_logger("test").info("hidden")
    get_logger("test").warning("shown")

    assert "hidden" not in stream.getvalue()
    assert "shown" in stream.getvalue()


@pytest.mark.parametrize(
    "kwargs",
    [{"log_level": "LOUD"}, {"log_format": "xml"}],
)
def test_invalid_arguments(kwargs):
    """Test that unknown levels and formats are rejected."""
    with pytest.raises(ValueError):
        setup_logging(**kwargs)


def test_converter_logs_registry_build():
    """Test that building a registry emits an event."""
    from response_converter.registry import MappingRegistry

    stream = io.StringIO()
    setup_logging(log_level="INFO", log_format="json", stream=stream)

    MappingRegistry({"pkg.Cls": {"key": "k", "method": "m"}})

    record = json.loads(_last_line(stream))
    assert record["event"] == "mapping_registry_built"
    assert record["rule_count"] == 1
