"""Shared pytest fixtures for response converter tests."""

import uuid
from typing import Any, Callable, Dict, Optional

import pytest

from response_converter.config import CONF_KEY_CLASSES, KEY_KEY, KEY_METHOD, ConfigManager
from response_converter.config.settings import get_settings
from response_converter.registry import class_identifier


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and working dir."""
    for var in (
        "RESPONSE_BUILDER_CLASSES",
        "RESPONSE_CONVERTER_CONFIG_PATH",
        "RESPONSE_CONVERTER_MAX_DEPTH",
        "RESPONSE_CONVERTER_VERIFY_METHODS",
        "RESPONSE_CONVERTER_LOG_LEVEL",
        "RESPONSE_CONVERTER_LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def random_string() -> Callable[[Optional[str]], str]:
    """Factory producing unique strings, optionally prefixed."""

    def _make(prefix: Optional[str] = None) -> str:
        value = uuid.uuid4().hex[:12]
        return f"{prefix}_{value}" if prefix else value

    return _make


@pytest.fixture
def config() -> ConfigManager:
    """Empty in-memory configuration."""
    return ConfigManager(data={})


@pytest.fixture
def map_class(config: ConfigManager) -> Callable[..., ConfigManager]:
    """Register ``cls`` in the class mapping held by ``config``."""

    def _map(cls: type, key: str, method: str = "to_array") -> ConfigManager:
        classes: Dict[str, Any] = dict(config.get(CONF_KEY_CLASSES) or {})
        classes[class_identifier(cls)] = {KEY_KEY: key, KEY_METHOD: method}
        config.set(CONF_KEY_CLASSES, classes)
        return config

    return _map
