"""Configuration management for the response converter."""

from .manager import CONF_KEY_CLASSES, KEY_KEY, KEY_METHOD, ConfigManager
from .settings import ConverterSettings, get_settings

__all__ = [
    "CONF_KEY_CLASSES",
    "KEY_KEY",
    "KEY_METHOD",
    "ConfigManager",
    "ConverterSettings",
    "get_settings",
]
