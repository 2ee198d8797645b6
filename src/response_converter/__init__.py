"""
Response Converter: turns domain objects into plain, JSON-ready structures.

Objects are converted according to a configurable class mapping table; lists
and labeled mappings are walked recursively.
"""

__version__ = "0.1.0"

from .config import ConfigManager, ConverterSettings
from .converter import Converter
from .exceptions import (
    ConfigurationError,
    ConverterError,
    MaxDepthExceededError,
    ValidationError,
)
from .logging import get_logger, setup_logging
from .registry import ConversionRule, MappingRegistry, class_identifier

__all__ = [
    "ConfigManager",
    "ConverterSettings",
    "Converter",
    "ConversionRule",
    "MappingRegistry",
    "class_identifier",
    "ConverterError",
    "ConfigurationError",
    "ValidationError",
    "MaxDepthExceededError",
    "get_logger",
    "setup_logging",
]
