"""
Configuration Manager for the response converter.

Loads the YAML configuration holding the class mapping table and exposes it
through dotted keys, e.g. ``response_builder.classes``.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..exceptions import ConfigurationError
from ..logging import get_logger

logger = get_logger(__name__)

CONF_KEY_CLASSES = "response_builder.classes"
KEY_KEY = "key"
KEY_METHOD = "method"

CONFIG_PATH_ENV = "RESPONSE_CONVERTER_CONFIG_PATH"
CLASSES_ENV = "RESPONSE_BUILDER_CLASSES"

_MISSING = object()


class ConfigManager:
    """
    Manages YAML-configurable settings for the response converter.

    Values are addressed with dotted keys. Environment variables are applied
    on top of the file contents.
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize ConfigManager.

        Args:
            config_path: Path to YAML configuration file. If None, uses default locations.
            data: In-memory configuration. When given, no file is read.
        """
        self._in_memory = data is not None
        self.config_path = self._resolve_config_path(config_path)
        self._config_data: Dict[str, Any] = copy.deepcopy(data) if data else {}
        if not self._in_memory:
            self._load_config()

    def _resolve_config_path(self, config_path: Optional[Union[str, Path]]) -> Path:
        """Resolve configuration file path."""
        if config_path:
            return Path(config_path)

        env_path = os.getenv(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)

        default_paths = [
            Path("config/response_builder.yaml"),
            Path("response_builder.yaml"),
        ]

        for path in default_paths:
            if path.exists():
                return path

        return default_paths[0]

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        self._config_data = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                logger.error("config_yaml_invalid", path=str(self.config_path))
                raise ConfigurationError(f"Invalid YAML configuration: {e}") from e

            if not isinstance(loaded, dict):
                raise ConfigurationError(
                    f"Configuration in {self.config_path} must be a mapping"
                )
            self._config_data = loaded
            logger.debug("config_loaded", path=str(self.config_path))

        self._apply_env_overrides()

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to configuration."""
        classes_json = os.getenv(CLASSES_ENV)
        if classes_json is None:
            return
        try:
            classes = json.loads(classes_json)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"{CLASSES_ENV} must contain valid JSON: {e}",
                config_key=CONF_KEY_CLASSES,
            ) from e
        self.set(CONF_KEY_CLASSES, classes)

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under a dotted key, or ``default``."""
        node: Any = self._config_data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def has(self, key: str) -> bool:
        """Whether a value is stored under the dotted key."""
        return self.get(key, _MISSING) is not _MISSING

    def set(self, key: str, value: Any) -> None:
        """Store a value under a dotted key, creating intermediate sections."""
        *parents, leaf = key.split(".")
        node = self._config_data
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[leaf] = value

    def unset(self, key: str) -> None:
        """Remove the value stored under a dotted key, if any."""
        *parents, leaf = key.split(".")
        node: Any = self._config_data
        for part in parents:
            if not isinstance(node, dict) or part not in node:
                return
            node = node[part]
        if isinstance(node, dict):
            node.pop(leaf, None)

    def get_config_dict(self) -> Dict[str, Any]:
        """Get the full configuration as a dictionary."""
        return copy.deepcopy(self._config_data)

    def save_config(self, path: Optional[Union[str, Path]] = None) -> None:
        """Save current configuration to YAML file."""
        save_path = Path(path) if path else self.config_path
        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self._config_data, f, default_flow_style=False, indent=2)

    def reload_config(self) -> None:
        """Reload configuration from file."""
        if not self._in_memory:
            self._load_config()

    def __repr__(self) -> str:
        """String representation of ConfigManager."""
        return f"ConfigManager(config_path={self.config_path})"
