"""
Converter turning domain objects into plain, JSON-ready data.

Objects whose class (or nearest ancestor class) is registered in the class
mapping are replaced by ``{rule.key: obj.<rule.method>()}``. Lists, tuples and
mappings are walked recursively; everything else is returned unchanged.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from .config.manager import ConfigManager
from .config.settings import ConverterSettings, get_settings
from .exceptions import ConfigurationError, MaxDepthExceededError, ValidationError
from .logging import get_logger
from .registry import ConfigSource, MappingRegistry, class_identifier

logger = get_logger(__name__)

SCALAR_TYPES = (str, bytes, int, float, bool)
CONTAINER_TYPES = (list, tuple, dict)

_UNSET: Any = object()


class Converter:
    """
    Recursively converts objects according to the class mapping.

    The registry is built once, at construction time, and never modified, so
    a single instance can be shared between threads.
    """

    def __init__(
        self,
        config: Optional[Union[ConfigSource, Mapping]] = None,
        *,
        registry: Optional[MappingRegistry] = None,
        max_depth: Optional[int] = _UNSET,
        settings: Optional[ConverterSettings] = None,
    ):
        """
        Initialize Converter.

        Args:
            config: Configuration source holding ``response_builder.classes``,
                or a plain mapping used directly as the class mapping.
                Defaults to a ConfigManager reading the default locations.
            registry: Prebuilt registry; when given, ``config`` is not read.
            max_depth: Maximum collection nesting depth, None for no limit.
                Defaults to the ``max_depth`` setting.
            settings: Runtime settings, defaults to the process settings.

        Raises:
            ConfigurationError: If the class mapping configuration is malformed.
        """
        settings = settings or get_settings()
        if registry is None:
            if config is None:
                config = ConfigManager(settings.config_path)
            if isinstance(config, Mapping):
                registry = MappingRegistry(
                    config, verify_methods=settings.verify_methods
                )
            elif callable(getattr(config, "get", None)):
                registry = MappingRegistry.from_config(
                    config, verify_methods=settings.verify_methods
                )
            else:
                raise ConfigurationError(
                    f"unsupported configuration source: {type(config).__name__}"
                )
        self.registry = registry
        self.max_depth = settings.max_depth if max_depth is _UNSET else max_depth

    def convert(self, data: Any = None) -> Any:
        """
        Convert ``data`` into plain structures.

        Args:
            data: None, scalar, object, list/tuple or mapping, nested arbitrarily

        Returns:
            New structure of the same shape with registered objects converted.
            Input is never modified.

        Raises:
            ValidationError: If a mapping mixes labeled and positional keys.
            MaxDepthExceededError: If nesting is deeper than ``max_depth``.
        """
        return self._convert_value(data, "$", 0)

    def _convert_value(self, value: Any, path: str, depth: int) -> Any:
        value_type = type(value)
        if value is None or value_type in SCALAR_TYPES:
            return value

        # Registered subclasses of builtin types convert like any other object.
        if value_type not in CONTAINER_TYPES:
            rule = self.registry.resolve(value)
            if rule is not None:
                return {rule.key: getattr(value, rule.method)()}

        if isinstance(value, (list, tuple)):
            return self._convert_list(value, path, depth + 1)
        if isinstance(value, Mapping):
            return self._convert_mapping(value, path, depth + 1)
        if not isinstance(value, SCALAR_TYPES):
            logger.debug("object_passed_through", cls=class_identifier(value_type))
        return value

    def _check_depth(self, path: str, depth: int) -> None:
        if self.max_depth is not None and depth > self.max_depth:
            raise MaxDepthExceededError(self.max_depth, path=path)

    def _convert_list(self, items: Any, path: str, depth: int) -> List[Any]:
        self._check_depth(path, depth)
        return [
            self._convert_value(item, f"{path}[{index}]", depth)
            for index, item in enumerate(items)
        ]

    def _convert_mapping(self, data: Mapping, path: str, depth: int) -> Dict[Any, Any]:
        self._check_depth(path, depth)
        self._assert_consistent_keys(data, path)
        return {
            key: self._convert_value(value, f"{path}[{key!r}]", depth)
            for key, value in data.items()
        }

    @staticmethod
    def _assert_consistent_keys(data: Mapping, path: str) -> None:
        """Either all keys are caller-supplied labels or all are positions.

        Integer keys (bool excluded) are positions; any other key is a label.
        """
        positional = sum(
            1 for key in data if isinstance(key, int) and not isinstance(key, bool)
        )
        labeled = len(data) - positional

        if labeled and positional:
            raise ValidationError(
                "inconsistent keys: either all items must be labeled or none",
                path=path,
                details={"labeled": labeled, "positional": positional},
            )
