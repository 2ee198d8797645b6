"""
Class mapping registry.

Maps fully-qualified class identifiers to the rule describing how instances
of that class are turned into plain data. Lookup falls back to the nearest
registered ancestor, so subclasses inherit their parent's rule.
"""

import importlib
from types import MappingProxyType
from typing import Any, Dict, ItemsView, Iterator, Mapping, Optional, Protocol, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .config.manager import CONF_KEY_CLASSES, KEY_KEY, KEY_METHOD
from .exceptions import ConfigurationError
from .logging import get_logger

logger = get_logger(__name__)


class ConfigSource(Protocol):
    """Anything exposing dotted-key reads, e.g. ConfigManager."""

    def get(self, key: str, default: Any = None) -> Any:
        ...


class ConversionRule(BaseModel):
    """How instances of one class are converted."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    key: str = Field(..., min_length=1, description="Label the accessor result is nested under")
    method: str = Field(..., min_length=1, description="Zero-argument accessor returning a mapping")


def class_identifier(cls: type) -> str:
    """Return the fully-qualified identifier used as registry key."""
    return f"{cls.__module__}.{cls.__qualname__}"


def import_class(identifier: str) -> type:
    """Import a class from its fully-qualified identifier.

    Nested classes are supported by trying progressively shorter module paths.
    An import failure inside a module is kept as the cause of the final error.
    """
    parts = identifier.split(".")
    import_error: Optional[ImportError] = None
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            target: Any = importlib.import_module(module_name)
        except ImportError as e:
            if import_error is None:
                import_error = e
            continue
        try:
            for attr in parts[split:]:
                target = getattr(target, attr)
        except AttributeError:
            continue
        if isinstance(target, type):
            return target
    message = f"cannot import class '{identifier}'"
    if import_error is not None:
        message = f"{message}: {import_error}"
    raise ImportError(message) from import_error


class MappingRegistry:
    """Immutable class identifier -> ConversionRule table."""

    def __init__(
        self,
        classes: Optional[Mapping[Any, Any]] = None,
        verify_methods: bool = False,
    ):
        """
        Build the registry.

        Args:
            classes: Mapping of class identifier (or class) to rule descriptor.
                None means no classes are registered.
            verify_methods: Import every mapped class and check it exposes the
                configured accessor.

        Raises:
            ConfigurationError: If the mapping or any of its entries is malformed.
        """
        rules: Dict[str, ConversionRule] = {}
        if classes is not None:
            if not isinstance(classes, Mapping):
                logger.error(
                    "classes_mapping_invalid",
                    error_type=type(classes).__name__,
                )
                raise ConfigurationError(
                    "classes mapping must be an array",
                    config_key=CONF_KEY_CLASSES,
                    details={"actual_type": type(classes).__name__},
                )
            for cls_key, descriptor in classes.items():
                identifier = self._normalize_identifier(cls_key)
                rules[identifier] = self._build_rule(identifier, descriptor)
                if verify_methods:
                    self._verify_method(identifier, rules[identifier])

        self._rules: Mapping[str, ConversionRule] = MappingProxyType(rules)
        logger.info("mapping_registry_built", rule_count=len(rules))

    @classmethod
    def from_config(
        cls, source: ConfigSource, verify_methods: bool = False
    ) -> "MappingRegistry":
        """Build the registry from the ``response_builder.classes`` config entry."""
        return cls(source.get(CONF_KEY_CLASSES), verify_methods=verify_methods)

    @staticmethod
    def _normalize_identifier(cls_key: Any) -> str:
        if isinstance(cls_key, type):
            return class_identifier(cls_key)
        if isinstance(cls_key, str) and cls_key:
            return cls_key
        raise ConfigurationError(
            f"classes mapping keys must be class names, got {cls_key!r}",
            config_key=CONF_KEY_CLASSES,
        )

    @staticmethod
    def _build_rule(identifier: str, descriptor: Any) -> ConversionRule:
        if not isinstance(descriptor, Mapping):
            raise ConfigurationError(
                f"mapping for class '{identifier}' must be an array "
                f"with '{KEY_KEY}' and '{KEY_METHOD}' entries",
                config_key=f"{CONF_KEY_CLASSES}.{identifier}",
            )
        try:
            return ConversionRule.model_validate(dict(descriptor))
        except PydanticValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise ConfigurationError(
                f"invalid mapping for class '{identifier}': "
                f"'{KEY_KEY}' and '{KEY_METHOD}' must be non-empty strings",
                config_key=f"{CONF_KEY_CLASSES}.{identifier}",
                details={"fields": fields},
            ) from e

    @staticmethod
    def _verify_method(identifier: str, rule: ConversionRule) -> None:
        try:
            target = import_class(identifier)
        except ImportError as e:
            raise ConfigurationError(
                f"mapped class '{identifier}' cannot be imported",
                config_key=f"{CONF_KEY_CLASSES}.{identifier}",
            ) from e
        if not callable(getattr(target, rule.method, None)):
            raise ConfigurationError(
                f"mapped class '{identifier}' has no callable '{rule.method}'",
                config_key=f"{CONF_KEY_CLASSES}.{identifier}",
            )

    def resolve(self, instance: Any) -> Optional[ConversionRule]:
        """Return the rule for ``instance``'s class or nearest registered ancestor."""
        rule, _ = self.resolve_with_origin(type(instance))
        return rule

    def resolve_with_origin(
        self, cls: type
    ) -> Tuple[Optional[ConversionRule], Optional[type]]:
        """Return the rule for ``cls`` and the class the rule was registered for.

        Ancestors are searched in MRO order; Protocol classes are skipped.
        """
        rule = self._rules.get(class_identifier(cls))
        if rule is not None:
            return rule, cls

        for base in cls.__mro__[1:]:
            if getattr(base, "_is_protocol", False):
                continue
            rule = self._rules.get(class_identifier(base))
            if rule is not None:
                logger.debug(
                    "conversion_rule_inherited",
                    cls=class_identifier(cls),
                    origin=class_identifier(base),
                )
                return rule, base

        return None, None

    def get(self, identifier: str) -> Optional[ConversionRule]:
        """Exact lookup by class identifier."""
        return self._rules.get(identifier)

    def items(self) -> ItemsView[str, ConversionRule]:
        """Registered (identifier, rule) pairs."""
        return self._rules.items()

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        """Plain representation, suitable for dumping back to configuration."""
        return {identifier: rule.model_dump() for identifier, rule in self._rules.items()}

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"MappingRegistry(rules={len(self._rules)})"
