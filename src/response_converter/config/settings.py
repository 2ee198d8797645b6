"""Process-level settings for the response converter."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..logging import VALID_LOG_FORMATS, VALID_LOG_LEVELS

DEFAULT_MAX_DEPTH = 100


class ConverterSettings(BaseSettings):
    """Runtime settings, overridable through RESPONSE_CONVERTER_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="RESPONSE_CONVERTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format (json, console)")
    max_depth: Optional[int] = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        description="Maximum collection nesting depth accepted by convert(); None disables the limit",
    )
    verify_methods: bool = Field(
        default=False,
        description="Import mapped classes and check their accessors when building the registry",
    )
    config_path: Optional[str] = Field(
        default=None, description="Path to the YAML class mapping configuration"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> str:
        level = str(value or "INFO").upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(VALID_LOG_LEVELS)}")
        return level

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalize_log_format(cls, value: Any) -> str:
        log_format = str(value or "json").lower()
        if log_format not in VALID_LOG_FORMATS:
            raise ValueError(f"log_format must be one of {list(VALID_LOG_FORMATS)}")
        return log_format


@lru_cache()
def get_settings() -> ConverterSettings:
    """Load settings once per process."""
    return ConverterSettings()
