"""Exceptions raised while building the class mapping or converting data."""

from typing import Any, Dict, Optional


class ConverterError(RuntimeError):
    """Base exception for all converter errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}'"
            f")"
        )


class ConfigurationError(ConverterError):
    """Exception raised for malformed class mapping configuration."""

    def __init__(
        self,
        message: str = "Configuration error",
        error_code: str = "CONFIGURATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
        config_key: Optional[str] = None,
    ):
        super().__init__(message, error_code, details)
        self.config_key = config_key
        if config_key:
            self.details["config_key"] = config_key


class ValidationError(ConverterError):
    """Exception raised when input data has an unsupported shape."""

    def __init__(
        self,
        message: str,
        error_code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
        path: Optional[str] = None,
    ):
        super().__init__(message, error_code, details)
        self.path = path
        if path is not None:
            self.details["path"] = path


class MaxDepthExceededError(ValidationError):
    """Exception raised when data nesting exceeds the configured depth."""

    def __init__(
        self,
        max_depth: int,
        path: Optional[str] = None,
        message: Optional[str] = None,
    ):
        super().__init__(
            message or f"data nesting exceeds maximum depth of {max_depth}",
            error_code="MAX_DEPTH_EXCEEDED",
            path=path,
        )
        self.max_depth = max_depth
        self.details["max_depth"] = max_depth


__all__ = [
    "ConverterError",
    "ConfigurationError",
    "ValidationError",
    "MaxDepthExceededError",
]
