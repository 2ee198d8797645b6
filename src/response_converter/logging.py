"""
Structured logging configuration for the response converter.

Conversion runs on every API response, so the converter itself only emits
debug-level events per object; configuration problems are logged at error
level before the corresponding exception is raised.
"""

import logging
import sys
from typing import List, Optional, cast

import structlog
from structlog.types import FilteringBoundLogger, Processor

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_LOG_FORMATS = ("json", "console")


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    stream: Optional[object] = None,
) -> None:
    """
    Set up structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json, console)
        stream: Stream for the console handler, defaults to stdout
    """
    level_name = log_level.upper()
    if level_name not in VALID_LOG_LEVELS:
        raise ValueError(f"log_level must be one of {list(VALID_LOG_LEVELS)}")
    if log_format not in VALID_LOG_FORMATS:
        raise ValueError(f"log_format must be one of {list(VALID_LOG_FORMATS)}")
    level = getattr(logging, level_name)

    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.extend(
            [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
        )
    else:
        processors.extend([structlog.dev.ConsoleRenderer(colors=False)])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream or sys.stdout)  # type: ignore[arg-type]
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(level=level, handlers=[handler], format="%(message)s", force=True)


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return cast(FilteringBoundLogger, structlog.get_logger(name))


__all__ = ["setup_logging", "get_logger", "VALID_LOG_LEVELS", "VALID_LOG_FORMATS"]
