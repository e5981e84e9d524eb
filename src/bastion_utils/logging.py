"""Structured logging with structlog.

Development uses structlog's colorized console output; production emits
one JSON object per line so validation reports can be aggregated. Both go
to stderr; stdout belongs to the reports themselves.
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "silent": logging.CRITICAL,
}


@lru_cache(maxsize=1)
def _configure_logging(*, is_production: bool, level_name: str) -> None:
    """Configure structlog for the application.

    Args:
        is_production: Use JSON output for production, colorized for dev.
        level_name: One of the ``LOG_LEVEL`` values; "silent" suppresses output.
    """
    min_level = _LEVELS.get(level_name, logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if is_production:
        structlog.configure(
            processors=[
                *shared_processors,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(min_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
            cache_logger_on_first_use=True,
        )
    else:
        structlog.configure(
            processors=[
                *shared_processors,
                structlog.dev.ConsoleRenderer(colors=True),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(min_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
            cache_logger_on_first_use=True,
        )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a logger for a specific module.

    Args:
        name: Logger name (typically module name like "bastion_schema.validate").

    Returns:
        Configured structlog logger with service context.

    Example:
        >>> log = get_logger("bastion_schema.validate")
        >>> log.debug("payload_validated", schema="user", error_count=0)
    """
    # Lazy configuration on first logger access
    from bastion_utils.settings import get_settings

    settings = get_settings()
    _configure_logging(is_production=settings.is_production, level_name=settings.log_level)

    return structlog.get_logger(service=name)
