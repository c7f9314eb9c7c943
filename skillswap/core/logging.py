"""Logging configuration and setup for the application.

Log records are structured events: a snake_case event name plus keyword
context, rendered for the console in development and as JSON elsewhere.
"""

import logging
import sys

import structlog

from skillswap.core.config import (
    Environment,
    settings,
)


def _use_json_output() -> bool:
    if settings.LOG_FORMAT.lower() == "json":
        return True
    return settings.APP_ENV != Environment.DEVELOPMENT


def setup_logging() -> None:
    """Configure stdlib logging and structlog processors."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if _use_json_output():
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


setup_logging()

logger = structlog.get_logger("skillswap")
