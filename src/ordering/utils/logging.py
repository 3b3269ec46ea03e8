"""Logging configuration for the Ordering domain.

structlog renders JSON in production and staging and a console view
elsewhere. ``LOG_LEVEL`` overrides the level chosen from ``PROTEAN_ENV``.
"""

import logging
import os
import sys

import structlog

_LEVELS = {"production": "INFO", "staging": "INFO", "test": "WARNING"}


def _environment() -> str:
    return (os.getenv("PROTEAN_ENV") or "development").lower()


def configure_logging() -> None:
    env = _environment()
    level = os.getenv("LOG_LEVEL", _LEVELS.get(env, "DEBUG")).upper()

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    # Suppress noisy library loggers
    logging.getLogger("protean").setLevel(logging.WARNING)

    renderer = (
        structlog.processors.JSONRenderer()
        if env in ("production", "staging")
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs) -> None:
    """Bind values that every later log line in this context will carry."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
