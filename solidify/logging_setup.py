"""Structured logging configuration shared by the CLI and the API."""

import logging
import sys

import structlog

from solidify.config import get_settings


def _stderr_logger(*args) -> structlog.PrintLogger:
    # Resolved per logger so a swapped sys.stderr is always honoured
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(debug: bool | None = None, stream=None, level: str | None = None) -> None:
    """Configure structlog processors and the minimum level.

    Console rendering in debug mode, JSON lines otherwise. Logs go to stderr
    unless another stream is given so CLI output stays clean.
    """
    settings = get_settings()
    if debug is None:
        debug = settings.DEBUG
    min_level = logging.getLevelName((level or settings.LOG_LEVEL).upper())
    if not isinstance(min_level, int):
        min_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else min_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream) if stream else _stderr_logger,
        cache_logger_on_first_use=False,
    )
