"""Structured logging setup."""

import logging
import sys

import structlog

from spicecheck.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog for the process.

    Logs go to stderr so command output on stdout stays machine-readable.
    JSON is rendered in production or when ``log_json`` is set.

    Args:
        settings: Application settings
    """
    json_logs = settings.log_json or settings.is_production

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if json_logs
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
