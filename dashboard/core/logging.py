"""Structured logging for the dashboard service."""

import logging
import sys
from typing import Any

import structlog

from dashboard.core.config import Settings


def _renderer(log_record_format: str) -> Any:
    if log_record_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(settings: Settings) -> None:
    """Configure structlog to write rendered events to stdout.

    Records below ``APP_LOG_LEVEL`` are dropped by the bound logger itself.
    """
    level_name = settings.app.log_level.upper()
    level_no = getattr(logging, level_name, logging.INFO)

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level_no),
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(settings.observability.log_record_format),
        ],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    # uvicorn and httpx log through the stdlib
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level_no)


def get_logger(name: str) -> structlog.BoundLogger:
    """Logger whose events carry ``logger=<name>``."""
    # get_logger's own keyword arguments feed wrap_logger(logger=...), so bind afterwards
    return structlog.get_logger(name).bind(logger=name)


class LoggerMixin:
    """Gives instances a ``logger`` named after their module."""

    @property
    def logger(self) -> structlog.BoundLogger:
        return get_logger(self.__class__.__module__)
