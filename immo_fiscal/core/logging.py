"""Logging configuration for immo_fiscal.

Provides structured logging using structlog with JSON output for production
and plain console output for development.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

from immo_fiscal.core.settings import get_settings

# Module-level state for lazy initialization
_configured: bool = False


def configure_logging(
    level: str | None = None,
    json_output: bool | None = None,
) -> structlog.BoundLogger:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to settings,
            then env LOGLEVEL, then INFO.
        json_output: If True, output JSON format. Defaults to settings.

    Returns:
        Configured logger instance.
    """
    global _configured

    # Skip if already configured (idempotent)
    if _configured:
        return structlog.get_logger()

    settings = get_settings()
    log_level = (level or os.environ.get("LOGLEVEL") or settings.log_level).upper()
    numeric_level = getattr(logging, log_level, logging.INFO)
    if json_output is None:
        json_output = settings.json_logs

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _configured = True
    return structlog.get_logger()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger instance, optionally bound to a specific name.

    This function lazily initializes logging on first call.

    Args:
        name: Optional logger name (usually module name).

    Returns:
        Bound logger instance.
    """
    if not _configured:
        configure_logging()

    logger = structlog.get_logger()
    if name:
        return logger.bind(logger_name=name)
    return logger
