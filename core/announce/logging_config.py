"""
Structured Logging Configuration

Logging for announce with structlog:
- Console output for development, JSON output for log aggregation
- Rendered through the standard library so host applications keep control
  of handlers and levels
- Silent below WARNING until the host configures logging

Usage:
    from announce.logging_config import configure_logging, get_logger

    # Configure at startup (optional)
    configure_logging(json_output=False, log_level="DEBUG")

    # In modules
    logger = get_logger(__name__)
    logger.debug("Listener subscribed", topic="ready", cycle=3)
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

from announce.config import LOG_LEVELS, AnnounceSettings, get_settings
from announce.exceptions import ConfigurationError


def _shared_processors(include_timestamps: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if include_timestamps:
        processors.insert(1, structlog.processors.TimeStamper(fmt="iso", utc=True))
    return processors


def _configure_structlog(json_output: bool, include_timestamps: bool) -> None:
    shared_processors = _shared_processors(include_timestamps)

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    json_output: bool = False,
    log_level: str = "INFO",
    include_timestamps: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        json_output: Output logs as JSON (for production)
        log_level: Minimum log level
        include_timestamps: Include ISO timestamps

    Raises:
        ConfigurationError: If ``log_level`` is not a known level name
    """
    level = log_level.upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level: {log_level}", setting="log_level")

    _configure_structlog(json_output, include_timestamps)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )
    logging.getLogger("announce").setLevel(getattr(logging, level))


def configure_from_settings(settings: AnnounceSettings | None = None) -> None:
    """Configure logging from ``AnnounceSettings`` (environment by default)."""
    settings = settings or get_settings()
    configure_logging(
        json_output=settings.json_logs,
        log_level=settings.log_level,
        include_timestamps=settings.include_timestamps,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger.

    If structlog has not been configured yet, the processor chain is
    installed without adding any stdlib handler, so output stays subject to
    the host's logging setup. Loggers are never cached, so a later
    ``configure_logging`` call still reaches module-level loggers.
    """
    if not structlog.is_configured():
        _configure_structlog(json_output=False, include_timestamps=True)
    return structlog.get_logger(name)


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "get_logger",
]
