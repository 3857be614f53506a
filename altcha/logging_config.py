"""
Structured logging configuration using structlog.

JSON lines when log_format is "json", pretty console output otherwise.
Library code only calls structlog.get_logger(); applications embedding
altcha call setup_logging() once at startup.
"""

import logging
import sys

import structlog

from altcha.config import Settings, settings


def setup_logging(config: Settings | None = None) -> None:
    """
    Configure structlog for the library and CLI.

    Args:
        config: Settings to read log_level/log_format from; defaults to the
            process-wide settings
    """
    config = config or settings
    level = getattr(logging, config.log_level.upper())

    if config.log_format == "json":
        # One JSON object per line for log shippers
        renderer = structlog.processors.JSONRenderer()
    else:
        # Colors only when a human is watching
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        # stderr keeps stdout clean for CLI output
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None):
    """
    Get a structlog logger instance.

    Args:
        name: Optional logger name for context

    Returns:
        Configured structlog logger
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger_name=name)
    return logger
