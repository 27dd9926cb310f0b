"""structlog setup for command-line runs."""

import logging
import sys
from typing import Optional, TextIO

import structlog


def configure_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Route structured logs to stderr at the given level.

    Stdout is reserved for the deployment status lines.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
