"""
Logging setup.

Routes structlog through the standard library so the level filter applies,
and renders events as JSON lines or as console output.
"""

import logging
import sys
from typing import Optional

import structlog

from ..config import get_settings


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None,
                      cache_logger_on_first_use: bool = True) -> None:
    """
    Configure structlog for the force map package.

    Args:
        level: Log level name, settings ``log_level`` when omitted
        fmt: "json" or "console", settings ``log_format`` when omitted
        cache_logger_on_first_use: Passed through to structlog
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    fmt = fmt or settings.log_format

    level_value = logging.getLevelName(level)
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown log level: {level}")

    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer()
    elif fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        raise ValueError(f"Unknown log format: {fmt}")

    logging.basicConfig(format="%(message)s", stream=sys.stdout,
                        level=level_value, force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_logger_on_first_use,
    )
