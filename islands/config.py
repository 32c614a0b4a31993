"""
Runtime configuration.

Values are read from the environment once, at import time.
"""

from __future__ import annotations

import logging
import os

import structlog

# Default idle window for a game actor (24 hours)
IDLE_TIMEOUT_SECONDS = float(os.getenv("ISLANDS_IDLE_TIMEOUT_SECONDS", str(60 * 60 * 24)))
LOG_LEVEL = os.getenv("ISLANDS_LOG_LEVEL", "INFO").upper()

_configured_logging = False


def configure_logging(level: str | None = None) -> None:
    """Configure structlog once for the process."""
    global _configured_logging
    if _configured_logging:
        return
    numeric_level = logging.getLevelName(level or LOG_LEVEL)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )
    _configured_logging = True
