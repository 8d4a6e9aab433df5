"""Logging setup for the discsky CLI and API."""

from __future__ import annotations

import logging
import os
import sys

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_log_level(level: str | None = None) -> int:
    """Resolve a level name from the argument or `DISCSKY_LOG_LEVEL`."""
    raw = (level or os.getenv("DISCSKY_LOG_LEVEL", DEFAULT_LOG_LEVEL)).strip().upper()
    if raw not in LOG_LEVELS:
        raise ValueError(f"log level must be one of: {', '.join(LOG_LEVELS)}")
    return LOG_LEVELS[raw]


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the `discsky` logger with a single stderr handler."""
    root = logging.getLogger("discsky")
    root.setLevel(resolve_log_level(level))
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT))
    root.addHandler(handler)
    return root
