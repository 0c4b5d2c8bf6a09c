"""Centralized logging configuration.

All modules should use ``get_logger(__name__)``. The CLI entry point calls
``configure_logging`` once; library use leaves handler setup to the host.
"""

import logging
import sys
from typing import Optional

from subtrack.config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stderr handler to the package logger once."""
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger("subtrack")
    root.setLevel(level or LOG_LEVEL)
    root.addHandler(handler)
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Get a named logger instance."""
    return logging.getLogger(name)
