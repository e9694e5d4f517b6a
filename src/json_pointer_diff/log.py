"""Package logger for json-pointer-diff.

Library modules log through the shortcuts below and only at DEBUG level.
No handlers are installed on import; applications that want output call
``init_logging()`` from their entry point.
"""

from __future__ import annotations

import logging

__all__ = [
    "debug",
    "error",
    "info",
    "init_logging",
    "logger",
    "set_log_level",
    "warning",
]


def init_logging(level: int = logging.INFO) -> None:
    """Set up logging for json-pointer-diff entry points.

    Installs a basic stderr handler with a compact format and routes
    ``warnings`` through logging.
    """
    fmt = "[%(levelname)1.1s %(module)s:%(lineno)d] %(message)s"
    logging.basicConfig(format=fmt, level=level)
    logging.captureWarnings(True)


def set_log_level(level: int, set_main: bool = True) -> None:
    """Set a log level for the package logger (and the root logger)."""
    logger.setLevel(level)
    if set_main:
        logging.getLogger().setLevel(level)


logger = logging.getLogger("json_pointer_diff")

debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error
