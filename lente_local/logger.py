"""
Logging setup.

Mirrors the browser console: informational events go to INFO, recognition
and API failures to ERROR. Everything is written to stderr and, when
LENTE_LOG_FILE is set, to that file as well.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from .config import get_log_file, get_log_level

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger once and return it."""
    global _configured
    app_logger = logging.getLogger("lente_local")
    if _configured:
        return app_logger

    app_logger.setLevel(getattr(logging, (level or get_log_level()).upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    app_logger.addHandler(console)

    log_file = log_file or get_log_file()
    if log_file:
        Path(log_file).expanduser().parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(Path(log_file).expanduser(), encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(file_handler)

    _configured = True
    return app_logger
