"""Logging configuration for the earningsalert package."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

_DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_DEFAULT_FILE = os.getenv("LOG_FILE") or None
_DEFAULT_MAX_MB = int(os.getenv("LOG_MAX_MB", "5"))
_DEFAULT_BACKUPS = int(os.getenv("LOG_BACKUPS", "5"))

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str | int = _DEFAULT_LEVEL,
    log_file: str | Path | None = _DEFAULT_FILE,
    to_console: bool = True,
) -> logging.Logger:
    """Configure the ``earningsalert`` logger with console and rotating-file handlers.

    Calling it again returns the already-configured logger (no duplicate handlers).
    """
    logger = logging.getLogger("earningsalert")
    if logger.handlers:
        return logger

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=_DEFAULT_MAX_MB * 1024 * 1024,
            backupCount=_DEFAULT_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    if to_console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(level)
        logger.addHandler(stream_handler)

    # quiet noisy libs
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return logger
