"""Stdlib logging setup for the Partials CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed here, by the CLI, and nowhere else.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from partials.core.utils.io import ensure_directory

LOGGER_NAME = "partials"
DEFAULT_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_INSTALLED_HANDLER: logging.Handler | None = None


def level_from_name(name: str) -> int:
    """Map a level name (case-insensitive) to its numeric value, INFO if unknown."""
    value = getattr(logging, str(name).upper(), None)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: str = "INFO", *, log_path: Optional[Path] = None) -> logging.Logger:
    """Install a single handler on the ``partials`` logger.

    Idempotent per process: a previously installed handler is replaced, never
    stacked. Logs go to stderr unless ``log_path`` is given, so stdout stays
    clean for resolved output and JSON.
    """
    global _INSTALLED_HANDLER

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_from_name(level))

    if _INSTALLED_HANDLER is not None:
        logger.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
        _INSTALLED_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        ensure_directory(Path(log_path).parent)
        handler = logging.FileHandler(str(log_path), encoding="utf-8")
        handler.setFormatter(logging.Formatter(FILE_FORMAT))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))

    logger.addHandler(handler)
    _INSTALLED_HANDLER = handler
    return logger


__all__ = ["LOGGER_NAME", "configure_logging", "level_from_name"]
