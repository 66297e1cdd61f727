"""Logging configuration for glide.

Installs a stderr handler on the ``glide_cli`` logger and, optionally, a
file handler. Set GLIDE_DEBUG=1 to get debug output without --verbose.
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "glide_cli"

# Handlers installed by configure_logging()
_handlers: list[logging.Handler] = []


def debug_enabled() -> bool:
    return os.environ.get("GLIDE_DEBUG", "").lower() in ("1", "true", "yes")


def configure_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Configure glide logging.

    Args:
        verbose: Log DEBUG messages to stderr (default WARNING)
        log_file: Also append DEBUG logs to this file

    Returns:
        The package logger
    """
    close_logging()

    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if verbose or debug_enabled() else logging.WARNING

    stream = logging.StreamHandler(sys.stderr)
    stream.setLevel(level)
    stream.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(stream)
    _handlers.append(stream)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(file_handler)
        _handlers.append(file_handler)
        level = logging.DEBUG

    logger.setLevel(level)
    logger.propagate = False
    return logger


def close_logging() -> None:
    """Remove and close the handlers installed by configure_logging()."""
    logger = logging.getLogger(LOGGER_NAME)
    while _handlers:
        handler = _handlers.pop()
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
