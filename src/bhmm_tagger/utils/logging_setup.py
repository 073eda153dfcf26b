"""Logging configuration shared by the CLI and the pipeline."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "bhmm_tagger"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s.%(funcName)s: %(message)s"

# Finer than DEBUG: full tag sequences and count matrices.
VERBOSE = 5
logging.addLevelName(VERBOSE, "VERBOSE")

# FINE/FINER/FINEST spellings kept for existing run scripts.
LEVEL_ALIASES = {"FINE": logging.INFO, "FINER": logging.DEBUG, "FINEST": VERBOSE}


def parse_level(name: str | int | None) -> int:
    """Translate a level name such as ``INFO`` or ``VERBOSE`` into a number."""

    if name is None:
        return logging.INFO
    if isinstance(name, int):
        return name
    text = name.strip().upper()
    if text.isdigit():
        return int(text)
    if text in LEVEL_ALIASES:
        return LEVEL_ALIASES[text]
    level = logging.getLevelName(text)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {name!r}")
    return level


def configure_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> logging.Logger:
    """Send the package's records to stderr and, optionally, to *log_file*.

    Handlers from an earlier call are closed and replaced. Records do not
    propagate to the root logger.
    """

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return package_logger


__all__ = ["LEVEL_ALIASES", "LOG_FORMAT", "PACKAGE_LOGGER", "VERBOSE", "configure_logging", "parse_level"]
