"""Console and log file handlers."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from release_registry.constants import (
    LOG_BACKUP_COUNT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_ROTATION_THRESHOLD_BYTES,
)
from release_registry.logger.formatters import ConsoleFormatter


def level_number(name: str, default: int) -> int:
    """Map a level name such as "debug" to its number, or default."""
    return logging.getLevelNamesMapping().get(name.upper(), default)


def console_handler(level: str) -> logging.StreamHandler:
    """Create the stderr handler; colours only on a terminal."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ConsoleFormatter(color=sys.stderr.isatty()))
    handler.setLevel(level_number(level, logging.WARNING))
    return handler


def file_handler(log_file: Path, level: str) -> RotatingFileHandler | None:
    """Create the rotating log file handler.

    Returns:
        The handler, or None when the log file cannot be opened (a
        read-only home directory must not stop a catalog run)

    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_ROTATION_THRESHOLD_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"File logging disabled ({log_file}): {e}\n")
        return None

    handler.setFormatter(
        logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATE_FORMAT)
    )
    handler.setLevel(level_number(level, logging.INFO))
    return handler
