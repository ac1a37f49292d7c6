"""Logging for release-registry.

Usage:
    >>> from release_registry.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Resolved %s", version)  # %-style arguments only

Module loggers propagate to the ``release_registry`` logger, the only
one with a handler (see logger.config).
"""

import logging

from release_registry.logger.config import (
    ROOT_LOGGER_NAME,
    LogSettings,
    configure_logging,
    load_log_settings,
    shutdown_logging,
    update_logger_from_config,
)
from release_registry.logger.formatters import ConsoleFormatter

__all__ = [
    "ConsoleFormatter",
    "LogSettings",
    "configure_logging",
    "get_logger",
    "load_log_settings",
    "shutdown_logging",
    "update_logger_from_config",
]


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a logger, starting the listener on first use."""
    configure_logging()
    return logging.getLogger(name)
