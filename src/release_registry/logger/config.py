"""Logging setup for one release-registry run.

Every record goes to the ``release_registry`` logger, whose only handler
is a QueueHandler. A QueueListener thread writes the queued records to
stderr and to a rotating log file, so coroutines never wait on handler
I/O. Levels start from the environment and are replaced by the
settings.conf values once the CLI has read them.
"""

import logging
import os
import queue
import threading
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

from release_registry.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    LOG_FILE_NAME,
    VALID_LOG_LEVELS,
)
from release_registry.logger.handlers import (
    console_handler,
    file_handler,
    level_number,
)

ROOT_LOGGER_NAME = "release_registry"

_lock = threading.Lock()
_listener: QueueListener | None = None


@dataclass(slots=True, frozen=True)
class LogSettings:
    """Levels and file used before settings.conf has been read."""

    console_level: str = DEFAULT_CONSOLE_LOG_LEVEL
    file_level: str = DEFAULT_LOG_LEVEL
    log_file: Path | None = None


def _env_console_level() -> str | None:
    level = os.getenv(ENV_LOG_LEVEL, "").upper()
    return level if level in VALID_LOG_LEVELS else None


def load_log_settings() -> LogSettings:
    """Read bootstrap settings from the environment.

    ``LOG_LEVEL`` sets the console level and ``RELEASE_REGISTRY_LOG_DIR``
    the log directory (default ``~/.config/release-registry/logs``).
    """
    log_dir = os.getenv(ENV_LOG_DIR)
    if log_dir:
        log_path = Path(log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = (
            Path.home()
            / CONFIG_DIR_NAME
            / DEFAULT_CONFIG_SUBDIR
            / "logs"
            / LOG_FILE_NAME
        )
    return LogSettings(
        console_level=_env_console_level() or DEFAULT_CONSOLE_LOG_LEVEL,
        log_file=log_path,
    )


def configure_logging(settings: LogSettings | None = None) -> QueueListener:
    """Start the queue listener unless it is already running.

    Args:
        settings: Bootstrap settings (read from the environment if None)

    Returns:
        The running listener

    """
    global _listener
    with _lock:
        if _listener is None:
            _listener = _start(settings or load_log_settings())
        return _listener


def _start(settings: LogSettings) -> QueueListener:
    handlers: list[logging.Handler] = [
        console_handler(settings.console_level)
    ]
    if settings.log_file is not None:
        log_file = file_handler(settings.log_file, settings.file_level)
        if log_file is not None:
            handlers.append(log_file)

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
    listener.start()

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG)
    root.propagate = False
    root.addHandler(QueueHandler(log_queue))
    return listener


def update_logger_from_config(
    console_level: str,
    file_level: str,
    listener: QueueListener | None = None,
) -> None:
    """Apply settings.conf levels to the running handlers.

    ``LOG_LEVEL`` keeps precedence for the console.

    Args:
        console_level: Console level name
        file_level: Log file level name
        listener: Listener to update (the running one if None)

    """
    listener = listener or configure_logging()
    console = level_number(
        _env_console_level() or console_level, logging.WARNING
    )
    file = level_number(file_level, logging.INFO)
    for handler in listener.handlers:
        if isinstance(handler, RotatingFileHandler):
            handler.setLevel(file)
        elif isinstance(handler, logging.StreamHandler):
            handler.setLevel(console)


def shutdown_logging() -> None:
    """Write out queued records and stop the listener.

    Called once when the CLI exits; a later get_logger() call starts a
    new listener.
    """
    global _listener
    with _lock:
        if _listener is None:
            return
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
        _listener = None

        root = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in root.handlers[:]:
            if isinstance(handler, QueueHandler):
                root.removeHandler(handler)
