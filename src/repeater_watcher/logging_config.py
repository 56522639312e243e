"""
Centralized logging configuration for the watcher.

setup_logging configures the root logger once with:
- Console output to stdout at DEBUG
- A size-rotated log file (7 files x 10 MB by default) at INFO
"""

import logging
import logging.handlers
import sys
import threading
from typing import Optional

from repeater_watcher.watcher_config import LogSettings

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)
_UNKNOWN_LOGGER_NAME = "<unknown>"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%m/%d/%Y %I:%M:%S"


def _close_handlers(logger: logging.Logger, logger_name: Optional[str] = None) -> None:
    """Close all handlers for a logger, logging any errors."""
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:  # Best-effort cleanup operation
            safe_name = logger_name if logger_name else _UNKNOWN_LOGGER_NAME
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", safe_name, e)


def _reset_root_handlers(root_logger: logging.Logger) -> None:
    _close_handlers(root_logger, "root")
    root_logger.handlers = []


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)


def _build_console_handler() -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(_build_formatter())
    console_handler.setLevel(logging.DEBUG)
    return console_handler


def _build_file_handler(settings: LogSettings) -> logging.Handler:
    settings.directory.mkdir(parents=True, exist_ok=True)
    # backupCount excludes the active file
    file_handler = logging.handlers.RotatingFileHandler(
        settings.path,
        maxBytes=settings.max_bytes,
        backupCount=max(settings.file_count - 1, 0),
        encoding="utf-8",
    )
    file_handler.setFormatter(_build_formatter())
    file_handler.setLevel(logging.INFO)
    return file_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("icmplib").setLevel(logging.WARNING)


def setup_logging(settings: Optional[LogSettings] = None, *, log_to_file: bool = True) -> None:
    """Configure console and rotating file logging for the watcher."""

    with _config_lock:
        root_logger = logging.getLogger()
        _reset_root_handlers(root_logger)

        root_logger.addHandler(_build_console_handler())

        if log_to_file:
            resolved = settings if settings is not None else LogSettings()
            root_logger.addHandler(_build_file_handler(resolved))

        root_logger.setLevel(logging.INFO)
        _suppress_noisy_third_parties()


__all__ = ["LOG_DATE_FORMAT", "LOG_FORMAT", "setup_logging"]
