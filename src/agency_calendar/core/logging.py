"""Logging setup for the calendar CLI and previews."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from agency_calendar.config.settings import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
HANDLER_PREFIX = "agency_calendar."

# Request lines from httpx are only interesting when debugging the store.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def reset_logging() -> None:
    """Detach handlers previously installed by :func:`configure_logging`."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if (handler.get_name() or "").startswith(HANDLER_PREFIX):
            root.removeHandler(handler)
            handler.close()


def configure_logging(settings: "Settings") -> Path:
    """Send records to stderr and ``<log_dir>/<log_file>``; returns the log path.

    Safe to call again after settings change: earlier calendar handlers are
    replaced instead of stacked.
    """
    settings.ensure_directories()
    log_path = settings.log_dir / settings.log_file
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    reset_logging()
    formatter = logging.Formatter(LOG_FORMAT)
    stream = logging.StreamHandler()
    stream.set_name(f"{HANDLER_PREFIX}stream")
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.set_name(f"{HANDLER_PREFIX}file")

    root = logging.getLogger()
    for handler in (stream, file_handler):
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)

    quiet = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)
    return log_path
