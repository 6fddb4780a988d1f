"""
Logging configuration for vecstore.

All package loggers live under the ``vecstore`` namespace and share the
handlers installed once on that parent logger.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from vecstore.config import Config

ROOT_LOGGER_NAME = "vecstore"

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s"

_configure_lock = threading.Lock()


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra={"context": {...}}`` is merged in."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            for key, value in context.items():
                entry.setdefault(key, value)

        return json.dumps(entry, ensure_ascii=True, default=str)


def _level(level: Optional[str]) -> int:
    return getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO)


def _file_handler(level: int) -> RotatingFileHandler:
    Config.ensure_directories()
    handler = RotatingFileHandler(
        Config.LOG_DIR / f"{ROOT_LOGGER_NAME}.log",
        maxBytes=Config.LOG_FILE_MAX_BYTES,
        backupCount=Config.LOG_FILE_BACKUP_COUNT,
    )
    handler.setLevel(level)
    if Config.LOG_JSON_FORMAT:
        handler.setFormatter(JsonFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
    else:
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Install console (and, with LOG_TO_FILE, rotating file) handlers on the
    ``vecstore`` logger. Safe to call repeatedly; handlers are added once.

    Returns:
        The package root logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    with _configure_lock:
        root.setLevel(_level(level))
        if root.handlers:
            return root

        console = logging.StreamHandler(sys.stdout)
        console.setLevel(_level(level))
        console.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(console)

        if Config.LOG_TO_FILE:
            root.addHandler(_file_handler(_level(level)))
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger ``vecstore.<name>``; configures the package logger on first use."""
    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        configure_logging()
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_collection_event(
    logger: logging.Logger,
    event: str,
    *,
    backend: str,
    collection: str,
    **context: Any,
) -> None:
    """Emit an INFO record for a collection lifecycle change.

    The backend and collection name travel as structured context so the JSON
    file handler can index them.
    """
    logger.info(
        f"{event} collection '{collection}'",
        extra={"context": {"event": event, "backend": backend, "collection": collection, **context}},
    )
