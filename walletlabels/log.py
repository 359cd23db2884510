"""Logging utilities for walletlabels."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path
from typing import Any

from .util.time import utc_now_iso

LOG_DIR_ENV = "WALLETLABELS_LOG_DIR"
_DEFAULT_HOME_DIR = ".walletlabels"
_DEFAULT_LOG_SUBDIR = "logs"
TEXT_LOG_NAME = "walletlabels.log"
JSON_LOG_NAME = "walletlabels.jsonl"
_ROTATION_BACKUPS = 5
_TEXT_LOG_MAX_BYTES = 5 * 1024 * 1024
_JSON_LOG_MAX_BYTES = 5 * 1024 * 1024

logger = logging.getLogger("walletlabels")


class JsonFormatter(logging.Formatter):
    """Convert log records into JSON strings.

    Fields passed as ``extra={"json": {...}}`` become top-level keys of the
    emitted object.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Serialise *record* and its ``json`` extra into a single line."""
        record.message = record.getMessage()
        data: dict[str, Any] = dict(getattr(record, "json", None) or {})
        data.setdefault("message", record.message)
        data.setdefault("level", record.levelname)
        data.setdefault("timestamp", utc_now_iso())
        if record.exc_info and "exc_info" not in data:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False, default=str)


class JsonlHandler(RotatingFileHandler):
    """Write log records as JSON lines with built-in rotation."""

    def __init__(
        self,
        filename: Path | str,
        *,
        max_bytes: int | None = None,
        backup_count: int = _ROTATION_BACKUPS,
        encoding: str = "utf-8",
        delay: bool = False,
    ) -> None:
        """Initialise handler ensuring the log directory exists."""
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        if max_bytes is None:
            max_bytes = _JSON_LOG_MAX_BYTES
        super().__init__(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding=encoding,
            delay=delay,
        )
        self.setFormatter(JsonFormatter())


def _default_log_dir() -> Path:
    """Return default directory for application logs."""
    return Path.home() / _DEFAULT_HOME_DIR / _DEFAULT_LOG_SUBDIR


def _resolve_log_dir(log_dir: str | Path | None) -> Path:
    """Resolve effective log directory creating it if necessary."""
    if log_dir is not None:
        path = Path(log_dir).expanduser()
    else:
        env_dir = os.environ.get(LOG_DIR_ENV)
        path = Path(env_dir).expanduser() if env_dir else _default_log_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def configure_logging(level: int = logging.INFO, *, log_dir: str | Path | None = None) -> None:
    """Configure the package logger once.

    Console output honours ``level``; the text and JSONL files always receive
    DEBUG records so save/load diagnostics are available after the fact.
    """
    if logger.handlers:
        return

    resolved_dir = _resolve_log_dir(log_dir).resolve()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(stream_handler)

    file_handler = RotatingFileHandler(
        resolved_dir / TEXT_LOG_NAME,
        encoding="utf-8",
        maxBytes=_TEXT_LOG_MAX_BYTES,
        backupCount=_ROTATION_BACKUPS,
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(file_handler)

    json_handler = JsonlHandler(
        resolved_dir / JSON_LOG_NAME,
        backup_count=_ROTATION_BACKUPS,
    )
    json_handler.setLevel(logging.DEBUG)
    logger.addHandler(json_handler)

    logger.setLevel(logging.DEBUG)


__all__ = [
    "JSON_LOG_NAME",
    "JsonFormatter",
    "JsonlHandler",
    "TEXT_LOG_NAME",
    "configure_logging",
    "logger",
]
