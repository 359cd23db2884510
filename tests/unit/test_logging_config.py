"""Tests for logging config."""

import json
import logging
from pathlib import Path

import pytest

from walletlabels.core.label_store import LabelStore
from walletlabels.core.labels import AddressRecord
from walletlabels.log import (
    JSON_LOG_NAME,
    TEXT_LOG_NAME,
    JsonFormatter,
    JsonlHandler,
    configure_logging,
    logger,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def reset_logger() -> None:
    prev_handlers = list(logger.handlers)
    prev_level = logger.level
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    try:
        yield
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.handlers.extend(prev_handlers)
        logger.setLevel(prev_level)


@pytest.fixture
def log_dir_env(monkeypatch, tmp_path: Path) -> Path:
    path = tmp_path / "logs"
    monkeypatch.setenv("WALLETLABELS_LOG_DIR", str(path))
    return path


def _stream_handler() -> logging.Handler:
    return next(
        h
        for h in logger.handlers
        if isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.FileHandler)
    )


def _jsonl_entries(log_dir: Path) -> list[dict]:
    for handler in logger.handlers:
        handler.flush()
    text = (log_dir / JSON_LOG_NAME).read_text(encoding="utf-8")
    return [json.loads(line) for line in text.splitlines()]


def test_configure_logging_attaches_handlers_once(
    reset_logger: None, log_dir_env: Path
) -> None:
    configure_logging()
    handlers = list(logger.handlers)
    assert len(handlers) == 3
    assert len([h for h in handlers if isinstance(h, JsonlHandler)]) == 1
    configure_logging()
    assert logger.handlers == handlers


def test_configure_logging_sets_console_level(
    reset_logger: None, log_dir_env: Path
) -> None:
    configure_logging(level=logging.WARNING)
    assert logger.level == logging.DEBUG
    assert _stream_handler().level == logging.WARNING


def test_json_formatter_lifts_extra_fields() -> None:
    record = logging.LogRecord(
        name="walletlabels",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="labels saved",
        args=(),
        exc_info=None,
    )
    record.json = {"event": "labels.saved", "count": 2}
    data = json.loads(JsonFormatter().format(record))
    assert data["event"] == "labels.saved"
    assert data["count"] == 2
    assert data["message"] == "labels saved"
    assert data["level"] == "INFO"


def test_log_directory_and_files_created(
    reset_logger: None, log_dir_env: Path
) -> None:
    configure_logging()
    assert (log_dir_env / TEXT_LOG_NAME).exists()
    assert (log_dir_env / JSON_LOG_NAME).exists()


def test_explicit_log_dir_wins_over_environment(
    reset_logger: None, log_dir_env: Path, tmp_path: Path
) -> None:
    explicit = tmp_path / "explicit"
    configure_logging(log_dir=explicit)
    assert (explicit / JSON_LOG_NAME).exists()
    assert not (log_dir_env / JSON_LOG_NAME).exists()


def test_store_events_reach_jsonl_log(
    reset_logger: None, log_dir_env: Path, tmp_path: Path
) -> None:
    configure_logging()
    wallet_dir = tmp_path / "wallet"
    wallet_dir.mkdir()
    LabelStore.open(wallet_dir)

    entries = _jsonl_entries(log_dir_env)
    messages = [entry["message"] for entry in entries]
    assert any("not found, starting with empty labels" in m for m in messages)
    assert all("timestamp" in entry and "level" in entry for entry in entries)


def test_save_and_load_emit_structured_events(
    reset_logger: None, log_dir_env: Path, tmp_path: Path
) -> None:
    configure_logging()
    wallet_dir = tmp_path / "wallet"
    wallet_dir.mkdir()
    store = LabelStore.open(wallet_dir)
    store.set_label(AddressRecord(ref="bc1qexample", label="cold"))
    store.save()
    LabelStore.open(wallet_dir)

    events = {
        entry["event"]: entry
        for entry in _jsonl_entries(log_dir_env)
        if "event" in entry
    }
    assert events["labels.saved"]["count"] == 1
    assert events["labels.saved"]["path"].endswith("labels.jsonl")
    assert events["labels.loaded"]["count"] == 1
