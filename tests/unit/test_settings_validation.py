"""Tests for settings validation."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from walletlabels.settings import AppSettings, load_app_settings

pytestmark = pytest.mark.unit


def test_invalid_settings_raises(tmp_path):
    file = tmp_path / "settings.json"
    file.write_text(json.dumps({"logging": {"level": "LOUD"}}))
    with pytest.raises(ValueError):
        load_app_settings(file)


def test_toml_settings_are_loaded(tmp_path):
    file = tmp_path / "settings.toml"
    file.write_text(
        '[store]\ndata_dir = "~/wallets/main"\n\n[logging]\nlevel = "debug"\n',
        encoding="utf-8",
    )
    settings = load_app_settings(file)
    assert settings.store.data_dir == Path.home() / "wallets" / "main"
    assert settings.logging.level == "DEBUG"
    assert settings.logging.numeric_level == logging.DEBUG


def test_data_dir_defaults_to_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("WALLETLABELS_DATA_DIR", str(tmp_path))
    settings = AppSettings()
    assert settings.store.data_dir == tmp_path


def test_blank_values_fall_back_to_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("WALLETLABELS_DATA_DIR", str(tmp_path))
    settings = AppSettings.model_validate(
        {"store": {"data_dir": "  "}, "logging": {"log_dir": ""}}
    )
    assert settings.store.data_dir == tmp_path
    assert settings.logging.log_dir is None


def test_numeric_log_level_is_accepted():
    settings = AppSettings.model_validate({"logging": {"level": logging.WARNING}})
    assert settings.logging.level == "WARNING"
    assert settings.model_dump(mode="json")["logging"]["level"] == "WARNING"
