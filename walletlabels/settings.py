"""Typed application settings with Pydantic validation."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DATA_DIR_ENV = "WALLETLABELS_DATA_DIR"
_DEFAULT_HOME_DIR = ".walletlabels"

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


def default_data_dir() -> Path:
    """Return the wallet data directory used when none is configured."""
    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / _DEFAULT_HOME_DIR


class StoreSettings(BaseModel):
    """Location of the wallet data directory holding ``labels.jsonl``."""

    model_config = ConfigDict(validate_assignment=True)

    data_dir: Path = Field(default_factory=default_data_dir)

    @field_validator("data_dir", mode="before")
    @classmethod
    def _normalize_data_dir(cls, value: str | Path | None) -> Path:
        """Expand ``~`` and fall back to the default for blank values."""
        if value is None or not str(value).strip():
            return default_data_dir()
        return Path(str(value).strip()).expanduser()


class LoggingSettings(BaseModel):
    """Console verbosity and log file location."""

    model_config = ConfigDict(validate_assignment=True)

    level: LogLevelName = "INFO"
    log_dir: Path | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str | int | None) -> str:
        """Accept lowercase names and numeric :mod:`logging` levels."""
        if value is None:
            return "INFO"
        if isinstance(value, int):
            return logging.getLevelName(value)
        return str(value).strip().upper()

    @field_validator("log_dir", mode="before")
    @classmethod
    def _normalize_log_dir(cls, value: str | Path | None) -> str | None:
        """Convert empty strings to ``None``."""
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @property
    def numeric_level(self) -> int:
        """Return :attr:`level` as a :mod:`logging` constant."""
        return logging.getLevelName(self.level)


class AppSettings(BaseModel):
    """Aggregate settings for the application."""

    model_config = ConfigDict(validate_assignment=True)

    store: StoreSettings = Field(default_factory=StoreSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_app_settings(path: str | Path) -> AppSettings:
    """Load :class:`AppSettings` from *path* with validation.

    Format is detected by file extension: ``.toml`` uses :mod:`tomllib`,
    everything else is treated as JSON.  Any validation errors are wrapped into
    :class:`ValueError` with a human-friendly message.
    """
    p = Path(path)
    with p.open("rb") as fh:
        data = tomllib.load(fh) if p.suffix.lower() == ".toml" else json.load(fh)
    try:
        return AppSettings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc
