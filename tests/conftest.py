"""Pytest configuration for the walletlabels test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from walletlabels.log import logger


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep logs and default wallet data inside the test's temporary directory.

    Handlers attached by the code under test are closed afterwards so a
    console handler bound to a captured stream never outlives its test.
    """
    monkeypatch.setenv("WALLETLABELS_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("WALLETLABELS_DATA_DIR", str(tmp_path / "wallet"))
    prev_handlers = list(logger.handlers)
    prev_level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in prev_handlers:
            handler.close()
    logger.handlers[:] = prev_handlers
    logger.setLevel(prev_level)


@pytest.fixture
def wallet_dir(tmp_path: Path) -> Path:
    """Return an existing, empty wallet data directory."""
    path = tmp_path / "wallet"
    path.mkdir()
    return path
