"""Command-line interface package for walletlabels.

The function :func:`main` is exposed via attribute access
(``from walletlabels.cli import main``).  The implementation lives in the
submodule :mod:`walletlabels.cli.main` and is imported lazily to avoid
shadowing that module when importing ``walletlabels.cli.main`` directly.
"""

from importlib import import_module
from typing import Any


def __getattr__(name: str) -> Any:
    """Resolve :func:`main` lazily from :mod:`walletlabels.cli.main`."""
    if name == "main":
        return import_module(".main", __name__).main
    raise AttributeError(f"module {__name__!r} has no attribute {name}")


__all__ = ["main"]
