"""Error types raised by the label codec and the label store."""
from __future__ import annotations

from pathlib import Path


class LabelError(Exception):
    """Base class for label persistence errors."""

    def __init__(self, message: str, path: Path, cause: BaseException | None = None) -> None:
        """Keep the offending ``path`` and underlying ``cause`` for reporting."""
        self.path = Path(path)
        self.cause = cause
        super().__init__(message)


class DecodeError(LabelError):
    """Raised when a label file cannot be turned into a collection."""

    reason = "cannot decode"

    def __init__(self, path: Path, cause: BaseException | None = None) -> None:
        """Build a message naming ``path`` and ``cause``."""
        message = f"{self.reason} label file {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, path, cause)


class LabelFileNotFoundError(DecodeError):
    """Raised when the label file does not exist."""

    reason = "missing"


class MalformedLabelFileError(DecodeError):
    """Raised when the label file content is not valid label data."""

    reason = "malformed"

    def __init__(
        self,
        path: Path,
        cause: BaseException | None = None,
        *,
        line_number: int | None = None,
    ) -> None:
        """Remember the 1-based ``line_number`` of the offending record."""
        self.line_number = line_number
        super().__init__(path, cause)
        if line_number is not None:
            self.args = (f"{self.args[0]} (line {line_number})",)


class LabelFileReadError(DecodeError):
    """Raised when the label file exists but cannot be read."""

    reason = "cannot read"


class EncodeError(LabelError):
    """Raised when a collection cannot be written to a label file."""

    def __init__(self, path: Path, cause: BaseException | None = None) -> None:
        """Build a message naming ``path`` and ``cause``."""
        message = f"cannot write label file {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, path, cause)


class LoadError(LabelError):
    """Raised when an existing label file cannot be loaded into a store."""

    def __init__(self, path: Path, cause: BaseException | None = None) -> None:
        """Build a message naming ``path`` and ``cause``."""
        super().__init__(f"Failed to load labels from {path}: {cause}", path, cause)


class SaveError(LabelError):
    """Raised when the label store cannot be persisted."""


__all__ = [
    "DecodeError",
    "EncodeError",
    "LabelError",
    "LabelFileNotFoundError",
    "LabelFileReadError",
    "LoadError",
    "MalformedLabelFileError",
    "SaveError",
]
