"""JSON Lines codec for BIP-329 label files."""
from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from .errors import (
    EncodeError,
    LabelFileNotFoundError,
    LabelFileReadError,
    MalformedLabelFileError,
)
from .labels import Label, Labels, label_from_mapping


class _LineError(ValueError):
    """Carry the failing line number out of :func:`loads`."""

    def __init__(self, line_number: int, cause: Exception) -> None:
        self.line_number = line_number
        self.cause = cause
        super().__init__(f"line {line_number}: {cause}")


def parse_line(text: str, *, line_number: int = 1) -> Label:
    """Parse a single JSON object ``text`` into a label record.

    Raises :class:`ValueError` prefixed with ``line <line_number>``.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise _LineError(line_number, exc) from exc
    if not isinstance(data, dict):
        raise _LineError(line_number, ValueError("label record must be a JSON object"))
    try:
        return label_from_mapping(data)
    except ValidationError as exc:
        raise _LineError(line_number, exc) from exc


def loads(text: str) -> Labels:
    """Parse JSON Lines ``text``; blank lines are ignored.

    Raises :class:`ValueError` naming the first offending line. File-level
    callers use :func:`decode_collection`, which reports the same failure as
    :class:`MalformedLabelFileError`.
    """
    labels = Labels()
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        labels.append(parse_line(line, line_number=number))
    return labels


def label_to_mapping(label: Label) -> dict:
    """Return a JSON-ready mapping with ``type`` and ``ref`` leading."""
    data = {"type": label.type, "ref": label.ref}
    data.update(label.model_dump(mode="json", exclude_none=True))
    return data


def dumps(labels: Iterable[Label]) -> str:
    """Serialise ``labels`` into newline-terminated JSON Lines."""
    return "".join(
        json.dumps(label_to_mapping(lbl), ensure_ascii=False) + "\n" for lbl in labels
    )


def decode_collection(path: str | Path) -> Labels:
    """Read the label file at ``path``.

    Raises
    ------
    LabelFileNotFoundError
        If ``path`` does not exist.
    MalformedLabelFileError
        If the file is not UTF-8 or a line is not a valid label record.
    LabelFileReadError
        For any other failure reading the file.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise LabelFileNotFoundError(path, exc) from exc
    except UnicodeDecodeError as exc:
        raise MalformedLabelFileError(path, exc) from exc
    except OSError as exc:
        raise LabelFileReadError(path, exc) from exc
    try:
        return loads(text)
    except _LineError as exc:
        raise MalformedLabelFileError(
            path, exc.cause, line_number=exc.line_number
        ) from exc.cause


def encode_collection(labels: Iterable[Label], path: str | Path) -> None:
    """Write ``labels`` to ``path``, replacing any existing content."""
    path = Path(path)
    try:
        payload = dumps(labels)
        with path.open("w", encoding="utf-8", newline="\n") as fh:
            fh.write(payload)
    except (OSError, TypeError, ValueError) as exc:
        raise EncodeError(path, exc) from exc


__all__ = [
    "decode_collection",
    "dumps",
    "encode_collection",
    "label_to_mapping",
    "loads",
    "parse_line",
]
