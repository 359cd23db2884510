"""Persistent label store backed by a BIP-329 JSON Lines file."""
from __future__ import annotations

import os
from pathlib import Path

from ..log import logger
from ..util.time import epoch_millis
from . import label_codec
from .errors import DecodeError, EncodeError, LabelFileNotFoundError, LoadError, SaveError
from .labels import Label, LabelRef, Labels

LABELS_FILENAME = "labels.jsonl"
TEMP_PREFIX = f".{LABELS_FILENAME}.tmp."


class LabelStore:
    """In-memory label collection bound to ``<directory>/labels.jsonl``.

    The store keeps at most one record per :class:`LabelRef`. Mutations stay
    in memory until :meth:`save` writes the whole collection through a
    temporary file that is renamed over the canonical one. Instances are not
    thread-safe and never reload the file after :meth:`open`.
    """

    def __init__(self, labels: Labels, file_path: str | Path) -> None:
        """Wrap ``labels`` persisted at ``file_path``; see :meth:`open`."""
        self._labels = labels
        self.file_path = Path(file_path)

    @classmethod
    def open(cls, directory: str | Path) -> LabelStore:
        """Load the label file in ``directory`` or start empty if it is absent.

        Raises
        ------
        LoadError
            If the file exists but cannot be read or parsed.
        """
        file_path = Path(directory) / LABELS_FILENAME
        logger.debug("Label file path: %s", file_path)
        store = cls(Labels(), file_path)
        try:
            decoded = label_codec.decode_collection(file_path)
        except LabelFileNotFoundError:
            logger.info("Label file %s not found, starting with empty labels.", file_path)
            return store
        except DecodeError as exc:
            raise LoadError(file_path, exc) from exc
        # repeated references in the file collapse to the last occurrence
        for label in decoded.drain():
            store.set_label(label)
        logger.info(
            "Loaded %d labels from %s",
            len(store),
            file_path,
            extra={"json": {"event": "labels.loaded", "path": file_path, "count": len(store)}},
        )
        return store

    # ------------------------------------------------------------------
    # queries
    def get_by_reference(self, ref: LabelRef) -> Label | None:
        """Return the record stored for ``ref`` or ``None``."""
        return self._labels.get(ref)

    def get_text_by_reference(self, ref: LabelRef) -> str | None:
        """Return the text of the record for ``ref`` if it has one."""
        label = self.get_by_reference(ref)
        if label is None:
            return None
        return label.label

    def all_labels(self) -> Labels:
        """Return the live collection; callers must not mutate it."""
        return self._labels

    # ------------------------------------------------------------------
    # mutations
    def set_label(self, label: Label) -> None:
        """Insert ``label`` or replace the record with the same reference."""
        self._labels.set_label(label)

    def import_labels(self, labels: Labels) -> int:
        """Merge ``labels`` into the store, draining the incoming collection.

        Incoming records win over stored ones; within ``labels`` the last
        record for a reference wins. Returns the number of records processed,
        overwrites and exact duplicates included.
        """
        count = 0
        for label in labels.drain():
            self.set_label(label)
            count += 1
        return count

    # ------------------------------------------------------------------
    # persistence
    def save(self) -> None:
        """Atomically write every stored record to :attr:`file_path`.

        Nothing is written when the store is empty and the file has never
        existed. Otherwise the collection is encoded into a sibling temporary
        file which then replaces the canonical file in a single rename.

        Raises
        ------
        SaveError
            If the parent directory is unknown, encoding fails or the rename
            fails. The canonical file keeps its previous content in all cases.
        """
        if not self._labels and not self.file_path.exists():
            logger.debug("No labels to save and file doesn't exist. Skipping save.")
            return

        parent_dir = self.file_path.parent
        if not self.file_path.name or parent_dir == self.file_path:
            raise SaveError(
                f"Cannot get parent directory for label file: {self.file_path}",
                self.file_path,
            )

        temp_path = parent_dir / f"{TEMP_PREFIX}{epoch_millis()}"
        logger.debug(
            "Atomically saving labels to %s via temporary file %s",
            self.file_path,
            temp_path,
        )
        try:
            label_codec.encode_collection(self._labels, temp_path)
        except EncodeError as exc:
            _discard(temp_path)
            raise SaveError(
                f"Failed to export labels to temporary file {temp_path}: {exc.cause}",
                self.file_path,
                exc,
            ) from exc

        try:
            os.replace(temp_path, self.file_path)
        except OSError as exc:
            _discard(temp_path)
            raise SaveError(
                f"Failed to rename temporary label file {temp_path} to {self.file_path}: {exc}",
                self.file_path,
                exc,
            ) from exc

        logger.info(
            "Labels successfully saved to %s",
            self.file_path,
            extra={
                "json": {
                    "event": "labels.saved",
                    "path": self.file_path,
                    "count": len(self._labels),
                }
            },
        )

    def __len__(self) -> int:
        return len(self._labels)


def _discard(temp_path: Path) -> None:
    """Remove ``temp_path``; failures are logged, not raised."""
    try:
        temp_path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove temporary label file %s: %s", temp_path, exc)


__all__ = ["LABELS_FILENAME", "LabelStore"]
