"""BIP-329 label records, references and the in-memory label collection."""
from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class LabelType(str, Enum):
    """Kinds of wallet entities a label can be attached to."""

    TX = "tx"
    ADDRESS = "addr"
    PUBKEY = "pubkey"
    INPUT = "input"
    OUTPUT = "output"
    XPUB = "xpub"


_TXID_RE = re.compile(r"[0-9a-fA-F]{64}")
_OUTPOINT_RE = re.compile(r"[0-9a-fA-F]{64}:[0-9]+")
_TXID_KINDS = frozenset({LabelType.TX, LabelType.INPUT, LabelType.OUTPUT})


def validate_ref(kind: LabelType | str, ref: str) -> str:
    """Return ``ref`` if it is a well-formed identifier for ``kind``.

    Raises
    ------
    ValueError
        If ``ref`` is empty or does not match the shape required by ``kind``.
    """
    kind = LabelType(kind)
    if not ref:
        raise ValueError(f"{kind.value} reference must not be empty")
    if kind is LabelType.TX and not _TXID_RE.fullmatch(ref):
        raise ValueError(f"invalid transaction id: {ref!r}")
    if kind in (LabelType.INPUT, LabelType.OUTPUT) and not _OUTPOINT_RE.fullmatch(ref):
        raise ValueError(f"invalid {kind.value} reference (expected txid:vout): {ref!r}")
    return ref


def normalize_ref(kind: LabelType | str, ref: str) -> str:
    """Return the canonical spelling of ``ref``: txid hex digits in lower case."""
    if LabelType(kind) in _TXID_KINDS:
        return ref.lower()
    return ref


@dataclass(frozen=True, slots=True)
class LabelRef:
    """Typed identifier of a labelled wallet entity."""

    type: LabelType
    ref: str

    def __post_init__(self) -> None:
        """Coerce plain strings such as ``"tx"`` into :class:`LabelType`.

        Transaction ids are lower-cased so lookups match stored records.
        """
        object.__setattr__(self, "type", LabelType(self.type))
        object.__setattr__(self, "ref", normalize_ref(self.type, self.ref))

    def __str__(self) -> str:
        return f"{self.type.value}:{self.ref}"


class _Record(BaseModel):
    """Fields shared by every label record kind."""

    model_config = ConfigDict(frozen=True, extra="allow")

    ref: str
    label: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_ref(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("ref"), str):
            kind = cls.model_fields["type"].default
            data = {**data, "ref": normalize_ref(kind, data["ref"])}
        return data

    @model_validator(mode="after")
    def _check_ref(self) -> _Record:
        validate_ref(self.type, self.ref)  # type: ignore[attr-defined]
        return self

    @property
    def reference(self) -> LabelRef:
        """Return the :class:`LabelRef` this record is keyed by."""
        return LabelRef(LabelType(self.type), self.ref)  # type: ignore[attr-defined]


class TransactionRecord(_Record):
    """Label attached to a transaction id."""

    type: Literal["tx"] = "tx"
    origin: str | None = None


class AddressRecord(_Record):
    """Label attached to an address."""

    type: Literal["addr"] = "addr"


class PublicKeyRecord(_Record):
    """Label attached to a public key."""

    type: Literal["pubkey"] = "pubkey"


class InputRecord(_Record):
    """Label attached to a transaction input (``txid:vin``)."""

    type: Literal["input"] = "input"


class OutputRecord(_Record):
    """Label attached to a transaction output (``txid:vout``)."""

    type: Literal["output"] = "output"
    spendable: bool = True


class ExtendedPublicKeyRecord(_Record):
    """Label attached to an extended public key."""

    type: Literal["xpub"] = "xpub"


Label = Annotated[
    Union[
        TransactionRecord,
        AddressRecord,
        PublicKeyRecord,
        InputRecord,
        OutputRecord,
        ExtendedPublicKeyRecord,
    ],
    Field(discriminator="type"),
]

_LABEL_ADAPTER: TypeAdapter[Label] = TypeAdapter(Label)


def label_from_mapping(data: Mapping[str, Any]) -> Label:
    """Build the record variant selected by ``data["type"]``.

    Raises :class:`pydantic.ValidationError` (a :class:`ValueError`) on
    unknown types, missing fields or malformed references.
    """
    return _LABEL_ADAPTER.validate_python(dict(data))


def make_label(kind: LabelType | str, ref: str, text: str | None = None, **fields: Any) -> Label:
    """Build a record of ``kind`` from positional command-line style values."""
    return label_from_mapping(
        {"type": LabelType(kind).value, "ref": ref, "label": text, **fields}
    )


class Labels:
    """Ordered collection of label records.

    The collection itself does not enforce unique references: :meth:`append`
    keeps duplicates so an incoming import set can be replayed in order, while
    :meth:`set_label` performs the upsert used by the store.
    """

    __slots__ = ("_items",)

    def __init__(self, labels: Iterable[Label] = ()) -> None:
        self._items: list[Label] = list(labels)

    def append(self, label: Label) -> None:
        """Add ``label`` at the end without checking for duplicates."""
        self._items.append(label)

    def set_label(self, label: Label) -> None:
        """Replace the record sharing ``label``'s reference or append it."""
        ref = label.reference
        for i, existing in enumerate(self._items):
            if existing.reference == ref:
                self._items[i] = label
                return
        self._items.append(label)

    def get(self, ref: LabelRef) -> Label | None:
        """Return the first record whose reference equals ``ref``."""
        for lbl in self._items:
            if lbl.reference == ref:
                return lbl
        return None

    def drain(self) -> Iterator[Label]:
        """Return an iterator over all records and leave the collection empty."""
        items, self._items = self._items, []
        return iter(items)

    def __iter__(self) -> Iterator[Label]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Labels):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"Labels({self._items!r})"


__all__ = [
    "AddressRecord",
    "ExtendedPublicKeyRecord",
    "InputRecord",
    "Label",
    "LabelRef",
    "LabelType",
    "Labels",
    "OutputRecord",
    "PublicKeyRecord",
    "TransactionRecord",
    "label_from_mapping",
    "make_label",
    "normalize_ref",
    "validate_ref",
]
