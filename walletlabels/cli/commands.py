"""Command implementations for the CLI interface."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from walletlabels.core import label_codec
from walletlabels.core.label_store import LabelStore
from walletlabels.core.labels import LabelRef, LabelType, make_label
from walletlabels.settings import default_data_dir

TYPE_CHOICES = [t.value for t in LabelType]


@dataclass
class Command:
    """Describe a CLI command and its argument handler."""

    func: Callable[[argparse.Namespace], int | None]
    help: str
    add_arguments: Callable[[argparse.ArgumentParser], None]


def _data_dir(args: argparse.Namespace) -> Path:
    """Return the wallet data directory selected by ``args``."""
    explicit = getattr(args, "data_dir", None)
    if explicit:
        return Path(explicit).expanduser()
    settings = getattr(args, "app_settings", None)
    if settings is not None:
        return settings.store.data_dir
    return default_data_dir()


def _open_store(args: argparse.Namespace) -> LabelStore:
    return LabelStore.open(_data_dir(args))


def cmd_set(args: argparse.Namespace) -> None:
    """Create or replace the label for one reference and save."""
    extra: dict[str, Any] = {}
    if getattr(args, "origin", None):
        if args.type != LabelType.TX.value:
            raise ValueError("--origin only applies to tx labels")
        extra["origin"] = args.origin
    if getattr(args, "unspendable", False):
        if args.type != LabelType.OUTPUT.value:
            raise ValueError("--unspendable only applies to output labels")
        extra["spendable"] = False
    label = make_label(args.type, args.ref, args.text, **extra)
    store = _open_store(args)
    store.set_label(label)
    store.save()
    sys.stdout.write(f"{label.reference}\t{label.label}\n")


def add_set_arguments(p: argparse.ArgumentParser) -> None:
    """Configure parser for the ``set`` command."""
    p.add_argument("type", choices=TYPE_CHOICES, help="kind of labelled entity")
    p.add_argument("ref", help="address, txid, txid:vout, public key or xpub")
    p.add_argument("text", help="label text")
    p.add_argument("--origin", help="key origin / descriptor of the wallet")
    p.add_argument(
        "--unspendable",
        action="store_true",
        help="mark an output as not spendable",
    )


def cmd_get(args: argparse.Namespace) -> int | None:
    """Print the label text stored for one reference."""
    store = _open_store(args)
    ref = LabelRef(args.type, args.ref)
    if store.get_by_reference(ref) is None:
        sys.stderr.write(f"label not found: {ref}\n")
        return 1
    sys.stdout.write(f"{store.get_text_by_reference(ref) or ''}\n")
    return None


def add_get_arguments(p: argparse.ArgumentParser) -> None:
    """Configure parser for the ``get`` command."""
    p.add_argument("type", choices=TYPE_CHOICES, help="kind of labelled entity")
    p.add_argument("ref", help="reference to look up")


def cmd_list(args: argparse.Namespace) -> None:
    """List stored labels, optionally restricted to one kind."""
    store = _open_store(args)
    wanted = getattr(args, "type", None)
    for lbl in store.all_labels():
        if wanted and lbl.type != wanted:
            continue
        sys.stdout.write(f"{lbl.type}\t{lbl.ref}\t{lbl.label or ''}\n")


def add_list_arguments(p: argparse.ArgumentParser) -> None:
    """Configure parser for the ``list`` command."""
    p.add_argument("--type", choices=TYPE_CHOICES, help="only show this kind")


def cmd_import(args: argparse.Namespace) -> None:
    """Merge a BIP-329 file into the store; imported labels win."""
    incoming = label_codec.decode_collection(args.file)
    store = _open_store(args)
    count = store.import_labels(incoming)
    store.save()
    sys.stdout.write(f"imported {count} labels\n")


def add_import_arguments(p: argparse.ArgumentParser) -> None:
    """Configure parser for the ``import`` command."""
    p.add_argument("file", help="BIP-329 JSON Lines file to merge")


def cmd_export(args: argparse.Namespace) -> None:
    """Write every stored label to a BIP-329 file."""
    store = _open_store(args)
    labels = store.all_labels()
    label_codec.encode_collection(labels, args.file)
    sys.stdout.write(f"exported {len(labels)} labels to {args.file}\n")


def add_export_arguments(p: argparse.ArgumentParser) -> None:
    """Configure parser for the ``export`` command."""
    p.add_argument("file", help="destination JSON Lines file")


COMMANDS: dict[str, Command] = {
    "set": Command(cmd_set, "set a label", add_set_arguments),
    "get": Command(cmd_get, "show a label", add_get_arguments),
    "list": Command(cmd_list, "list labels", add_list_arguments),
    "import": Command(cmd_import, "merge labels from a file", add_import_arguments),
    "export": Command(cmd_export, "export labels to a file", add_export_arguments),
}
