"""Entry point for the command-line interface."""

from __future__ import annotations

import argparse

from walletlabels import __version__
from walletlabels.core.errors import LabelError
from walletlabels.log import configure_logging, logger
from walletlabels.settings import AppSettings, load_app_settings

from .commands import COMMANDS


def build_parser() -> argparse.ArgumentParser:
    """Construct argument parser for CLI commands."""
    parser = argparse.ArgumentParser(
        prog="walletlabels", description="BIP-329 wallet label store"
    )
    parser.add_argument("--settings", help="path to JSON/TOML settings")
    parser.add_argument(
        "--data-dir",
        help="wallet data directory containing labels.jsonl",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    sub = parser.add_subparsers(dest="command", required=True)
    for name, cmd in COMMANDS.items():
        p = sub.add_parser(name, help=cmd.help)
        cmd.add_arguments(p)
        p.set_defaults(func=cmd.func)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = AppSettings()
    if args.settings:
        try:
            settings = load_app_settings(args.settings)
        except (OSError, ValueError) as exc:
            parser.error(f"cannot load settings {args.settings}: {exc}")
    configure_logging(
        settings.logging.numeric_level, log_dir=settings.logging.log_dir
    )
    args.app_settings = settings
    try:
        return args.func(args) or 0
    except LabelError as exc:
        logger.error("%s", exc)
        return 1
    except ValueError as exc:
        logger.error("invalid label: %s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
