"""CLI argument parser and dispatch for jiraban."""

import argparse

from jiraban.cli.config import show_config
from jiraban.cli.convert import convert
from jiraban.cli.sync import sync


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--env-file", default=None, help="Path to .env file (default: ./.env)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    parser = argparse.ArgumentParser(
        prog="jiraban",
        description="Sync Jira issues into an Obsidian vault with a kanban board",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- sync ---
    sync_p = nouns.add_parser("sync", help="Sync issues into the vault", parents=[common])
    sync_p.add_argument("-d", "--daemon", action="store_true", help="Keep syncing on an interval")
    sync_p.add_argument(
        "--interval", type=_positive_int, default=300, help="Daemon sync interval in seconds (default: 300)"
    )
    sync_p.add_argument(
        "--jobs", type=_positive_int, default=None, help="Notes written in parallel (default: from config)"
    )
    sync_p.set_defaults(func=sync)

    # --- convert ---
    convert_p = nouns.add_parser(
        "convert", help="Convert an ADF or wiki markup description on stdin to markdown", parents=[common]
    )
    convert_p.set_defaults(func=convert)

    # --- config ---
    config_p = nouns.add_parser("config", help="Show resolved configuration", parents=[common])
    config_p.set_defaults(func=show_config)

    return parser
