"""Shared helpers for CLI command handlers."""

import json
import logging
import sys

from jiraban.config import Config, ConfigError, load_config


def setup_logging(verbose: bool, level: int = logging.WARNING) -> None:
    """Log to stderr; --verbose means DEBUG."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if verbose else level,
    )


def load_config_or_die(env_file: str | None, json_mode: bool) -> Config:
    """Load config. Exit 1 with message if a setting is missing or invalid."""
    try:
        return load_config(env_file)
    except ConfigError as e:
        error(f"config: {e}", json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)
