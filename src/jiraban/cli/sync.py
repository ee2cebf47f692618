"""Handlers for 'jiraban sync' command."""

import asyncio
import logging
import signal
import sys
import time

from jiraban.cli._common import load_config_or_die, output_json, setup_logging
from jiraban.config import Config
from jiraban.jira import FetchError
from jiraban.sync import SyncResult, run_sync

logger = logging.getLogger(__name__)


def _do_sync(config: Config, jobs: int | None = None, source=None) -> tuple[int, dict]:
    """Core sync logic. Returns (exit_code, result_dict)."""
    try:
        result = asyncio.run(run_sync(config, source=source, jobs=jobs))
    except FetchError as e:
        result = SyncResult(error=f"fetch: {e}")

    exit_code = 0 if result.ok else 1
    return exit_code, result.to_dict()


def _print_result(result: dict) -> None:
    if result["error"] and not result["fetched"]:
        print(f"error: {result['error']}", file=sys.stderr)
        return
    if not result["fetched"]:
        print("no issues found")
        return
    print(f"fetched: {result['fetched']}")
    print(f"written: {len(result['written'])}")
    print(f"unchanged: {len(result['unchanged'])}")
    for key, message in result["failed"].items():
        print(f"error: write {key}: {message}", file=sys.stderr)
    if result["board"]:
        print(f"board: {result['board']}")
    if result["error"]:
        print(f"error: {result['error']}", file=sys.stderr)


def sync(args) -> int:
    """One-shot sync handler. Dispatches to daemon if -d."""
    setup_logging(args.verbose, level=logging.INFO if args.daemon else logging.WARNING)
    config = load_config_or_die(args.env_file, args.json)

    if args.daemon:
        return sync_daemon(args, config)

    exit_code, result = _do_sync(config, jobs=args.jobs)

    if args.json:
        output_json(result)
    else:
        _print_result(result)

    return exit_code


def sync_daemon(args, config: Config) -> int:
    """Loop _do_sync on interval. SIGINT/SIGTERM stops cleanly."""
    running = True

    def _stop(signum, frame):
        nonlocal running
        running = False

    signal.signal(signal.SIGINT, _stop)
    signal.signal(signal.SIGTERM, _stop)

    interval = args.interval

    while running:
        try:
            exit_code, result = _do_sync(config, jobs=args.jobs)
        except Exception:
            logger.exception("sync run failed")
        else:
            if exit_code != 0:
                logger.error("sync failed: %s", result.get("error") or result.get("failed"))
            elif result["written"]:
                logger.info("written: %s", ", ".join(result["written"]))

        # Sleep in 1-second increments for responsive shutdown
        for _ in range(interval):
            if not running:
                break
            time.sleep(1)

    logger.info("stopped")
    return 0
