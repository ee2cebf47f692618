"""One sync run: fetch issues → write notes → write board.

All blocking I/O runs via asyncio.to_thread. Notes are written concurrently,
at most config.jobs at a time; nothing is shared between issues.
"""

import asyncio
import logging
from dataclasses import asdict, dataclass, field
from typing import Protocol

from jiraban.board import build_board, render_board
from jiraban.config import Config
from jiraban.jira import JiraClient
from jiraban.models import Issue
from jiraban.notes import NoteWriteError, atomic_write, ensure_dir, render_note, write_note

logger = logging.getLogger(__name__)


class IssueSource(Protocol):
    def fetch_issues(self) -> list[Issue]: ...

    def browse_url(self, key: str) -> str: ...


@dataclass
class SyncResult:
    """What a sync run did. error is set when a whole stage failed."""

    fetched: int = 0
    written: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    board: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failed

    def to_dict(self) -> dict:
        return asdict(self)


def sync_issue(config: Config, source: IssueSource, issue: Issue) -> bool:
    """Render and write one issue note. Returns True if the file changed."""
    machine_region = render_note(issue, source.browse_url(issue.key))
    return write_note(config.note_path(issue.key), machine_region)


def write_board(config: Config, issues: list[Issue]) -> None:
    """Regenerate the board file from the issue list."""
    atomic_write(config.board_path, render_board(build_board(issues), config.notes_folder))


async def run_sync(config: Config, source: IssueSource | None = None, jobs: int | None = None) -> SyncResult:
    """Run one sync pass.

    A fetch failure raises FetchError before anything is written. A failed
    note is recorded in result.failed and its siblings carry on; the board is
    still regenerated from every fetched issue.
    """
    if source is None:
        source = JiraClient(config)
    jobs = jobs or config.jobs
    result = SyncResult()

    issues = await asyncio.to_thread(source.fetch_issues)
    result.fetched = len(issues)
    logger.info("found %d issues", len(issues))

    if not issues:
        return result

    try:
        await asyncio.to_thread(ensure_dir, config.notes_dir)
    except OSError as e:
        result.error = f"notes: cannot create {config.notes_dir}: {e}"
        return result

    semaphore = asyncio.Semaphore(jobs)

    async def _one(issue: Issue) -> None:
        async with semaphore:
            try:
                changed = await asyncio.to_thread(sync_issue, config, source, issue)
            except NoteWriteError as e:
                logger.warning("writing %s failed: %s", issue.key, e)
                result.failed[issue.key] = str(e)
                return
        if changed:
            logger.info("synced %s", issue.key)
            result.written.append(issue.key)
        else:
            logger.debug("%s unchanged", issue.key)
            result.unchanged.append(issue.key)

    await asyncio.gather(*(_one(issue) for issue in issues))

    # gather finishes in completion order
    order = {issue.key: i for i, issue in enumerate(issues)}
    result.written.sort(key=order.__getitem__)
    result.unchanged.sort(key=order.__getitem__)

    try:
        await asyncio.to_thread(write_board, config, issues)
    except NoteWriteError as e:
        result.error = f"board: {e}"
        return result

    result.board = str(config.board_path)
    logger.info("generated board %s", config.board_path)
    return result
