"""Render issue notes and write them without losing user content.

Every note has a machine-owned region (front matter and issue summary) and a
user-owned region, split by SENTINEL. Re-syncing regenerates everything
before the sentinel and keeps everything after it byte-for-byte.
"""

import logging
import os
import tempfile
from pathlib import Path

from jiraban.markup import describe
from jiraban.models import Issue
from jiraban.parser import serialize_front_matter

logger = logging.getLogger(__name__)

# Changing this orphans the user notes of every file written before
SENTINEL = "%% USER_NOTES_START %%"
DEFAULT_USER_REGION = "\n- [ ] "


class NoteWriteError(OSError):
    """Reading or writing a note file failed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path


def render_note(issue: Issue, browse_url: str) -> str:
    """Build the machine-owned region of an issue note."""
    meta = {
        "jira_key": issue.key,
        "jira_status": issue.status,
        "jira_url": browse_url,
        "created_at": issue.created,
    }
    lines = [
        f"# {issue.key} {issue.title}",
        "",
        f"**Type**: {issue.issue_type}",
        f"**Priority**: {issue.priority or 'None'}",
        f"**Status**: {issue.status}",
        "",
        "## Description",
        describe(issue.description),
        "",
        "",
    ]
    return serialize_front_matter(meta) + "\n".join(lines)


def merge_note(
    existing: str | None,
    machine_region: str,
    default_user_region: str = DEFAULT_USER_REGION,
    sentinel: str = SENTINEL,
) -> str:
    """Combine a fresh machine region with the user region of existing.

    The user region is everything after the first sentinel in existing. If
    there is no existing text, or it has no sentinel, the default region is
    used and the old content is dropped.
    """
    if sentinel in machine_region:
        logger.warning("machine region contains the sentinel, removing it")
        # Removing one occurrence can join its neighbours into a new one
        while sentinel in machine_region:
            machine_region = machine_region.replace(sentinel, "")

    user_region = default_user_region
    if existing is not None:
        _, found, tail = existing.partition(sentinel)
        if found:
            user_region = tail

    return machine_region + sentinel + user_region


def write_note(
    path: Path,
    machine_region: str,
    default_user_region: str = DEFAULT_USER_REGION,
    sentinel: str = SENTINEL,
) -> bool:
    """Merge and write a note. Returns True if the file changed."""
    path = Path(path)
    existing = _read_if_exists(path)
    content = merge_note(existing, machine_region, default_user_region, sentinel)
    if content == existing:
        return False
    atomic_write(path, content)
    return True


def atomic_write(path: Path, content: str) -> None:
    """Replace path with content so readers see the old or new file, never a mix."""
    path = Path(path)
    try:
        ensure_dir(path.parent)
        mode = path.stat().st_mode & 0o777 if path.exists() else 0o644
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        raise NoteWriteError(path, e.strerror or str(e)) from e


def ensure_dir(path: Path) -> None:
    """Create a directory and its parents if missing."""
    Path(path).mkdir(parents=True, exist_ok=True)


def _read_if_exists(path: Path) -> str | None:
    # newline="" keeps \r\n in user notes intact
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise NoteWriteError(path, str(e)) from e
