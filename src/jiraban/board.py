"""Build the Obsidian Kanban board from a flat issue list."""

import json
from collections.abc import Iterable

from jiraban.models import BoardColumn, BoardDocument, Issue
from jiraban.parser import serialize_front_matter

STATUS_CATEGORY_RANK = {"new": 0, "indeterminate": 1, "done": 2}
UNKNOWN_RANK = 3


def status_rank(category: str | None) -> int:
    """Display rank for a Jira status category key."""
    return STATUS_CATEGORY_RANK.get(category, UNKNOWN_RANK) if category else UNKNOWN_RANK


def build_board(issues: Iterable[Issue]) -> BoardDocument:
    """Group issues into status columns.

    Issues keep their input order within a column. A column's rank comes from
    the first issue in it that has a status category. Columns are sorted by
    (rank, name) so the result never depends on dict ordering.
    """
    columns: dict[str, BoardColumn] = {}
    ranked: set[str] = set()

    for issue in issues:
        column = columns.get(issue.status)
        if column is None:
            column = columns[issue.status] = BoardColumn(name=issue.status, rank=UNKNOWN_RANK)
        if issue.status not in ranked and issue.status_category:
            column.rank = status_rank(issue.status_category)
            ranked.add(issue.status)
        column.keys.append(issue.key)

    ordered = sorted(columns.values(), key=lambda c: (c.rank, c.name))
    return BoardDocument(columns=ordered)


def render_board(board: BoardDocument, notes_folder: str) -> str:
    """Render a board as an Obsidian Kanban plugin markdown file."""
    parts = [serialize_front_matter({"kanban-plugin": "basic"})]

    for column in board.columns:
        parts.append(f"## {column.name}")
        parts.append("")
        for key in column.keys:
            parts.append(f"- [ ] [[{notes_folder}/{key}]]")
        parts.append("")

    settings = {
        "kanban-plugin": "basic",
        "list-collapse": [False for _ in board.columns],
    }
    parts.append("")
    parts.append("%% kanban:settings")
    parts.append("```")
    parts.append(json.dumps(settings))
    parts.append("```")
    parts.append("%%")
    return "\n".join(parts) + "\n"
