"""Data models for jiraban sync runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RichTextNode:
    """A node in an Atlassian Document Format tree."""

    kind: str
    text: str | None = None
    content: tuple[RichTextNode, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RichTextNode:
        """Build a node tree from ADF JSON.

        Non-dict children are skipped. A missing type becomes "unknown".
        """
        children = data.get("content") or []
        text = data.get("text")
        return cls(
            kind=str(data.get("type") or "unknown"),
            text=text if isinstance(text, str) else None,
            content=tuple(cls.from_dict(child) for child in children if isinstance(child, dict)),
        )


@dataclass(frozen=True)
class Issue:
    """A Jira issue as retrieved for one sync run."""

    key: str
    title: str
    status: str
    created: str = ""
    status_category: str | None = None
    priority: str | None = None
    issue_type: str = "Task"
    description: RichTextNode | str | None = None


@dataclass
class BoardColumn:
    """One status column on the board."""

    name: str
    rank: int
    keys: list[str] = field(default_factory=list)


@dataclass
class BoardDocument:
    """The full board, columns in display order."""

    columns: list[BoardColumn] = field(default_factory=list)
