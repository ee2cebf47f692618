"""Shared test helpers."""

import pytest

from jiraban.config import Config
from jiraban.models import Issue, RichTextNode


def _make_issue(key, status="To Do", category="new", title=None, description=None, **kwargs):
    """Helper to build an Issue with sensible defaults."""
    return Issue(
        key=key,
        title=title or f"Summary of {key}",
        status=status,
        status_category=category,
        created="2024-01-02T03:04:05.000+0000",
        description=description,
        **kwargs,
    )


def _paragraph(*texts):
    """Helper to build an ADF paragraph of text leaves."""
    return RichTextNode("paragraph", content=tuple(RichTextNode("text", text=t) for t in texts))


def _doc(*blocks):
    """Helper to build an ADF doc root."""
    return RichTextNode("doc", content=tuple(blocks))


class FakeSource:
    """Issue source that returns a fixed list, or raises."""

    def __init__(self, issues=None, error=None):
        self.issues = issues or []
        self.error = error
        self.calls = 0

    def fetch_issues(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.issues)

    def browse_url(self, key):
        return f"https://jira.example.com/browse/{key}"


@pytest.fixture
def vault(tmp_path):
    """An empty vault directory."""
    path = tmp_path / "vault"
    path.mkdir()
    return path


@pytest.fixture
def config(vault):
    """Config pointing at the temp vault."""
    return Config(jira_host="jira.example.com", jira_token="secret", vault_path=vault)
