"""Read jiraban settings from a vault's git config."""

from pathlib import Path
from typing import Any

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

SECTION = "jiraban"

JIRABAN_DEFAULTS = {
    "notes-folder": "Jira Tickets",
    "board-file": "My Jira Board.md",
    "jql": "assignee = currentUser() AND statusCategory != Done ORDER BY updated DESC",
    "api-version": "3",
    "page-size": 50,
    "jobs": 4,
    "timeout": 30,
}


def _python_key(git_key: str) -> str:
    """Convert git-style key (hyphenated) to Python-style (underscored)."""
    return git_key.replace("-", "_")


def _coerce_value(git_key: str, raw: str):
    """Type-coerce a jiraban value using the type of its default."""
    default = JIRABAN_DEFAULTS.get(git_key)
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, int):
        return int(raw)
    return raw


def is_git_repo(path: str | Path) -> bool:
    """Check if path is inside a git repository."""
    try:
        Repo(path, search_parent_directories=True)
        return True
    except (InvalidGitRepositoryError, NoSuchPathError):
        return False


def read_git_config(repo_path: str | Path) -> dict[str, Any]:
    """Read the [jiraban] section of a repository's git config.

    Keys come back python-style (underscores). Values for known keys are
    coerced to the type of their default; a value that doesn't coerce raises
    ValueError. Returns {} when the path isn't in a git repository.
    """
    if not is_git_repo(repo_path):
        return {}
    repo = Repo(repo_path, search_parent_directories=True)
    reader = repo.config_reader()
    if not reader.has_section(SECTION):
        return {}
    return {_python_key(git_k): _coerce_value(git_k, raw) for git_k, raw in reader.items(SECTION)}
