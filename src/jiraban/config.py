"""Resolve jiraban settings from defaults, git config and the environment."""

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from dotenv import load_dotenv

from jiraban.git import JIRABAN_DEFAULTS, read_git_config

logger = logging.getLogger(__name__)

# Environment variable -> Config field
ENV_VARS = {
    "JIRA_HOST": "jira_host",
    "JIRA_USER": "jira_user",
    "JIRA_TOKEN": "jira_token",
    "OBSIDIAN_VAULT_PATH": "vault_path",
    "JIRA_JQL": "jql",
    "JIRABAN_NOTES_FOLDER": "notes_folder",
    "JIRABAN_BOARD_FILE": "board_file",
    "JIRABAN_API_VERSION": "api_version",
    "JIRABAN_PAGE_SIZE": "page_size",
    "JIRABAN_JOBS": "jobs",
    "JIRABAN_TIMEOUT": "timeout",
}

REQUIRED = ("JIRA_HOST", "JIRA_TOKEN", "OBSIDIAN_VAULT_PATH")

_INT_FIELDS = {"page_size", "jobs", "timeout"}


class ConfigError(ValueError):
    """A required setting is missing or a value is invalid."""


@dataclass(frozen=True)
class Config:
    jira_host: str
    jira_token: str
    vault_path: Path
    jira_user: str | None = None
    jql: str = JIRABAN_DEFAULTS["jql"]
    notes_folder: str = JIRABAN_DEFAULTS["notes-folder"]
    board_file: str = JIRABAN_DEFAULTS["board-file"]
    api_version: str = JIRABAN_DEFAULTS["api-version"]
    page_size: int = JIRABAN_DEFAULTS["page-size"]
    jobs: int = JIRABAN_DEFAULTS["jobs"]
    timeout: int = JIRABAN_DEFAULTS["timeout"]

    @property
    def notes_dir(self) -> Path:
        return self.vault_path / self.notes_folder

    @property
    def board_path(self) -> Path:
        return self.vault_path / self.board_file

    def note_path(self, key: str) -> Path:
        """Where the note for an issue key lives."""
        return self.notes_dir / f"{key}.md"

    def as_dict(self) -> dict:
        """Settings as plain values, token masked."""
        data = asdict(self)
        data["vault_path"] = str(self.vault_path)
        data["jira_token"] = "****" if self.jira_token else ""
        return data


def load_config(env_file: str | Path | None = None) -> Config:
    """Build a Config. Later sources win: defaults, git config, environment.

    The .env file only fills variables that aren't already set. Git config is
    read from the vault, so it can only supply the optional settings.
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"
    if load_dotenv(env_file, override=False):
        logger.debug("loaded environment from %s", env_file)

    missing = [name for name in REQUIRED if not os.environ.get(name)]
    if missing:
        raise ConfigError(f"{', '.join(missing)} must be set")

    vault_path = Path(os.environ["OBSIDIAN_VAULT_PATH"]).expanduser()

    values: dict = {}
    try:
        git_values = read_git_config(vault_path)
    except ValueError as e:
        raise ConfigError(f"invalid [jiraban] git config: {e}") from e
    for key, value in git_values.items():
        if key in Config.__dataclass_fields__ and key not in ("jira_token", "vault_path"):
            values[key] = value

    for env_name, field_name in ENV_VARS.items():
        raw = os.environ.get(env_name)
        if not raw:
            continue
        if field_name in _INT_FIELDS:
            values[field_name] = _parse_int(env_name, raw)
        else:
            values[field_name] = raw

    values["vault_path"] = vault_path
    values["jira_user"] = values.get("jira_user") or None

    for field_name in _INT_FIELDS:
        if field_name in values and values[field_name] < 1:
            raise ConfigError(f"{field_name} must be at least 1")

    return Config(**values)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
