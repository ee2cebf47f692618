"""Shared fixtures for CLI tests."""

import pytest

from jiraban.config import ENV_VARS


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Environment for a vault in tmp_path, no .env file picked up."""
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    vault = tmp_path / "vault"
    vault.mkdir()
    monkeypatch.setenv("JIRA_HOST", "jira.example.com")
    monkeypatch.setenv("JIRA_TOKEN", "secret-token")
    monkeypatch.setenv("OBSIDIAN_VAULT_PATH", str(vault))
    monkeypatch.chdir(tmp_path)
    return vault


def run_cli(argv):
    """Parse argv and run the handler. Returns the exit code."""
    from jiraban.cli import build_parser

    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except SystemExit as e:
        return e.code
