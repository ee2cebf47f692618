"""Tests for jiraban convert command."""

import io
import json

from tests.cli.conftest import run_cli


def _stdin(monkeypatch, text):
    monkeypatch.setattr("sys.stdin", io.StringIO(text))


def test_convert_adf(monkeypatch, capsys):
    doc = {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "h2. Hi"}]}]}
    _stdin(monkeypatch, json.dumps(doc))

    assert run_cli(["convert"]) == 0
    assert capsys.readouterr().out == "## Hi\n"


def test_convert_wiki_text(monkeypatch, capsys):
    _stdin(monkeypatch, "see [docs|https://example.com]\n")

    assert run_cli(["convert"]) == 0
    assert capsys.readouterr().out == "see [docs](https://example.com)\n"


def test_convert_empty_input(monkeypatch, capsys):
    _stdin(monkeypatch, "")

    assert run_cli(["convert", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == {"markdown": "No description provided."}


def test_convert_rejects_json_list(monkeypatch, capsys):
    _stdin(monkeypatch, "[1, 2]")

    assert run_cli(["convert"]) == 1
    assert "error:" in capsys.readouterr().err
