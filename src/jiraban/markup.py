"""Translate Jira wiki markup into Markdown."""

import re

from jiraban.adf import PLACEHOLDER, extract_text
from jiraban.models import RichTextNode

_HEADING = re.compile(r"^h([1-3])\.[ \t]*", re.MULTILINE)
_EMPHASIS = re.compile(r"(?<!\*)\*([^*\n]+)\*(?!\*)")
_CODE = re.compile(r"\{code(?::([^}\n]*))?\}")
_NOFORMAT = re.compile(r"\{noformat\}")
_LINK = re.compile(r"\[([^|\]\n]+)\|([^\]\n]+)\]")


def _heading(match: re.Match) -> str:
    return "#" * int(match.group(1)) + " "


def _code(match: re.Match) -> str:
    # {code:java|title=Foo.java|borderStyle=solid}: only a bare first
    # parameter is a language, key=value options are dropped
    language = (match.group(1) or "").split("|")[0].strip()
    if "=" in language or any(c.isspace() for c in language):
        language = ""
    return "```" + language


# Order matters: headings, emphasis, code blocks, links
_RULES = [
    (_HEADING, _heading),
    (_EMPHASIS, r"**\1**"),
    (_CODE, _code),
    (_NOFORMAT, "```"),
    (_LINK, r"[\1](\2)"),
]


def translate(text: str) -> str:
    """Rewrite Jira markup sequences in text as Markdown.

    Every {code} marker becomes a fence, so Jira's closing {code} closes the
    Markdown block too. Anything that doesn't match is left as it is.
    """
    for pattern, replacement in _RULES:
        text = pattern.sub(replacement, text)
    return text


def describe(description: RichTextNode | str | None) -> str:
    """Render an issue description as Markdown.

    ADF trees (REST API v3) are flattened first; plain strings (API v2) are
    already wiki markup.
    """
    if isinstance(description, str):
        text = description.strip()
        return translate(text) if text else PLACEHOLDER
    return translate(extract_text(description))
