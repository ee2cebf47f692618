"""Tests for Jira markup translation."""

from jiraban.adf import PLACEHOLDER
from jiraban.markup import describe, translate
from tests.conftest import _doc, _paragraph


def test_translate_headings():
    assert translate("h1. Title") == "# Title"
    assert translate("h2. Sub") == "## Sub"
    assert translate("h3.Tight") == "### Tight"


def test_translate_heading_only_at_line_start():
    assert translate("see h1. here") == "see h1. here"
    assert translate("intro\nh2. Next") == "intro\n## Next"


def test_translate_h4_untouched():
    assert translate("h4. Deep") == "h4. Deep"


def test_translate_bold():
    assert translate("*bold*") == "**bold**"
    assert translate("a *b* c *d*") == "a **b** c **d**"


def test_translate_bold_does_not_cross_lines():
    assert translate("*open\nclose*") == "*open\nclose*"


def test_translate_existing_markdown_bold_untouched():
    assert translate("**done**") == "**done**"


def test_translate_code_with_language():
    assert translate("{code:rust}") == "```rust"


def test_translate_code_block():
    text = "{code:python}\nprint(1)\n{code}"
    assert translate(text) == "```python\nprint(1)\n```"


def test_translate_noformat():
    assert translate("{noformat}\nraw\n{noformat}") == "```\nraw\n```"


def test_translate_link():
    assert translate("[Label|http://x]") == "[Label](http://x)"


def test_translate_code_options_without_language():
    assert translate("{code:title=Foo.java|borderStyle=solid}") == "```"


def test_translate_code_language_with_options():
    assert translate("{code:java|title=My File}") == "```java"


def test_translate_code_title_with_space_block():
    assert translate("{code:title=My File}\nx\n{code}") == "```\nx\n```"


def test_translate_plain_link_untouched():
    assert translate("[just brackets]") == "[just brackets]"


def test_translate_leaves_partial_markup():
    text = "{code:rust\n[half|\n*"
    assert translate(text) == text


def test_translate_empty():
    assert translate("") == ""


def test_describe_none():
    assert describe(None) == PLACEHOLDER


def test_describe_adf():
    assert describe(_doc(_paragraph("h1. Plan"), _paragraph("*now*"))) == "# Plan\n\n**now**"


def test_describe_wiki_string():
    assert describe("h2. Notes\nSee [docs|https://example.com]") == "## Notes\nSee [docs](https://example.com)"


def test_describe_blank_string():
    assert describe("  \n") == PLACEHOLDER
