"""Flatten Atlassian Document Format trees to plain text."""

from jiraban.models import RichTextNode

PLACEHOLDER = "No description provided."

# Appended after a node's children have been walked
_SUFFIXES = {
    "paragraph": "\n\n",
    "bulletList": "\n",
    "orderedList": "\n",
    "listItem": "\n- ",
}


def extract_text(root: RichTextNode | None) -> str:
    """Linearize an ADF tree into text with minimal structure.

    Never fails: an absent or empty document gives PLACEHOLDER. Node kinds
    without a known suffix (including ones Jira adds later) still have their
    text extracted.
    """
    if root is None:
        return PLACEHOLDER

    parts: list[str] = []
    _walk(root, parts)
    text = "".join(parts).strip()
    return text or PLACEHOLDER


def _walk(node: RichTextNode, out: list[str]) -> None:
    if node.text is not None:
        out.append(node.text)
    for child in node.content:
        _walk(child, out)
    suffix = _SUFFIXES.get(node.kind)
    if suffix:
        out.append(suffix)
