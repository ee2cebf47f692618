"""YAML front-matter for generated markdown files."""

import yaml


def serialize_front_matter(meta: dict) -> str:
    """Render meta as a front-matter block, keys in insertion order.

    Empty meta gives an empty string.
    """
    if not meta:
        return ""
    body = yaml.dump(meta, default_flow_style=False, sort_keys=False, allow_unicode=True).rstrip()
    return f"---\n{body}\n---\n"
