"""Handler for 'jiraban convert'."""

import json
import sys

from jiraban.cli._common import error, output_json
from jiraban.markup import describe
from jiraban.models import RichTextNode


def convert(args) -> int:
    """Read an ADF document (or wiki markup) on stdin, write markdown to stdout."""
    text = sys.stdin.read()

    try:
        data = json.loads(text)
    except ValueError:
        data = text

    if isinstance(data, dict):
        description = RichTextNode.from_dict(data)
    elif isinstance(data, str):
        description = data
    else:
        error("expected an ADF document object or plain text", args.json)

    markdown = describe(description)

    if args.json:
        output_json({"markdown": markdown})
    else:
        sys.stdout.write(markdown + "\n")

    return 0
