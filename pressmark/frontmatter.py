"""
Split leading JSON front-matter from a post.

A post may start with a JSON object; the object ends at the first point where
the opening and closing braces balance. There is no delimiter line.
"""

import json
from typing import Any, Dict, Tuple

from .errors import FrontmatterParseError


def find_frontmatter_end(content: str) -> int:
    """
    Return the index of the brace that closes the leading JSON object.

    A brace directly preceded by a backslash is not counted. This is not a
    JSON tokenizer: a backslash inside a string value right before a brace
    also suppresses the count.

    Raises:
        FrontmatterParseError: If the braces never balance.
    """
    opened = 0
    closed = 0
    prev = ''
    for i, current in enumerate(content):
        if prev != '\\':
            if current == '{':
                opened += 1
            elif current == '}':
                closed += 1
        if opened > 0 and opened == closed:
            return i
        prev = current
    raise FrontmatterParseError(
        f"Unbalanced front-matter braces ({opened} opened, {closed} closed)"
    )


def split_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    """
    Split content that starts with ``{`` into (metadata, body).

    Raises:
        FrontmatterParseError: If the front-matter is not a valid JSON object.
    """
    end = find_frontmatter_end(content)
    front = content[:end + 1]
    try:
        metadata = json.loads(front)
    except json.JSONDecodeError as e:
        raise FrontmatterParseError(f"Invalid JSON front-matter: {e}") from e
    if not isinstance(metadata, dict):
        raise FrontmatterParseError("Front-matter must be a JSON object")
    return metadata, content[end + 1:]


def parse_post_source(content: str) -> Tuple[Dict[str, Any], str]:
    """Return (metadata, markdown body); metadata is empty without front-matter."""
    if content.startswith('{'):
        return split_frontmatter(content)
    return {}, content
