"""Frontmatter codec for content pages.

Pages use a deliberately small dialect::

    ---
    title: Home
    alias: "/index.html"
    ---

    # Welcome

Only flat ``key: value`` lines are understood.  Values are not escaped, so a
body that itself starts with a ``---`` line is read back as a new frontmatter
block.
"""

import re
from typing import Dict, NamedTuple

_FRONTMATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---\r?\n(.*)\Z", re.DOTALL)


class Frontmatter(NamedTuple):
    attributes: Dict[str, str]
    body: str


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def parse(text: str) -> Frontmatter:
    """Split *text* into its frontmatter attributes and trimmed body.

    Text without a leading frontmatter block is returned untouched as the body.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return Frontmatter({}, text)

    block, body = match.groups()
    attributes: Dict[str, str] = {}
    for line in block.splitlines():
        if not line.strip() or ":" not in line:
            continue
        key, value = line.split(":", 1)
        attributes[key.strip()] = _unquote(value.strip())

    return Frontmatter(attributes, body.strip())


def serialize(title: str, body: str) -> str:
    return f"---\ntitle: {title}\n---\n\n{body}"
