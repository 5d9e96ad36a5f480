"""Indentation pretty-printer for email markup."""

from __future__ import annotations

import re

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

_TAG_BOUNDARY = re.compile(r">\s*<")
_TAG_NAME = re.compile(r"^/?([a-zA-Z][\w:-]*)")


def _opens_block(fragment: str) -> bool:
    """True when the tag fragment starts an element that needs a closing tag."""
    if fragment.startswith(("/", "!", "?")) or fragment.endswith("/"):
        return False
    match = _TAG_NAME.match(fragment)
    if match is None or match.group(1).lower() in VOID_ELEMENTS:
        return False
    # An element closed on the same line, e.g. <td>text</td>
    return f"</{match.group(1).lower()}" not in fragment.lower()


def format_markup(html: str, indent: str = "  ") -> str:
    """
    Re-indent markup one tag per line.

    Splits between adjacent tags, indents after opening tags and dedents
    at closing tags. Text between tags stays attached to its tag. Input
    with fewer than two adjacent tags is returned unchanged.
    """
    fragments = _TAG_BOUNDARY.split(html.strip())
    if len(fragments) < 2:
        return html

    lines = []
    depth = 0
    last = len(fragments) - 1
    for i, fragment in enumerate(fragments):
        opener, body, closer = "<", fragment, ">"
        if i == 0:
            if body.startswith("<"):
                body = body[1:]
            else:
                opener = ""
        if i == last:
            if body.endswith(">"):
                body = body[:-1]
            else:
                closer = ""

        if body.startswith("/"):
            depth = max(0, depth - 1)
        lines.append(f"{indent * depth}{opener}{body}{closer}")
        if opener and _opens_block(body):
            depth += 1

    return "\n".join(lines)
