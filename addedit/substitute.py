"""Escape sequence interpretation for replacement text."""

from __future__ import annotations

_ESCAPES = {"\\": "\\", "n": "\n", "r": "\r", "t": "\t"}


def substitute(text: str) -> str:
    """Return *text* with backslash escapes (\\\\, \\n, \\r, \\t) interpreted.

    Unknown escapes are kept as written; a trailing lone backslash is dropped.
    """
    out: list[str] = []
    escaped = False
    for ch in text:
        if escaped:
            out.append(_ESCAPES.get(ch, "\\" + ch))
            escaped = False
        elif ch == "\\":
            escaped = True
        else:
            out.append(ch)
    return "".join(out)