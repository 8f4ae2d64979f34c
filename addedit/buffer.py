"""The editing buffer: lines, clipboard and the operations behind each command.

Line numbers are 1-indexed. Line 0 does not exist, but index 0 is a valid
place to insert at (before the first line).
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from .errors import (
    IndexTooBigError,
    Line0InvalidError,
    NoOpError,
    RegexError,
    RegexNoMatchError,
    SelectionEmptyError,
    TagNoMatchError,
)
from .substitute import substitute

Selection = tuple[int, int]

_NAME_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)


@dataclass
class Line:
    """A single line of text together with its tag and match mark."""

    text: str
    tag: str = "\0"
    matched: bool = False


def _new_lines(data: Iterable[str]) -> list[Line]:
    return [Line(text) for text in data]


def _copies(lines: Iterable[Line]) -> list[Line]:
    return [replace(line) for line in lines]


def _split_lines(text: str) -> list[str]:
    """Split on newlines, dropping one trailing empty part and any final CR."""
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern, re.MULTILINE)
    except re.error as e:
        raise RegexError(pattern, e) from e


def _group_text(match: re.Match[str], name: str) -> str:
    try:
        key: int | str = int(name) if name.isdigit() else name
        value = match.group(key)
    except (IndexError, error_types()):
        return ""
    return value or ""


def error_types() -> type[Exception]:
    return re.error


def _expand(template: str, match: re.Match[str]) -> str:
    """Expand ``$N``, ``$name``, ``${name}`` and ``$$`` in *template*."""
    out: list[str] = []
    i = 0
    length = len(template)
    while i < length:
        ch = template[i]
        if ch != "$":
            out.append(ch)
            i += 1
            continue
        if i + 1 < length and template[i + 1] == "$":
            out.append("$")
            i += 2
            continue
        if i + 1 < length and template[i + 1] == "{":
            close = template.find("}", i + 2)
            if close != -1 and close > i + 2:
                out.append(_group_text(match, template[i + 2:close]))
                i = close + 1
                continue
            out.append("$")
            i += 1
            continue
        end = i + 1
        while end < length and template[end] in _NAME_CHARS:
            end += 1
        if end == i + 1:
            out.append("$")
            i += 1
            continue
        out.append(_group_text(match, template[i + 1:end]))
        i = end
    return "".join(out)


def verify_index(buffer: Buffer, index: int) -> None:
    """Check that *index* lies in 0..=len, i.e. it is valid to insert after."""
    if index > len(buffer):
        raise IndexTooBigError(index, len(buffer))


def verify_line(buffer: Buffer, index: int) -> None:
    """Check that line *index* exists (1..=len)."""
    if index < 1:
        raise Line0InvalidError()
    if index > len(buffer):
        raise IndexTooBigError(index, len(buffer))


def verify_selection(buffer: Buffer, selection: Selection) -> None:
    """Check that the selection is non-empty and all its lines exist."""
    start, end = selection
    if start == 0:
        raise Line0InvalidError()
    if start > end:
        raise SelectionEmptyError((start, end))
    if end > len(buffer):
        raise IndexTooBigError(end, len(buffer))


@dataclass
class Buffer:
    """Editing buffer; each method mirrors one editing command."""

    lines: list[Line] = field(default_factory=list)
    clipboard: list[Line] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)

    # Output

    def get_selection(self, selection: Selection) -> list[str]:
        """Return the text of every line in the selection."""
        verify_selection(self, selection)
        start, end = selection
        return [line.text for line in self.lines[start - 1:end]]

    def get_tagged_selection(self, selection: Selection) -> list[tuple[str, str]]:
        """Return (tag, text) for every line in the selection."""
        verify_selection(self, selection)
        start, end = selection
        return [(line.tag, line.text) for line in self.lines[start - 1:end]]

    # Editing

    def inline_insert(self, data: Iterable[str], index: int) -> None:
        """`I` command: insert lines, joining the last one onto line *index*."""
        verify_line(self, index)
        data = list(data)
        indexed = self.lines[index - 1]
        last = data.pop() if data else ""
        joined = last[:-1] + indexed.text
        new = _new_lines(data) + [Line(joined)]
        self.lines[index - 1:index] = new
        self.clipboard = [indexed]

    def inline_append(self, data: Iterable[str], index: int) -> None:
        """`A` command: append lines, joining the first one onto line *index*."""
        verify_line(self, index)
        data = list(data)
        indexed = self.lines[index - 1]
        new: list[Line] = []
        if data:
            new.append(Line(indexed.text[:-1] + data[0]))
            new.extend(_new_lines(data[1:]))
        self.lines[index - 1:index] = new
        self.clipboard = [indexed]

    def insert(self, data: Iterable[str], index: int) -> None:
        """`i`/`a` command: insert lines after *index*."""
        verify_index(self, index)
        self.lines[index:index] = _new_lines(data)

    def cut(self, selection: Selection) -> None:
        """`d` command: move the selected lines into the clipboard."""
        verify_selection(self, selection)
        start, end = selection
        self.clipboard = self.lines[start - 1:end]
        del self.lines[start - 1:end]

    def change(self, data: Iterable[str], selection: Selection) -> None:
        """`c` command: replace the selection, saving it in the clipboard."""
        verify_selection(self, selection)
        start, end = selection
        self.clipboard = self.lines[start - 1:end]
        self.lines[start - 1:end] = _new_lines(data)

    def replace_buffer(self, data: Iterable[str]) -> None:
        """`e` command: replace the whole buffer contents."""
        self.lines = _new_lines(data)

    def mov(self, selection: Selection, index: int) -> None:
        """`m` command: move the selection to after *index*."""
        verify_selection(self, selection)
        verify_index(self, index)
        start, end = selection
        lines = self.lines
        if index < start:
            self.lines = (
                lines[:index] + lines[start - 1:end] + lines[index:start - 1] + lines[end:]
            )
        elif index >= end:
            self.lines = (
                lines[:start - 1] + lines[end:index] + lines[start - 1:end] + lines[index:]
            )
        else:
            raise NoOpError()

    def mov_copy(self, selection: Selection, index: int) -> None:
        """`t` command: copy the selection (tags included) to after *index*."""
        verify_selection(self, selection)
        verify_index(self, index)
        start, end = selection
        self.lines[index:index] = _copies(self.lines[start - 1:end])

    def join(self, selection: Selection) -> None:
        """`j` command: join the selected lines into one."""
        verify_selection(self, selection)
        start, end = selection
        data = self.lines[start - 1:end]
        text = data[0].text
        for line in data[1:]:
            text = text[:-1] + line.text
        self.lines[start - 1:end] = [replace(data[0], text=text)]
        self.clipboard = data

    def reflow(self, selection: Selection, width: int) -> int:
        """`J` command: rewrap the selection to *width*; return its new end."""
        verify_selection(self, selection)
        start, end = selection
        data = self.lines[start - 1:end]
        joined = "".join(line.text for line in data).replace("\n", " ")
        self.clipboard = data
        raw = bytearray(joined[:-1].encode("utf-8"))
        w = 0
        latest_space: int | None = None
        for i, byte in enumerate(raw):
            if 0x80 <= byte < 0xC0:
                continue
            w += 1
            if byte == 0x20:
                latest_space = i
            if w > width and latest_space is not None:
                raw[latest_space] = 0x0A
                w = i - latest_space
                latest_space = None
        new = [Line(f"{text}\n") for text in _split_lines(raw.decode("utf-8"))]
        self.lines[start - 1:end] = new
        return start - 1 + len(new)

    def copy(self, selection: Selection) -> None:
        """`y` command: copy the selection into the clipboard."""
        verify_selection(self, selection)
        start, end = selection
        self.clipboard = _copies(self.lines[start - 1:end])

    def paste(self, index: int) -> int:
        """`x` command: insert the clipboard after *index*; return its length."""
        verify_index(self, index)
        self.lines[index:index] = _copies(self.clipboard)
        return len(self.clipboard)

    def search_replace(
        self,
        pattern: str,
        replacement: str,
        selection: Selection,
        global_: bool,
    ) -> int:
        """`s` command: regex replace over the selection; return its new end."""
        verify_selection(self, selection)
        regex = _compile(pattern)
        start, end = selection
        before = self.lines[start - 1:end]
        joined = "".join(line.text for line in before)
        if regex.search(joined) is None:
            raise RegexNoMatchError(pattern)
        self.clipboard = before
        template = substitute(replacement)
        after = regex.sub(
            lambda m: _expand(template, m), joined, count=0 if global_ else 1
        )
        new = [Line(f"{text}\n") for text in _split_lines(after)]
        self.lines[start - 1:end] = new
        return start - 1 + len(new)

    # Finding

    def tag_line(self, index: int, tag: str) -> None:
        """`k` command: set the tag of line *index*."""
        verify_line(self, index)
        self.lines[index - 1].tag = tag

    def get_tag(self, tag: str) -> int:
        """Return the first line carrying *tag*."""
        for number, line in enumerate(self.lines, start=1):
            if line.tag == tag:
                return number
        raise TagNoMatchError(tag)

    def get_matching(self, pattern: str, curr_line: int, backwards: bool) -> int:
        """Return the nearest line after (or before) *curr_line* matching *pattern*."""
        verify_index(self, curr_line)
        regex = _compile(pattern)
        if backwards:
            candidates = range(curr_line - 2, -1, -1)
        else:
            candidates = range(curr_line, len(self.lines))
        for idx in candidates:
            if regex.search(self.lines[idx].text):
                return idx + 1
        raise RegexNoMatchError(pattern)

    def mark_matching(self, pattern: str, selection: Selection, inverse: bool) -> None:
        """Mark the lines in the selection matching *pattern* (or not, if *inverse*)."""
        verify_selection(self, selection)
        regex = _compile(pattern)
        start, end = selection
        found = False
        for number, line in enumerate(self.lines, start=1):
            if start <= number <= end:
                if (regex.search(line.text) is not None) != inverse:
                    found = True
                    line.matched = True
            else:
                line.matched = False
        if not found:
            raise RegexNoMatchError(pattern)

    def get_marked(self) -> int | None:
        """Unmark and return the lowest marked line, or None if none is marked."""
        for number, line in enumerate(self.lines, start=1):
            if line.matched:
                line.matched = False
                return number
        return None