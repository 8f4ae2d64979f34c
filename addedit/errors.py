"""Errors raised by the editor core."""

from __future__ import annotations


class EdError(Exception):
    """Base class for every error the editor reports."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class IndexTooBigError(EdError):
    """An index or line beyond the end of the buffer was given."""

    def __init__(self, index: int, buffer_len: int) -> None:
        super().__init__(index, buffer_len)
        self.index = index
        self.buffer_len = buffer_len

    def __str__(self) -> str:
        return (
            f"Invalid selection, index {self.index} is after end of buffer "
            f"(buffer length {self.buffer_len})."
        )


class Line0InvalidError(EdError):
    """Line 0 was given where an existing line is required."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "Invalid selection, line 0 doesn't exist."


class SelectionEmptyError(EdError):
    """A selection whose start lies after its end was given."""

    def __init__(self, selection: tuple[int, int]) -> None:
        selection = tuple(selection)
        super().__init__(selection)
        self.selection = selection

    def __str__(self) -> str:
        start, end = self.selection
        return f"Invalid selection, ({start},{end}) selects nothing."


class NoOpError(EdError):
    """The command would not change anything."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "Command would have no effect."


class RegexNoMatchError(EdError):
    """A regular expression matched nothing."""

    def __init__(self, pattern: str) -> None:
        super().__init__(pattern)
        self.pattern = pattern

    def __str__(self) -> str:
        return f"No match found for regex `{self.pattern}`."


class TagNoMatchError(EdError):
    """No line carries the requested tag."""

    def __init__(self, tag: str) -> None:
        super().__init__(tag)
        self.tag = tag

    def __str__(self) -> str:
        return f"No line tagged with `{self.tag}`."


class RegexError(EdError):
    """A regular expression failed to compile."""

    def __init__(self, pattern: str, error: Exception | str) -> None:
        super().__init__(pattern, str(error))
        self.pattern = pattern
        self.error = error

    def __str__(self) -> str:
        return f"Invalid regex `{self.pattern}`.\nUnderlying error: {self.error}"


class ArgumentsWrongNrError(EdError):
    """A macro was given a number of arguments it does not accept."""

    def __init__(self, expected: str, received: int) -> None:
        super().__init__(expected, received)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        return (
            f"Wrong number of arguments, expected {self.expected} "
            f"but received {self.received}."
        )