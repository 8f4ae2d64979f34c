"""The user interface abstraction and a few ready implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from .buffer import Buffer


def _buffer_of(ed: Any) -> Buffer:
    """Return the buffer held by *ed*, or *ed* itself if it is a buffer."""
    return ed if isinstance(ed, Buffer) else ed.buffer


class UI(ABC):
    """Every interaction the editor needs from its user interface."""

    @abstractmethod
    def print_message(self, data: str) -> None:
        """Print an error or other informational message."""

    @abstractmethod
    def get_command(self, ed: Any, prefix: str | None) -> str:
        """Return a single command line to parse and run."""

    @abstractmethod
    def get_input(self, ed: Any, terminator: str) -> list[str]:
        """Return newline terminated lines until *terminator* is entered alone."""

    @abstractmethod
    def print_selection(
        self,
        ed: Any,
        selection: tuple[int, int],
        numbered: bool,
        literal: bool,
    ) -> None:
        """Print the given selection of the editor's buffer."""

    def lock_ui(self) -> UILock:
        """Prepare the UI for handing the terminal to a child process."""
        return UILock(self)

    @abstractmethod
    def unlock_ui(self) -> None:
        """Resume the UI after a lock is released."""


class UILock:
    """Context manager that holds a UI locked and unlocks it on exit."""

    def __init__(self, ui: UI) -> None:
        self.ui = ui
        self._released = False

    def __enter__(self) -> UILock:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._released:
            self._released = True
            self.ui.unlock_ui()


class ScriptedUI(UI):
    """A UI that answers from a prepared list of input lines.

    Each entry of *input* should be newline terminated. Prints are forwarded
    to *print_ui* when one is given and silently dropped otherwise.
    """

    def __init__(
        self,
        input: Iterable[str] = (),
        print_ui: UI | None = None,
    ) -> None:
        self.input: deque[str] = deque(input)
        self.print_ui = print_ui
        self.locked = False

    def print_message(self, data: str) -> None:
        if self.print_ui is not None:
            self.print_ui.print_message(data)

    def get_command(self, ed: Any, prefix: str | None) -> str:
        if self.input:
            return self.input.popleft()
        # Running out of script always ends execution.
        return "Q\n"

    def get_input(self, ed: Any, terminator: str) -> list[str]:
        term = f"{terminator}\n"
        lines: list[str] = []
        while self.input:
            line = self.input.popleft()
            if line == term:
                break
            lines.append(line)
        return lines

    def print_selection(
        self,
        ed: Any,
        selection: tuple[int, int],
        numbered: bool,
        literal: bool,
    ) -> None:
        if self.print_ui is not None:
            self.print_ui.print_selection(ed, selection, numbered, literal)

    def lock_ui(self) -> UILock:
        if self.print_ui is not None:
            return self.print_ui.lock_ui()
        self.locked = True
        return UILock(self)

    def unlock_ui(self) -> None:
        """Release the lock; only reached when no inner UI is present."""
        self.locked = False


class DummyUI(UI):
    """A UI that does nothing and returns empty data."""

    def __init__(self) -> None:
        self.locked = False

    def print_message(self, data: str) -> None:
        return None

    def get_command(self, ed: Any, prefix: str | None) -> str:
        return ""

    def get_input(self, ed: Any, terminator: str) -> list[str]:
        return []

    def print_selection(
        self,
        ed: Any,
        selection: tuple[int, int],
        numbered: bool,
        literal: bool,
    ) -> None:
        return None

    def lock_ui(self) -> UILock:
        self.locked = True
        return UILock(self)

    def unlock_ui(self) -> None:
        self.locked = False


@dataclass
class Print:
    """A recorded print: the lines printed and the flags used."""

    text: list[str]
    n: bool = False
    l: bool = False  # noqa: E741


@dataclass
class MockUI(UI):
    """A UI that records every print and refuses to supply input."""

    prints_history: list[Print] = field(default_factory=list)
    locked: bool = False

    def print_message(self, data: str) -> None:
        self.prints_history.append(Print([data], False, False))

    def get_command(self, ed: Any, prefix: str | None) -> str:
        raise RuntimeError("MockUI cannot supply commands")

    def get_input(self, ed: Any, terminator: str) -> list[str]:
        raise RuntimeError("MockUI cannot supply input")

    def print_selection(
        self,
        ed: Any,
        selection: tuple[int, int],
        numbered: bool,
        literal: bool,
    ) -> None:
        text = _buffer_of(ed).get_selection(selection)
        self.prints_history.append(Print(list(text), numbered, literal))

    def lock_ui(self) -> UILock:
        self.locked = True
        return UILock(self)

    def unlock_ui(self) -> None:
        self.locked = False