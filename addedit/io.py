"""File and shell interaction abstraction, plus a fake for tests."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .errors import EdError

if TYPE_CHECKING:
    from .ui import UILock


class WriteType(Enum):
    """How a file write treats an existing file."""

    CREATE = "create"
    APPEND = "append"
    OVERWRITE = "overwrite"


class IO(ABC):
    """Every file and shell interaction the editor performs."""

    @abstractmethod
    def run_command(self, ui: UILock, command: str) -> None:
        """Run a command unrelated to the buffer."""

    @abstractmethod
    def run_read_command(self, ui: UILock, command: str) -> str:
        """Run a command and return what it wrote to stdout."""

    @abstractmethod
    def run_write_command(
        self, ui: UILock, command: str, lines: Iterable[str]
    ) -> int:
        """Run a command fed *lines* on stdin; return the bytes written."""

    @abstractmethod
    def run_transform_command(
        self, ui: UILock, command: str, lines: Iterable[str]
    ) -> str:
        """Run a command fed *lines* on stdin and return its stdout."""

    @abstractmethod
    def write_file(
        self, path: str, write_type: WriteType, lines: Iterable[str]
    ) -> int:
        """Write *lines* to *path*; return the number of bytes written."""

    @abstractmethod
    def read_file(self, path: str, must_exist: bool) -> str:
        """Return the contents of *path*, or "" if missing and not required."""


class FakeIOErrorKind(Enum):
    """The failures a FakeIO can report."""

    CHILD_EXIT_ERROR = "Child process returned error after running."
    NOT_FOUND = "Could not open file. Not found or invalid path."
    OVERWRITE = "Will not overwrite existing file."


class FakeIOError(EdError):
    """Error raised by FakeIO."""

    def __init__(self, kind: FakeIOErrorKind) -> None:
        super().__init__(kind)
        self.kind = kind

    def __str__(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class ShellCommand:
    """A shell command together with the stdin it expects."""

    command: str
    input: str = ""


@dataclass
class FakeIO(IO):
    """In-memory filesystem and shell, for testing."""

    fake_fs: dict[str, str] = field(default_factory=dict)
    fake_shell: dict[ShellCommand, str] = field(default_factory=dict)

    def _shell(self, command: str, stdin: str) -> str:
        try:
            return self.fake_shell[ShellCommand(command, stdin)]
        except KeyError:
            raise FakeIOError(FakeIOErrorKind.CHILD_EXIT_ERROR) from None

    def run_command(self, ui: UILock, command: str) -> None:
        self._shell(command, "")

    def run_read_command(self, ui: UILock, command: str) -> str:
        return self._shell(command, "")

    def run_write_command(
        self, ui: UILock, command: str, lines: Iterable[str]
    ) -> int:
        stdin = "".join(lines)
        self._shell(command, stdin)
        return len(stdin.encode("utf-8"))

    def run_transform_command(
        self, ui: UILock, command: str, lines: Iterable[str]
    ) -> str:
        return self._shell(command, "".join(lines))

    def write_file(
        self, path: str, write_type: WriteType, lines: Iterable[str]
    ) -> int:
        existing = self.fake_fs.get(path)
        base = ""
        if existing is not None:
            if write_type is WriteType.APPEND:
                base = existing
            elif write_type is not WriteType.OVERWRITE:
                raise FakeIOError(FakeIOErrorKind.OVERWRITE)
        data = base + "".join(lines)
        self.fake_fs[path] = data
        return len(data.encode("utf-8"))

    def read_file(self, path: str, must_exist: bool) -> str:
        if path in self.fake_fs:
            return self.fake_fs[path]
        if must_exist:
            raise FakeIOError(FakeIOErrorKind.NOT_FOUND)
        return ""