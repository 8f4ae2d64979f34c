"""IO implementation backed by the local filesystem and shell."""

from __future__ import annotations

import os
import subprocess
import threading
from collections.abc import Iterable

from .errors import EdError
from .io import IO, WriteType
from .ui import UILock


class LocalIOError(EdError):
    """Base class for errors raised by LocalIO."""


class NoPathError(LocalIOError):
    """An empty path was given for a file interaction."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "Path must not be empty when performing file interactions."


class FilePermissionDeniedError(LocalIOError):
    """Permission was denied for the operation on the path."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Permission denied, could not open file `{self.path}`"


class FileNotFoundIOError(LocalIOError):
    """The file, or the directory to create it in, does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Not found, could not open file `{self.path}`"


class FileIOFailedError(LocalIOError):
    """Any other failure of a file operation on the path."""

    def __init__(self, path: str, error: Exception) -> None:
        super().__init__(path, type(error))
        self.path = path
        self.error = error

    def __str__(self) -> str:
        return (
            f"Unknown error, could not open file `{self.path}`.\n"
            f"Underlying error: {self.error}"
        )


class ChildCreationFailedError(LocalIOError):
    """The shell process could not be created."""

    def __init__(self, error: Exception) -> None:
        super().__init__(type(error))
        self.error = error

    def __str__(self) -> str:
        return f"Failed to create shell process.\nUnderlying error: {self.error}"


class ChildFailedToStartError(LocalIOError):
    """The shell process failed while being run or waited for."""

    def __init__(self, error: Exception) -> None:
        super().__init__(type(error))
        self.error = error

    def __str__(self) -> str:
        return f"Failed to start shell process.\nUnderlying error: {self.error}"


class ChildReturnedError(LocalIOError):
    """The shell process exited with a non-zero status."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return (
            f"Shell process returned non-success result: {self.code}\n"
            "OBS! This is the result when a shell couldn't find a command."
        )


class ChildKilledBySignalError(LocalIOError):
    """The shell process was killed by a signal."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "Shell process was killed by a signal."


class ChildPipingError(LocalIOError):
    """Feeding data to the shell process failed."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "Error while piping data."


class BadUtf8Error(LocalIOError):
    """Data read from a command was not valid UTF-8."""

    def __init__(self, error: Exception) -> None:
        super().__init__(str(error))
        self.error = error

    def __str__(self) -> str:
        return f"Bad UTF-8 in read data.\nUnderlying error: {self.error}"


def _file_error(path: str, error: Exception) -> LocalIOError:
    if isinstance(error, PermissionError):
        return FilePermissionDeniedError(path)
    if isinstance(error, FileNotFoundError):
        return FileNotFoundIOError(path)
    return FileIOFailedError(path, error)


def _child_error(returncode: int) -> LocalIOError:
    if returncode < 0:
        return ChildKilledBySignalError()
    return ChildReturnedError(returncode)


def _shell() -> str:
    return os.environ.get("SHELL", "sh")


def _spawn(command: str, **pipes) -> subprocess.Popen:
    try:
        return subprocess.Popen([_shell(), "-c", command], **pipes)
    except OSError as e:
        raise ChildCreationFailedError(e) from e


class _Transfer:
    """Writes data to a child's stdin on a separate thread."""

    def __init__(self, proc: subprocess.Popen, lines: Iterable[str]) -> None:
        self.data = "".join(lines).encode("utf-8")
        self.failed = False
        self._stdin = proc.stdin
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        try:
            self._stdin.write(self.data)
            self._stdin.flush()
        except OSError:
            self.failed = True
        finally:
            try:
                self._stdin.close()
            except OSError:
                self.failed = True

    def join(self) -> int:
        self._thread.join()
        if self.failed:
            raise ChildPipingError()
        return len(self.data)


_WRITE_FLAGS = {
    WriteType.CREATE: os.O_WRONLY | os.O_CREAT | os.O_EXCL,
    WriteType.APPEND: os.O_WRONLY | os.O_APPEND,
    WriteType.OVERWRITE: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
}


class LocalIO(IO):
    """Runs commands through the user's shell and touches real files."""

    def run_command(self, ui: UILock, command: str) -> None:
        proc = _spawn(command)
        try:
            returncode = proc.wait()
        except OSError as e:
            raise ChildFailedToStartError(e) from e
        if returncode != 0:
            raise _child_error(returncode)

    def run_read_command(self, ui: UILock, command: str) -> str:
        proc = _spawn(command, stdout=subprocess.PIPE)
        try:
            stdout, _ = proc.communicate()
        except OSError as e:
            raise ChildFailedToStartError(e) from e
        if proc.returncode != 0:
            raise _child_error(proc.returncode)
        try:
            return stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BadUtf8Error(e) from e

    def run_write_command(
        self, ui: UILock, command: str, lines: Iterable[str]
    ) -> int:
        proc = _spawn(command, stdin=subprocess.PIPE)
        transfer = _Transfer(proc, lines)
        wait_error: OSError | None = None
        try:
            proc.wait()
        except OSError as e:
            wait_error = e
        written = transfer.join()
        if wait_error is not None:
            raise ChildFailedToStartError(wait_error) from wait_error
        if proc.returncode != 0:
            raise _child_error(proc.returncode)
        return written

    def run_transform_command(
        self, ui: UILock, command: str, lines: Iterable[str]
    ) -> str:
        proc = _spawn(command, stdin=subprocess.PIPE, stdout=subprocess.PIPE)
        transfer = _Transfer(proc, lines)
        wait_error: OSError | None = None
        stdout = b""
        try:
            stdout = proc.stdout.read()
            proc.stdout.close()
            proc.wait()
        except OSError as e:
            wait_error = e
        transfer.join()
        if wait_error is not None:
            raise ChildFailedToStartError(wait_error) from wait_error
        if proc.returncode != 0:
            raise _child_error(proc.returncode)
        return stdout.decode("utf-8", errors="replace")

    def write_file(
        self, path: str, write_type: WriteType, lines: Iterable[str]
    ) -> int:
        if not path:
            raise NoPathError()
        try:
            fd = os.open(path, _WRITE_FLAGS[write_type], 0o666)
            with os.fdopen(fd, "wb") as file:
                written = 0
                for line in lines:
                    data = line.encode("utf-8")
                    written += len(data)
                    file.write(data)
                file.flush()
        except OSError as e:
            raise _file_error(path, e) from e
        return written

    def read_file(self, path: str, must_exist: bool) -> str:
        if not path:
            raise NoPathError()
        try:
            with open(path, encoding="utf-8", newline="") as file:
                return file.read()
        except FileNotFoundError as e:
            if must_exist:
                raise FileNotFoundIOError(path) from e
            return ""
        except (OSError, UnicodeDecodeError) as e:
            raise _file_error(path, e) from e