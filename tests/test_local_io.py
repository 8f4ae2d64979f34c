from pathlib import Path

import pytest

from addedit.io import WriteType
from addedit.local_io import (
    BadUtf8Error,
    ChildCreationFailedError,
    ChildKilledBySignalError,
    ChildReturnedError,
    FileIOFailedError,
    FileNotFoundIOError,
    FilePermissionDeniedError,
    LocalIO,
    LocalIOError,
    NoPathError,
)
from addedit.ui import DummyUI


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SHELL", "sh")
    return tmp_path


@pytest.fixture
def lock():
    return DummyUI().lock_ui()


def test_file_io(workdir):
    io = LocalIO()
    data = ["1\n", "2\n"]
    path = "io_test_file"

    io.write_file(path, WriteType.CREATE, ["1\n", "2\n"])
    assert Path(path).read_text().splitlines(keepends=True) == data

    with pytest.raises(NoPathError):
        io.write_file("", WriteType.CREATE, ["data\n"])

    io.write_file(path, WriteType.OVERWRITE, ["1\n", "2\n"])
    assert Path(path).read_text().splitlines(keepends=True) == data

    io.write_file(path, WriteType.APPEND, ["1\n", "2\n"])
    assert Path(path).read_text().splitlines(keepends=True) == data + data

    read = io.read_file(path, True)
    assert read.splitlines(keepends=True) == data + data

    with pytest.raises(NoPathError):
        io.read_file("", True)

    Path(path).unlink()
    with pytest.raises(FileNotFoundIOError):
        io.read_file(path, True)


def test_write_file_returns_byte_count(workdir):
    assert LocalIO().write_file("f", WriteType.CREATE, ["å\n", "b\n"]) == 5


def test_read_missing_file_not_required(workdir):
    assert LocalIO().read_file("missing", False) == ""


def test_read_keeps_carriage_returns(workdir):
    Path("crlf").write_bytes(b"a\r\nb\r\n")
    assert LocalIO().read_file("crlf", True) == "a\r\nb\r\n"


def test_read_bad_utf8_file(workdir):
    Path("bad").write_bytes(b"\xff\n")
    with pytest.raises(FileIOFailedError):
        LocalIO().read_file("bad", True)


def test_create_refuses_existing(workdir):
    Path("exists").write_text("x\n")
    with pytest.raises(FileIOFailedError) as info:
        LocalIO().write_file("exists", WriteType.CREATE, ["y\n"])
    assert info.value.path == "exists"
    assert Path("exists").read_text() == "x\n"


def test_append_requires_existing(workdir):
    with pytest.raises(FileNotFoundIOError) as info:
        LocalIO().write_file("nofile", WriteType.APPEND, ["y\n"])
    assert info.value == FileNotFoundIOError("nofile")


def test_create_in_missing_directory(workdir):
    with pytest.raises(FileNotFoundIOError):
        LocalIO().write_file("nodir/file", WriteType.CREATE, ["y\n"])


def test_command_io(workdir, lock):
    io = LocalIO()
    io.run_command(lock, 'echo "hurr\ndurr" > io_command_test_file')
    assert io.read_file("io_command_test_file", True) == "hurr\ndurr\n"

    with pytest.raises(LocalIOError) as info:
        io.run_command(lock, "false")
    assert info.value == ChildReturnedError(1)

    Path("io_command_test_file").unlink()

    assert io.run_read_command(lock, 'echo "hurr\ndurr"') == "hurr\ndurr\n"

    text = "hurr\ndurr\ndunn\n"
    written = io.run_write_command(
        lock, "cat > io_command_test_file", text.splitlines(keepends=True)
    )
    assert written == len(text)
    assert io.read_file("io_command_test_file", True) == text

    Path("io_command_test_file").unlink()

    output = io.run_transform_command(
        lock,
        "sort -n",
        "4\n5\n8\n1\n3\n2\n6\n0\n9\n7\n10\n".splitlines(keepends=True),
    )
    assert output == "0\n1\n2\n3\n4\n5\n6\n7\n8\n9\n10\n"


def test_read_command_failure(workdir, lock):
    with pytest.raises(ChildReturnedError) as info:
        LocalIO().run_read_command(lock, "exit 3")
    assert info.value.code == 3


def test_write_command_failure(workdir, lock):
    with pytest.raises(ChildReturnedError) as info:
        LocalIO().run_write_command(lock, "cat > /dev/null; exit 2", ["a\n"])
    assert info.value.code == 2


def test_killed_by_signal(workdir, lock):
    with pytest.raises(ChildKilledBySignalError):
        LocalIO().run_command(lock, "kill -9 $$")


def test_read_command_bad_utf8(workdir, lock):
    with pytest.raises(BadUtf8Error):
        LocalIO().run_read_command(lock, "printf '\\377'")


def test_transform_command_is_lossy(workdir, lock):
    out = LocalIO().run_transform_command(lock, "cat > /dev/null; printf '\\377'", [])
    assert out == "\ufffd"


def test_missing_shell(workdir, lock, monkeypatch):
    monkeypatch.setenv("SHELL", str(workdir / "no_such_shell"))
    with pytest.raises(ChildCreationFailedError):
        LocalIO().run_command(lock, "true")


def test_error_equality():
    assert ChildReturnedError(1) == ChildReturnedError(1)
    assert ChildReturnedError(1) != ChildReturnedError(2)
    assert FilePermissionDeniedError("a") != FileNotFoundIOError("a")
    assert FileIOFailedError("p", OSError("x")) == FileIOFailedError("p", OSError("y"))
    assert FileIOFailedError("p", OSError("x")) != FileIOFailedError("p", ValueError("x"))


def test_error_messages():
    assert str(NoPathError()) == (
        "Path must not be empty when performing file interactions."
    )
    assert str(FileNotFoundIOError("f")) == "Not found, could not open file `f`"
    assert str(FilePermissionDeniedError("f")) == (
        "Permission denied, could not open file `f`"
    )
    assert str(ChildReturnedError(1)) == (
        "Shell process returned non-success result: 1\n"
        "OBS! This is the result when a shell couldn't find a command."
    )
    assert str(ChildKilledBySignalError()) == "Shell process was killed by a signal."