# addedit

Building blocks for an embeddable line editor in the spirit of `ed`: an
editing buffer whose methods mirror the editing commands, macros with
argument substitution, and interfaces for the user interface and for file
and shell access, each with ready implementations.

## Modules

- `addedit.buffer` – `Buffer`, a list of `Line`s (text, tag, match mark) plus
  a clipboard. One method per editing command: `insert`, `inline_insert`,
  `inline_append`, `cut`, `change`, `replace_buffer`, `mov`, `mov_copy`,
  `join`, `reflow`, `copy`, `paste` and `search_replace`; and for finding
  lines: `tag_line`, `get_tag`, `get_matching`, `mark_matching` and
  `get_marked`. `get_selection` and `get_tagged_selection` return the text
  (or `(tag, text)` pairs) of a selection. Selections are 1-indexed,
  inclusive `(start, end)` pairs; index 0 is valid to insert at, line 0 is
  not. `verify_index`, `verify_line` and `verify_selection` perform the
  checks the methods use.
- `addedit.macros` – `Macro`, `NrArguments` (`any()`, `none()`,
  `exactly(n)`, `between(lo, hi)`), the `MacroGetter` interface, the
  dict-backed `MacroStore`, and `apply_arguments`, which expands `$1`, `$2`,
  … in a macro's input, `$0` to all arguments space separated and `$$` to a
  literal `$`. Missing arguments expand to nothing and bad escapes are left
  as written. With `NrArguments.none()` no expansion is done at all.
- `addedit.substitute` – `substitute`, which interprets `\\`, `\n`, `\r` and
  `\t` in replacement text and keeps other escapes as written.
- `addedit.ui` – the `UI` interface; `UILock`, a context manager that calls
  `unlock_ui()` on exit; `ScriptedUI`, which answers from a list of input
  lines (returning `"Q\n"` once they run out) and forwards prints to an
  optional inner UI; `DummyUI`, which does nothing; and `MockUI`, which
  records every print as a `Print` in `prints_history` and raises
  `RuntimeError` when asked for input. `MockUI.print_selection` reads lines
  from the `ed` argument's `buffer` attribute, or from `ed` itself when it is
  a `Buffer`.
- `addedit.io` – the `IO` interface, `WriteType` (`CREATE`, `APPEND`,
  `OVERWRITE`) and `FakeIO`, an in-memory file system (`fake_fs`) and shell
  (`fake_shell`, keyed by `ShellCommand(command, input)`) that raises
  `FakeIOError` for unknown commands, missing files and refused overwrites.
- `addedit.local_io` – `LocalIO`, which reads and writes real files and runs
  commands through `$SHELL -c` (falling back to `sh`). Failures are raised as
  `LocalIOError` subclasses such as `NoPathError`, `FileNotFoundIOError` and
  `ChildReturnedError`.
- `addedit.errors` – the `EdError` hierarchy: `IndexTooBigError`,
  `Line0InvalidError`, `SelectionEmptyError`, `NoOpError`,
  `RegexNoMatchError`, `TagNoMatchError`, `RegexError` and
  `ArgumentsWrongNrError`. Errors of the same class with the same arguments
  compare equal.

## Installing

```
pip install .
```

## Example

```python
from addedit.buffer import Buffer
from addedit.macros import Macro, NrArguments, apply_arguments

buf = Buffer()
buf.insert(["1\n", "2\n", "3\n"], 0)
buf.mov((1, 1), 3)
print(buf.get_selection((1, len(buf))))  # ['2\n', '3\n', '1\n']

mac = Macro("$1 world. Test$2", NrArguments.exactly(2))
print(apply_arguments(mac, ["Hello", "ing"]))  # Hello world. Testing
```

```python
from addedit.io import FakeIO, WriteType

io = FakeIO()
io.write_file("notes", WriteType.CREATE, ["a\n", "b\n"])
print(io.read_file("notes", True))  # 'a\nb\n'
```

## What it does not do

The package holds the parts an editor is built from, not the editor itself.
There is no command-line parser or command runner, no editor state object
tying buffer, UI and IO together, no undo/redo history, and no program to
start: nothing here reads `ed` commands such as `2,3d` and carries them out.
The `ed` argument the UI methods take is whatever object the caller uses to
hold its editor state.

## Running the tests

```
pip install .[test]
pytest
```