"""Macros: stored command input with argument substitution."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from .errors import ArgumentsWrongNrError


class _Kind(Enum):
    ANY = "any"
    NONE = "none"
    EXACTLY = "exactly"
    BETWEEN = "between"


@dataclass(frozen=True)
class NrArguments:
    """Constraint on how many arguments a macro accepts."""

    kind: _Kind = _Kind.ANY
    incl_min: int = 0
    incl_max: int = 0

    @classmethod
    def any(cls) -> NrArguments:
        """Accept any number of arguments."""
        return cls(_Kind.ANY)

    @classmethod
    def none(cls) -> NrArguments:
        """Accept no arguments and skip substitution entirely."""
        return cls(_Kind.NONE)

    @classmethod
    def exactly(cls, count: int) -> NrArguments:
        """Accept exactly *count* arguments."""
        return cls(_Kind.EXACTLY, count, count)

    @classmethod
    def between(cls, incl_min: int, incl_max: int) -> NrArguments:
        """Accept between *incl_min* and *incl_max* arguments, inclusive."""
        return cls(_Kind.BETWEEN, incl_min, incl_max)


@dataclass
class Macro:
    """A runnable macro: newline separated commands plus an argument rule."""

    input: str
    nr_arguments: NrArguments = field(default_factory=NrArguments.any)


class MacroGetter(ABC):
    """Source of macros looked up by name."""

    @abstractmethod
    def get_macro(self, name: str) -> Macro | None:
        """Return the macro called *name*, or None if there is none."""


class MacroStore(dict, MacroGetter):
    """A dict of macros keyed by name."""

    def get_macro(self, name: str) -> Macro | None:
        return self.get(name)


def _check_count(nr: NrArguments, received: int) -> None:
    if nr.kind is _Kind.NONE and received != 0:
        raise ArgumentsWrongNrError("absolutely no", received)
    if nr.kind is _Kind.EXACTLY and received != nr.incl_min:
        raise ArgumentsWrongNrError(str(nr.incl_min), received)
    if nr.kind is _Kind.BETWEEN and not nr.incl_min <= received <= nr.incl_max:
        raise ArgumentsWrongNrError(
            f"between {nr.incl_min} and {nr.incl_max}", received
        )


def _argument(args: Sequence[str], digits: str) -> str:
    index = int(digits)
    if index == 0:
        return " ".join(args)
    return args[index - 1] if index <= len(args) else ""


def apply_arguments(mac: Macro, args: Sequence[str]) -> str:
    """Expand ``$N`` references in the macro input with the given arguments.

    ``$0`` inserts all arguments space separated, ``$$`` inserts a ``$``,
    missing arguments insert nothing and bad escapes are left as written.
    Raises ArgumentsWrongNrError if the argument count is not accepted.
    """
    args = list(args)
    _check_count(mac.nr_arguments, len(args))
    if mac.nr_arguments.kind is _Kind.NONE:
        return mac.input

    out: list[str] = []
    dollar_at: int | None = None
    digits = ""
    for i, ch in enumerate(mac.input):
        if dollar_at is None:
            if ch == "$":
                dollar_at = i
            else:
                out.append(ch)
        elif ch == "$" and dollar_at + 1 == i:
            out.append("$")
            dollar_at = None
        elif ch in "0123456789":
            digits += ch
        elif dollar_at + 1 == i:
            out.append("$" + ch)
            dollar_at = None
        else:
            out.append(_argument(args, digits))
            digits = ""
            if ch == "$":
                dollar_at = i
            else:
                dollar_at = None
                out.append(ch)
    if dollar_at is not None:
        out.append(_argument(args, digits) if digits else "$")
    return "".join(out)