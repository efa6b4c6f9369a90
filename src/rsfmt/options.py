"""Format specifications as parsed from a template, and their resolved options."""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TypeAlias, final

from rsfmt.errors import FormatTypeError


class Alignment(Enum):
    LEFT = auto()
    """``<``"""

    CENTER = auto()
    """``^``"""

    RIGHT = auto()
    """``>``"""


ALIGNMENT_CHARACTERS = {
    "<": Alignment.LEFT,
    "^": Alignment.CENTER,
    ">": Alignment.RIGHT,
}


class Sign(Enum):
    PLUS = auto()
    """
    ``+``: non-negative numbers are prefixed with ``+``.
    """

    MINUS = auto()
    """
    ``-``: accepted for compatibility, currently has no effect.
    """


class Trait(Enum):
    DISPLAY = ""
    DEBUG = "?"
    LOWER_HEX = "x"
    UPPER_HEX = "X"
    OCTAL = "o"
    BINARY = "b"
    LOWER_EXP = "e"
    UPPER_EXP = "E"
    POINTER = "p"

    @property
    def suffix(self) -> str:
        """The type suffix that selects this trait inside a placeholder."""
        return self.value


class DebugHex(Enum):
    LOWER = auto()
    """
    ``x?``: integers inside Debug output are rendered in lower-case hexadecimal.
    """

    UPPER = auto()
    """
    ``X?``: integers inside Debug output are rendered in upper-case hexadecimal.
    """


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class IndexReference:
    """A positional argument, either explicit (``{1}``) or implicit (``{}``)."""

    index: int

    def __str__(self) -> str:
        return str(self.index)


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class NameReference:
    """A named argument (``{name}``), possibly captured from the caller."""

    name: str

    def __str__(self) -> str:
        return self.name


ArgumentReference: TypeAlias = IndexReference | NameReference
Count: TypeAlias = int | ArgumentReference
"""A width or precision: a literal integer or a ``N$`` / ``name$`` parameter."""


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class FormatOptions:
    """Options in effect while a single value is being formatted."""

    fill: str = " "
    align: Alignment | None = None
    """``None`` means the default alignment of the value being formatted."""

    sign: Sign | None = None
    alternate: bool = False
    zero_pad: bool = False
    width: int | None = None
    precision: int | None = None
    debug_hex: DebugHex | None = None


DEFAULT_OPTIONS = FormatOptions()


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class FormatSpec:
    """
    The part of a placeholder after the ``:``.

    Counts may still refer to arguments; :meth:`resolve` looks them up.
    """

    fill: str = " "
    align: Alignment | None = None
    sign: Sign | None = None
    alternate: bool = False
    zero_pad: bool = False
    width: Count | None = None
    precision: Count | None = None
    trait: Trait = Trait.DISPLAY
    debug_hex: DebugHex | None = None

    def references(self) -> tuple[ArgumentReference, ...]:
        """Arguments that the width and precision refer to."""
        return tuple(
            count
            for count in (self.width, self.precision)
            if isinstance(count, IndexReference | NameReference)
        )

    def resolve(self, lookup: Callable[[ArgumentReference], object]) -> FormatOptions:
        return FormatOptions(
            fill=self.fill,
            align=self.align,
            sign=self.sign,
            alternate=self.alternate,
            zero_pad=self.zero_pad,
            width=_resolve_count(self.width, lookup, "width"),
            precision=_resolve_count(self.precision, lookup, "precision"),
            debug_hex=self.debug_hex,
        )


DEFAULT_SPEC = FormatSpec()


def _resolve_count(
    count: Count | None,
    lookup: Callable[[ArgumentReference], object],
    what: str,
) -> int | None:
    if count is None or isinstance(count, int):
        return count
    value = lookup(count)
    if isinstance(value, bool):
        raise FormatTypeError(f"{what} argument `{count}` must be an integer, got bool")
    try:
        result = operator.index(value)
    except TypeError as e:
        raise FormatTypeError(
            f"{what} argument `{count}` must be an integer, got {type(value).__name__}"
        ) from e
    if result < 0:
        raise FormatTypeError(f"{what} argument `{count}` must not be negative, got {result}")
    return result
