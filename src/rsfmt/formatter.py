"""
The :class:`Formatter` that values are rendered into.

A placeholder is rendered by creating a :class:`Formatter` with the
placeholder's resolved :class:`~rsfmt.options.FormatOptions` and dispatching on
its trait. Classes take part by defining formatting hooks::

    class Point:
        def __fmt_display__(self, f: Formatter) -> None:
            rsfmt.write(f, "({}, {})", self.x, self.y)

        def __fmt_debug__(self, f: Formatter) -> None:
            f.debug_struct("Point").field("x", self.x).field("y", self.y).finish()

Without a hook, Display falls back to :func:`str` and Debug to a Rust-like
rendering of the built-in containers, dataclasses and enums, then to
:func:`repr`.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Callable, Mapping, Set
from enum import Enum

from rsfmt.builders import DebugList, DebugMap, DebugSet, DebugStruct, DebugTuple
from rsfmt.errors import FormatTypeError
from rsfmt.ints import POINTER_BITS, FixedInt, bit_pattern
from rsfmt.numbers import exponent_digits, float_debug, float_display, radix_digits
from rsfmt.options import DEFAULT_OPTIONS, Alignment, DebugHex, FormatOptions, Sign, Trait

DISPLAY_HOOK = "__fmt_display__"
DEBUG_HOOK = "__fmt_debug__"

TRAIT_NAMES = {
    Trait.DISPLAY: "Display",
    Trait.DEBUG: "Debug",
    Trait.LOWER_HEX: "LowerHex",
    Trait.UPPER_HEX: "UpperHex",
    Trait.OCTAL: "Octal",
    Trait.BINARY: "Binary",
    Trait.LOWER_EXP: "LowerExp",
    Trait.UPPER_EXP: "UpperExp",
    Trait.POINTER: "Pointer",
}

_RADIXES = {
    Trait.LOWER_HEX: (16, False, "0x"),
    Trait.UPPER_HEX: (16, True, "0x"),
    Trait.OCTAL: (8, False, "0o"),
    Trait.BINARY: (2, False, "0b"),
}

_STRING_ESCAPES = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
}


def escape_debug(text: str) -> str:
    """Escape ``text`` the way ``{:?}`` prints a string, without the quotes."""
    parts: list[str] = []
    for character in text:
        escaped = _STRING_ESCAPES.get(character)
        if escaped is not None:
            parts.append(escaped)
        elif character == " " or character.isprintable():
            parts.append(character)
        else:
            parts.append(f"\\u{{{ord(character):x}}}")
    return "".join(parts)


def _is_integer(value: object) -> bool:
    return isinstance(value, int | FixedInt) and not isinstance(value, bool)


def _recursion_marker(value: object) -> str:
    """What Debug writes for a container that is already being written."""
    if isinstance(value, list):
        return "[...]"
    if isinstance(value, Mapping | Set):
        return "{...}"
    if isinstance(value, tuple) and not hasattr(type(value), "_fields"):
        return "(...)"
    return "..."


class Formatter:
    """Output buffer plus the options of the placeholder being rendered."""

    __slots__ = ("options", "indent", "_buffer", "_active")

    def __init__(self, options: FormatOptions = DEFAULT_OPTIONS, *, indent: str = "    ") -> None:
        self.options = options
        self.indent = indent
        self._buffer: list[str] = []
        # ids of the containers whose Debug output is being written
        self._active: set[int] = set()

    # Options

    @property
    def fill(self) -> str:
        return self.options.fill

    @property
    def align(self) -> Alignment | None:
        return self.options.align

    @property
    def width(self) -> int | None:
        return self.options.width

    @property
    def precision(self) -> int | None:
        return self.options.precision

    @property
    def sign_plus(self) -> bool:
        return self.options.sign is Sign.PLUS

    @property
    def sign_minus(self) -> bool:
        return self.options.sign is Sign.MINUS

    @property
    def alternate(self) -> bool:
        return self.options.alternate

    @property
    def sign_aware_zero_pad(self) -> bool:
        return self.options.zero_pad

    @property
    def debug_lower_hex(self) -> bool:
        return self.options.debug_hex is DebugHex.LOWER

    @property
    def debug_upper_hex(self) -> bool:
        return self.options.debug_hex is DebugHex.UPPER

    # Output

    def write_str(self, text: str) -> None:
        self._buffer.append(text)

    def write(self, text: str) -> None:
        """Alias of :meth:`write_str`, so a formatter can stand in for a text stream."""
        self._buffer.append(text)

    def write_fmt(self, arguments: object) -> None:
        """Write a :class:`~rsfmt.arguments.Arguments`, ignoring this formatter's options."""
        self._buffer.append(str(arguments))

    def getvalue(self) -> str:
        return "".join(self._buffer)

    def _aligned(self, text: str, default: Alignment) -> None:
        width = self.options.width
        if width is None or len(text) >= width:
            self._buffer.append(text)
            return
        padding = width - len(text)
        fill = self.options.fill
        match self.options.align or default:
            case Alignment.LEFT:
                self._buffer.append(text + fill * padding)
            case Alignment.RIGHT:
                self._buffer.append(fill * padding + text)
            case Alignment.CENTER:
                before = padding // 2
                self._buffer.append(fill * before + text + fill * (padding - before))

    def pad(self, text: str) -> None:
        """
        Write a piece of text, truncated to the precision and padded to the
        width. Text is left-aligned unless an alignment was requested.
        """
        precision = self.options.precision
        if precision is not None:
            text = text[:precision]
        self._aligned(text, Alignment.LEFT)

    def pad_integral(self, is_nonnegative: bool, prefix: str, digits: str) -> None:
        """
        Write a number that has already been converted to digits.

        :param is_nonnegative: Whether the number is zero or positive.
        :param prefix: The radix prefix (``0x`` etc.), written only with ``#``.
        :param digits: The digits of the absolute value.
        """
        if not self.options.alternate:
            prefix = ""
        self._pad_number(self._sign(is_nonnegative), prefix, digits)

    def _sign(self, is_nonnegative: bool) -> str:
        if not is_nonnegative:
            return "-"
        return "+" if self.sign_plus else ""

    def _pad_number(self, sign: str, prefix: str, digits: str, *, zero_pad: bool = True) -> None:
        width = self.options.width
        text = sign + prefix + digits
        if zero_pad and self.options.zero_pad and width is not None and len(text) < width:
            self._buffer.append(sign + prefix + "0" * (width - len(text)) + digits)
            return
        self._aligned(text, Alignment.RIGHT)

    # Traits

    def format_value(self, value: object, trait: Trait) -> None:
        """Render ``value`` with the given trait."""
        match trait:
            case Trait.DISPLAY:
                self.display(value)
            case Trait.DEBUG:
                self.debug(value)
            case Trait.LOWER_HEX | Trait.UPPER_HEX | Trait.OCTAL | Trait.BINARY:
                self._radix(value, trait)
            case Trait.LOWER_EXP | Trait.UPPER_EXP:
                self._exponent(value, trait)
            case Trait.POINTER:
                self._pointer(value)

    def display(self, value: object) -> None:
        hook = getattr(type(value), DISPLAY_HOOK, None)
        if hook is not None:
            hook(value, self)
        elif isinstance(value, str):
            self.pad(value)
        elif isinstance(value, bool):
            self.pad("true" if value else "false")
        elif isinstance(value, int):
            self._decimal(value)
        elif isinstance(value, FixedInt):
            self._decimal(value.value)
        elif isinstance(value, float):
            self._float(value, float_display)
        else:
            self.pad(str(value))

    def debug(self, value: object) -> None:
        hook = getattr(type(value), DEBUG_HOOK, None)
        if hook is not None:
            hook(value, self)
        elif isinstance(value, Enum):
            self.write_str(value.name)
        elif isinstance(value, str):
            self.write_str(f'"{escape_debug(value)}"')
        elif value is None:
            self.write_str("None")
        elif isinstance(value, bool):
            self.pad("true" if value else "false")
        elif _is_integer(value):
            self._debug_integer(value)
        elif isinstance(value, float):
            self._float(value, float_debug)
        elif id(value) in self._active:
            self.write_str(_recursion_marker(value))
        else:
            self._active.add(id(value))
            try:
                self._debug_composite(value)
            finally:
                self._active.discard(id(value))

    def _debug_composite(self, value: object) -> None:
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            builder = self.debug_struct(type(value).__name__)
            for field in dataclasses.fields(value):
                if field.repr:
                    builder.field(field.name, getattr(value, field.name))
            builder.finish()
        elif isinstance(value, tuple) and hasattr(type(value), "_fields"):
            builder = self.debug_struct(type(value).__name__)
            for name, item in zip(type(value)._fields, value):
                builder.field(name, item)
            builder.finish()
        elif isinstance(value, tuple):
            if not value:
                self.pad("()")
                return
            tuple_builder = self.debug_tuple("")
            for item in value:
                tuple_builder.field(item)
            tuple_builder.finish()
        elif isinstance(value, list | bytes | bytearray):
            self.debug_list().entries(value).finish()
        elif isinstance(value, Mapping):
            self.debug_map().entries(value.items()).finish()
        elif isinstance(value, Set):
            self.debug_set().entries(value).finish()
        else:
            self.write_str(repr(value))

    def render_debug(self, value: object) -> str:
        """Render ``value`` with ``{:?}`` and the same options into a new string."""
        child = Formatter(self.options, indent=self.indent)
        child._active = self._active
        child.debug(value)
        return child.getvalue()

    def _decimal(self, value: int) -> None:
        self.pad_integral(value >= 0, "", str(abs(value)))

    def _debug_integer(self, value: int | FixedInt) -> None:
        match self.options.debug_hex:
            case DebugHex.LOWER | DebugHex.UPPER as debug_hex:
                digits = radix_digits(bit_pattern(value), 16, upper=debug_hex is DebugHex.UPPER)
                self.pad_integral(True, "0x", digits)
            case None:
                self._decimal(int(value))

    def _float(self, value: float, digits: Callable[[float, int | None], str]) -> None:
        text = digits(value, self.options.precision)
        if math.isnan(value):
            self._pad_number("", "", text, zero_pad=False)
            return
        sign = self._sign(math.copysign(1.0, value) > 0)
        self._pad_number(sign, "", text, zero_pad=not math.isinf(value))

    def _unsupported(self, value: object, trait: Trait) -> FormatTypeError:
        return FormatTypeError(f"{type(value).__name__} does not implement {TRAIT_NAMES[trait]}")

    def _radix(self, value: object, trait: Trait) -> None:
        if not _is_integer(value):
            raise self._unsupported(value, trait)
        assert isinstance(value, int | FixedInt)
        base, upper, prefix = _RADIXES[trait]
        self.pad_integral(True, prefix, radix_digits(bit_pattern(value), base, upper=upper))

    def _exponent(self, value: object, trait: Trait) -> None:
        upper = trait is Trait.UPPER_EXP
        if isinstance(value, float):
            self._float(
                value,
                lambda number, precision: exponent_digits(number, precision, upper=upper),
            )
        elif _is_integer(value):
            number = int(value)  # type: ignore[call-overload]
            self._pad_number(
                self._sign(number >= 0),
                "",
                exponent_digits(number, self.options.precision, upper=upper),
            )
        else:
            raise self._unsupported(value, trait)

    def _pointer(self, value: object) -> None:
        options = self.options
        width = options.width
        zero_pad = options.zero_pad
        if options.alternate:
            zero_pad = True
            if width is None:
                width = POINTER_BITS // 4 + 2
        pointer = Formatter(
            dataclasses.replace(options, alternate=True, zero_pad=zero_pad, width=width),
            indent=self.indent,
        )
        pointer.pad_integral(True, "0x", radix_digits(id(value), 16))
        self._buffer.append(pointer.getvalue())

    # Debug builders

    def debug_struct(self, name: str) -> DebugStruct:
        return DebugStruct(self, name)

    def debug_tuple(self, name: str) -> DebugTuple:
        return DebugTuple(self, name)

    def debug_list(self) -> DebugList:
        return DebugList(self)

    def debug_set(self) -> DebugSet:
        return DebugSet(self)

    def debug_map(self) -> DebugMap:
        return DebugMap(self)


def render(
    value: object,
    trait: Trait = Trait.DISPLAY,
    options: FormatOptions = DEFAULT_OPTIONS,
    *,
    indent: str = "    ",
) -> str:
    """Render a single value outside of a template."""
    formatter = Formatter(options, indent=indent)
    formatter.format_value(value, trait)
    return formatter.getvalue()
