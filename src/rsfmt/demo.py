"""
A guided tour of the format string syntax.

Each case renders a template and states the exact output. ``rsfmt demo``
runs them all and reports any case whose output differs.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import final

from rsfmt import format
from rsfmt.errors import FormatError, MissingArgumentError

NUMBER = 69420
PI = 3.141592


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class DemoCase:
    comment: str
    template: str
    call: Callable[[], str]
    expected: str
    """The exact output, or its beginning when ``prefix`` is set."""

    prefix: bool = False
    raises: type[FormatError] | None = None
    """When set, the call must raise this error instead of returning."""


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class DemoResult:
    case: DemoCase
    output: str
    passed: bool


def _case(comment: str, template: str, expected: str, *args: object, **kwargs: object) -> DemoCase:
    return DemoCase(
        comment=comment,
        template=template,
        call=functools.partial(format, template, *args, **kwargs),
        expected=expected,
    )


def make_string(a: int, b: str) -> str:
    return format("{b} {a}")


def captured_width() -> str:
    float_number = 1.0
    width = 5
    return format("{float_number:>width$}")


def _missing_argument() -> str:
    return format("My name is {0}, {1} {0}", "Bond")


CASES: tuple[DemoCase, ...] = (
    _case("Plain text", "Hello, world!", "Hello, world!"),
    _case("`{}` is replaced by the next argument", "{} days", "31 days", 31),
    _case(
        "Explicit positions",
        "{0}, this is {1}. {1}, this is {0}",
        "Alice, this is Bob. Bob, this is Alice",
        "Alice",
        "Bob",
    ),
    _case("Explicit positions do not advance `{}`", "{1} {} {0} {}", "2 1 1 2", 1, 2),
    _case(
        "Named arguments",
        "{subject} {verb} {object}",
        "the quick brown fox jumps over the lazy dog",
        object="the lazy dog",
        subject="the quick brown fox",
        verb="jumps over",
    ),
    DemoCase(
        comment="Named placeholders capture local variables",
        template="{b} {a}",
        call=functools.partial(make_string, 927, "label"),
        expected="label 927",
    ),
    _case("Display", "{}", "69420", NUMBER),
    _case("Binary", "{:b}", "10000111100101100", NUMBER),
    _case("Octal", "{:o}", "207454", NUMBER),
    _case("Debug with lower-case hexadecimal integers", "{:x?}", "10f2c", NUMBER),
    _case("Debug with upper-case hexadecimal integers", "{:X?}", "10F2C", NUMBER),
    DemoCase(
        comment="Address of the object",
        template="{:p}",
        call=functools.partial(format, "{:p}", NUMBER),
        expected="0x",
        prefix=True,
    ),
    _case("Lower-case scientific notation", "{:e}", "6.942e4", NUMBER),
    _case("Upper-case scientific notation", "{:E}", "6.942E4", NUMBER),
    _case("Pretty Debug leaves scalars alone", "{:#?}", "69420", NUMBER),
    _case("`#` adds a radix prefix", "{:#x}", "0x10f2c", NUMBER),
    _case("Upper-case hexadecimal keeps the `0x` prefix", "{:#X}", "0x10F2C", NUMBER),
    _case("Binary prefix", "{:#b}", "0b10000111100101100", NUMBER),
    _case("Octal prefix", "{:#o}", "0o207454", NUMBER),
    _case("Zero padding goes after the prefix", "{:#010x}!", "0x0000001b!", 27),
    _case("Width is a minimum", "{:5}", "69420", NUMBER),
    _case("Precision", "{:.3}", "3.142", PI),
    _case("Right alignment", "{:>10}", "     69420", NUMBER),
    _case("Left alignment", "{:<10}", "69420     ", NUMBER),
    _case("Centered, extra fill on the right", "{:^10}", "  69420   ", NUMBER),
    _case("Explicit plus sign", "{:+}", "+69420", NUMBER),
    _case("Zero padding to a width already met", "{:05}", "69420", NUMBER),
    _case("Fill character", "{num:0>5}", "00001", num=1),
    _case("Fill on the right", "{num:0<5}", "10000", num=1),
    _case("Sign-aware zero padding", "{num:05}", "00001", num=1),
    _case("Width taken from an argument", "{number:0>width$}", "00001", number=1, width=5),
    DemoCase(
        comment="Width captured from a local variable",
        template="{float_number:>width$}",
        call=captured_width,
        expected="    1",
    ),
    _case(
        "Arguments may be used more than once",
        "My name is {0}, {1} {0}",
        "My name is Bond, James Bond",
        "Bond",
        "James",
    ),
    DemoCase(
        comment="Every referenced argument must be supplied",
        template="My name is {0}, {1} {0}",
        call=_missing_argument,
        expected="MissingArgumentError",
        raises=MissingArgumentError,
    ),
)


def run_case(case: DemoCase) -> DemoResult:
    if case.raises is not None:
        try:
            output = case.call()
        except case.raises as e:
            return DemoResult(case=case, output=type(e).__name__, passed=True)
        return DemoResult(case=case, output=output, passed=False)
    try:
        output = case.call()
    except FormatError as e:
        return DemoResult(case=case, output=f"{type(e).__name__}: {e}", passed=False)
    if case.prefix:
        passed = output.startswith(case.expected)
    else:
        passed = output == case.expected
    return DemoResult(case=case, output=output, passed=passed)


def run_demo() -> Iterator[DemoResult]:
    for case in CASES:
        yield run_case(case)
