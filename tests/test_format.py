"""Tests for rendering values through rsfmt.format."""

import math
from collections import namedtuple
from dataclasses import dataclass, field
from enum import Enum

import pytest

from rsfmt import (
    FormatTypeError,
    Formatter,
    RenderConfig,
    Renderer,
    format,
    i8,
    u8,
    write,
)

NUMBER = 69420


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Unit:
    pass


@dataclass
class Secret:
    name: str
    token: str = field(repr=False)


@dataclass
class Node:
    children: list["Node"]


class Color(Enum):
    RED = 1
    GREEN = 2


Pair = namedtuple("Pair", ["a", "b"])


class TestOriginalExamples:
    """The examples the library was written against."""

    def test_plain_and_positional(self) -> None:
        """Plain text, {} and explicit positions should render as in Rust."""
        assert format("Hello, world!") == "Hello, world!"
        assert format("{} days", 31) == "31 days"
        assert (
            format("{0}, this is {1}. {1}, this is {0}", "Alice", "Bob")
            == "Alice, this is Bob. Bob, this is Alice"
        )
        assert format("{1} {} {0} {}", 1, 2) == "2 1 1 2"

    def test_named(self) -> None:
        """Named arguments should be accepted in any keyword order."""
        assert (
            format(
                "{subject} {verb} {object}",
                object="the lazy dog",
                subject="the quick brown fox",
                verb="jumps over",
            )
            == "the quick brown fox jumps over the lazy dog"
        )

    def test_captured_parameters(self) -> None:
        """Names should capture the parameters of the calling function."""
        def make_string(a: int, b: str) -> str:
            return format("{b} {a}")

        assert make_string(927, "label") == "label 927"

    def test_traits(self) -> None:
        """Each trait should render 69420 as in Rust."""
        assert format("{}", NUMBER) == "69420"
        assert format("{:b}", NUMBER) == "10000111100101100"
        assert format("{:o}", NUMBER) == "207454"
        assert format("{:x?}", NUMBER) == "10f2c"
        assert format("{:X?}", NUMBER) == "10F2C"
        assert format("{:p}", NUMBER).startswith("0x")
        assert format("{:e}", NUMBER) == "6.942e4"
        assert format("{:E}", NUMBER) == "6.942E4"

    def test_alternate_forms(self) -> None:
        """# should add radix prefixes and leave pretty scalars alone."""
        assert format("{:#?}", NUMBER) == "69420"
        assert format("{:#x}", NUMBER) == "0x10f2c"
        assert format("{:#X}", NUMBER) == "0x10F2C"
        assert format("{:#b}", NUMBER) == "0b10000111100101100"
        assert format("{:#o}", NUMBER) == "0o207454"
        assert format("{:#010x}!", 27) == "0x0000001b!"

    def test_width_precision_alignment(self) -> None:
        """Width, precision, alignment and sign should render as in Rust."""
        pi = 3.141592
        assert format("{:5}", NUMBER) == "69420"
        assert format("{:.3}", pi) == "3.142"
        assert format("{:>10}", NUMBER) == "     69420"
        assert format("{:<10}", NUMBER) == "69420     "
        assert format("{:^10}", NUMBER) == "  69420   "
        assert format("{:+}", NUMBER) == "+69420"
        assert format("{:05}", NUMBER) == "69420"

    def test_fill(self) -> None:
        """Fill characters and width$ parameters should render as in Rust."""
        assert format("{num:0>5}", num=1) == "00001"
        assert format("{num:0<5}", num=1) == "10000"
        assert format("{num:05}", num=1) == "00001"
        assert format("{number:0>width$}", number=1, width=5) == "00001"

    def test_captured_width(self) -> None:
        """Value and width$ should both be captured from locals."""
        float_number = 1.0
        width = 5
        assert format("{float_number:>width$}") == "    1"

    def test_reused_arguments(self) -> None:
        """An argument may be referenced more than once."""
        assert format("My name is {0}, {1} {0}", "Bond", "James") == "My name is Bond, James Bond"


class TestDisplay:
    """Tests for {}."""

    def test_bool(self) -> None:
        """Booleans should display as true and false."""
        assert format("{}", True) == "true"
        assert format("{:>6}", False) == " false"

    def test_strings_align_left(self) -> None:
        """Strings should be left-aligned by default."""
        assert format("{:5}|", "ab") == "ab   |"
        assert format("{:>5}", "ab") == "   ab"
        assert format("{:*^9}", "mid") == "***mid***"

    def test_string_precision_truncates(self) -> None:
        """Precision should truncate strings before padding."""
        assert format("{:.3}", "abcdef") == "abc"
        assert format("{:>5.2}", "abcdef") == "   ab"

    def test_zero_flag_does_not_apply_to_strings(self) -> None:
        """The zero flag should not pad strings with zeros."""
        assert format("{:05}", "ab") == "ab   "

    def test_precision_is_ignored_for_integers(self) -> None:
        """Precision should have no effect on integers."""
        assert format("{:.2}", 5) == "5"

    def test_negative_integers(self) -> None:
        """Zero padding should go after the minus sign."""
        assert format("{:05}", -42) == "-0042"
        assert format("{:>5}", -42) == "  -42"

    def test_floats(self) -> None:
        """Floats should display their shortest digits without exponent or trailing .0."""
        assert format("{}", 1.0) == "1"
        assert format("{}", 0.1) == "0.1"
        assert format("{}", 1e20) == "100000000000000000000"
        assert format("{}", 1e-7) == "0.0000001"
        assert format("{}", -0.0) == "-0"

    def test_float_precision(self) -> None:
        """Float precision should round half to even and keep the sign first."""
        assert format("{:08.2}", -3.14159) == "-0003.14"
        assert format("{:+.1}", 2.25) == "+2.2"
        assert format("{:.0}", 0.5) == "0"

    def test_non_finite_floats(self) -> None:
        """NaN should never get a sign and infinities never get zero padding."""
        assert format("{}", math.nan) == "NaN"
        assert format("{:+}", math.nan) == "NaN"
        assert format("{}", -math.inf) == "-inf"
        assert format("{:05}", math.inf) == "  inf"

    def test_other_objects_use_str(self) -> None:
        """Objects without a hook should display with str()."""
        assert format("{:>6}", Color.RED) == f"{str(Color.RED):>6}"

    def test_precision_from_arguments(self) -> None:
        """.* and N$ should take precision and width from arguments."""
        assert format("{:.*}", 2, 1.23456) == "1.23"
        assert format("{:.*} {}", 1, 1.25, "x") == "1.2 x"
        assert format("{:>1$}", 7, 4) == "   7"
        assert format("{:.prec$}", 0.5, prec=3) == "0.500"


class TestDebug:
    """Tests for {:?} and {:#?}."""

    def test_strings_are_quoted_and_escaped(self) -> None:
        """Debug strings should be quoted with Rust escapes."""
        assert format("{:?}", 'hi\n"there"') == '"hi\\n\\"there\\""'
        assert format("{:?}", "tab\there\\") == '"tab\\there\\\\"'
        assert format("{:?}", "\x07") == '"\\u{7}"'

    def test_string_width_is_ignored(self) -> None:
        """Width should not pad a Debug string."""
        assert format("{:10?}", "a") == '"a"'

    def test_scalars(self) -> None:
        """None, bools, ints and enums should have Rust-like Debug output."""
        assert format("{:?}", None) == "None"
        assert format("{:?}", True) == "true"
        assert format("{:?}", 42) == "42"
        assert format("{:?}", Color.GREEN) == "GREEN"

    def test_floats(self) -> None:
        """Debug floats should keep a fraction and switch to exponent form at the extremes."""
        assert format("{:?}", 1.0) == "1.0"
        assert format("{:?}", 0.5) == "0.5"
        assert format("{:?}", 1e16) == "1e16"
        assert format("{:?}", 1e15) == "1000000000000000.0"
        assert format("{:?}", 0.00001) == "1e-5"
        assert format("{:?}", 0.0) == "0.0"
        assert format("{:.2?}", 1.0) == "1.00"

    def test_containers(self) -> None:
        """Lists, tuples, dicts, sets and bytes should have Rust-like Debug output."""
        assert format("{:?}", [1, 2, 3]) == "[1, 2, 3]"
        assert format("{:?}", []) == "[]"
        assert format("{:?}", (1, "a")) == '(1, "a")'
        assert format("{:?}", (1,)) == "(1,)"
        assert format("{:?}", ()) == "()"
        assert format("{:?}", {"a": 1}) == '{"a": 1}'
        assert format("{:?}", {}) == "{}"
        assert format("{:?}", {1}) == "{1}"
        assert format("{:?}", frozenset()) == "{}"
        assert format("{:?}", b"hi") == "[104, 105]"

    def test_dataclasses(self) -> None:
        """Dataclasses should render as structs, skipping repr=False fields."""
        assert format("{:?}", Point(1, 2)) == "Point { x: 1, y: 2 }"
        assert format("{:?}", Unit()) == "Unit"
        assert format("{:?}", Secret("db", "hunter2")) == 'Secret { name: "db" }'

    def test_namedtuple(self) -> None:
        """Named tuples should render as structs."""
        assert format("{:?}", Pair(1, [2])) == "Pair { a: 1, b: [2] }"

    def test_other_objects_use_repr(self) -> None:
        """Objects without a hook should fall back to repr()."""
        class Thing:
            def __repr__(self) -> str:
                return "<thing>"

        assert format("{:?}", [Thing()]) == "[<thing>]"

    def test_self_referencing_containers(self) -> None:
        """A container that contains itself should be written as [...] or {...}."""
        items: list[object] = [1]
        items.append(items)
        assert format("{:?}", items) == "[1, [...]]"

        mapping: dict[str, object] = {}
        mapping["self"] = mapping
        assert format("{:?}", mapping) == '{"self": {...}}'
        assert format("{:#?}", mapping) == '{\n    "self": {...},\n}'

    def test_self_referencing_dataclass(self) -> None:
        """A dataclass reachable from its own fields should be written as ..."""
        node = Node(children=[])
        node.children.append(node)
        assert format("{:?}", node) == "Node { children: [...] }"

    def test_repeated_container_is_not_recursion(self) -> None:
        """The same container twice side by side should be rendered both times."""
        shared = [1]
        assert format("{:?}", [shared, shared]) == "[[1], [1]]"
        assert format("{:?}", (shared, shared)) == "([1], [1])"

    def test_options_apply_to_each_leaf(self) -> None:
        """Width, sign and precision should apply to each element."""
        assert format("{:5?}", [1, 2]) == "[    1,     2]"
        assert format("{:+?}", (1, -2)) == "(+1, -2)"
        assert format("{:.1?}", [0.25, 1.0]) == "[0.2, 1.0]"

    def test_hex_integers(self) -> None:
        """x? and X? should render integers in hex and leave floats alone."""
        assert format("{:x?}", [255, 16]) == "[ff, 10]"
        assert format("{:X?}", {"k": 255}) == '{"k": FF}'
        assert format("{:x?}", 1.5) == "1.5"

    def test_pretty_scalar(self) -> None:
        """{:#?} of a scalar should be its plain Debug output."""
        assert format("{:#?}", "x") == '"x"'

    def test_pretty_struct(self) -> None:
        """{:#?} of a struct should put each field on its own line."""
        assert format("{:#?}", Point(1, 2)) == "Point {\n    x: 1,\n    y: 2,\n}"

    def test_pretty_nested(self) -> None:
        """Nested containers should be indented one level per depth."""
        assert format("{:#?}", {"k": [1, 2]}) == '{\n    "k": [\n        1,\n        2,\n    ],\n}'

    def test_pretty_tuple(self) -> None:
        """A pretty one-element tuple should not need the extra comma."""
        assert format("{:#?}", (1,)) == "(\n    1,\n)"

    def test_pretty_empty_containers(self) -> None:
        """Empty containers should stay on one line in pretty mode."""
        assert format("{:#?}", []) == "[]"
        assert format("{:#?}", Unit()) == "Unit"

    def test_pretty_hex(self) -> None:
        """#x? should pretty print with 0x-prefixed hex integers."""
        assert format("{:#x?}", [255]) == "[\n    0xff,\n]"

    def test_pretty_indent_is_configurable(self) -> None:
        """pretty_indent should set the indent width."""
        renderer = Renderer(RenderConfig(pretty_indent=2))
        assert renderer.format("{:#?}", [[1]]) == "[\n  [\n    1,\n  ],\n]"


class TestRadix:
    """Tests for {:x}, {:X}, {:o} and {:b}."""

    def test_negative_integers_are_twos_complement(self) -> None:
        """Negative ints should print as two's complement."""
        assert format("{:x}", -1) == "ffffffff"
        assert format("{:x}", -(2**40)) == "ffffff0000000000"
        assert format("{:b}", i8(-1)) == "11111111"

    def test_fixed_width(self) -> None:
        """FixedInt should choose the two's complement width."""
        assert format("{:x}", i8(-1)) == "ff"
        assert format("{:#010b}", u8(5)) == "0b00000101"

    def test_alignment(self) -> None:
        """Radix output should honour fill and alignment."""
        assert format("{:>#6x}", 255) == "  0xff"
        assert format("{:<6X}|", 255) == "FF    |"

    def test_non_integers_are_rejected(self) -> None:
        """Floats, bools and strings should raise FormatTypeError."""
        with pytest.raises(FormatTypeError, match="float does not implement LowerHex"):
            format("{:x}", 1.5)
        with pytest.raises(FormatTypeError, match="bool does not implement Binary"):
            format("{:b}", True)
        with pytest.raises(FormatTypeError, match="str does not implement Octal"):
            format("{:o}", "7")

    def test_too_wide_for_i128(self) -> None:
        """A negative int below the i128 range should raise FormatTypeError."""
        with pytest.raises(FormatTypeError, match="i128"):
            format("{:x}", -(2**200))


class TestExponent:
    """Tests for {:e} and {:E}."""

    def test_shortest_digits(self) -> None:
        """{:e} should use the shortest mantissa."""
        assert format("{:e}", 1234.5) == "1.2345e3"
        assert format("{:e}", 0.00123) == "1.23e-3"
        assert format("{:E}", 1e-7) == "1E-7"
        assert format("{:e}", -1500) == "-1.5e3"

    def test_zero(self) -> None:
        """Zero should print as 0e0."""
        assert format("{:e}", 0) == "0e0"
        assert format("{:e}", 0.0) == "0e0"
        assert format("{:.2e}", 0) == "0.00e0"

    def test_precision_rounds_half_to_even(self) -> None:
        """{:.Ne} should round ties to even."""
        assert format("{:.2e}", 1234.5) == "1.23e3"
        assert format("{:.1e}", 25) == "2.5e1"
        assert format("{:.0e}", 25) == "2e1"
        assert format("{:.0e}", 35) == "4e1"

    def test_rounding_carries_into_exponent(self) -> None:
        """Rounding up to 10 should bump the exponent."""
        assert format("{:.1e}", 9.96) == "1.0e1"

    def test_padding_and_sign(self) -> None:
        """Exponent output should honour sign, zero padding and width."""
        assert format("{:+010.1e}", 1234.5) == "+00001.2e3"
        assert format("{:>8e}", 100) == "     1e2"

    def test_non_numbers_are_rejected(self) -> None:
        """A string should raise FormatTypeError for {:e}."""
        with pytest.raises(FormatTypeError, match="str does not implement LowerExp"):
            format("{:e}", "1")


class TestPointer:
    """Tests for {:p}."""

    def test_address(self) -> None:
        """{:p} should print the object id in hex."""
        value = object()
        assert format("{:p}", value) == "0x" + f"{id(value):x}"

    def test_alternate_pads_to_pointer_width(self) -> None:
        """{:#p} should zero pad to 18 characters."""
        text = format("{:#p}", object())
        assert len(text) == 18
        assert text.startswith("0x")


class TestHooks:
    """Tests for classes that define their own Display and Debug."""

    class Celsius:
        def __init__(self, degrees: float) -> None:
            self.degrees = degrees

        def __fmt_display__(self, f: Formatter) -> None:
            write(f, "{:.1}°C", self.degrees)

        def __fmt_debug__(self, f: Formatter) -> None:
            f.debug_tuple("Celsius").field(self.degrees).finish()

    class Name:
        def __init__(self, text: str) -> None:
            self.text = text

        def __fmt_display__(self, f: Formatter) -> None:
            f.pad(self.text)

    class Opaque:
        def __fmt_debug__(self, f: Formatter) -> None:
            f.debug_struct("Opaque").field("id", 1).finish_non_exhaustive()

    def test_display_hook(self) -> None:
        """__fmt_display__ should be used for {}."""
        assert format("{}", self.Celsius(21.25)) == "21.2°C"

    def test_write_ignores_outer_options(self) -> None:
        """A hook that uses write should ignore the outer width."""
        assert format("{:>10}", self.Celsius(3.0)) == "3.0°C"

    def test_pad_honours_outer_options(self) -> None:
        """A hook that uses pad should honour width and precision."""
        assert format("{:>6}|{:.2}", self.Name("ab"), self.Name("xyz")) == "    ab|xy"

    def test_debug_hook(self) -> None:
        """__fmt_debug__ should be used for {:?}, also inside containers."""
        assert format("{:?}", self.Celsius(3.0)) == "Celsius(3.0)"
        assert format("{:?}", [self.Celsius(3.0)]) == "[Celsius(3.0)]"
        assert format("{:#?}", self.Celsius(3.0)) == "Celsius(\n    3.0,\n)"

    def test_non_exhaustive(self) -> None:
        """finish_non_exhaustive should render .. in compact and pretty mode."""
        assert format("{:?}", self.Opaque()) == "Opaque { id: 1, .. }"
        assert format("{:#?}", self.Opaque()) == "Opaque {\n    id: 1,\n    ..\n}"

    def test_formatter_accessors(self) -> None:
        """The Formatter should expose the placeholder's options."""
        seen: dict[str, object] = {}

        class Recorder:
            def __fmt_display__(self, f: Formatter) -> None:
                seen.update(
                    fill=f.fill,
                    width=f.width,
                    precision=f.precision,
                    sign_plus=f.sign_plus,
                    alternate=f.alternate,
                    zero=f.sign_aware_zero_pad,
                )

        format("{:*<+#08.3}", Recorder())
        assert seen == {
            "fill": "*",
            "width": 8,
            "precision": 3,
            "sign_plus": True,
            "alternate": True,
            "zero": True,
        }
