"""
rsfmt: Rust-style format strings for Python.

Templates use the syntax of Rust's ``format!`` macro::

    >>> import rsfmt
    >>> rsfmt.format("{} days", 31)
    '31 days'
    >>> rsfmt.format("{:#010x}!", 27)
    '0x0000001b!'
    >>> rsfmt.format("{number:0>width$}", number=1, width=5)
    '00001'

## Arguments

- ``{}`` takes the next positional argument. Explicit references such as
  ``{1}`` or ``{name}`` do not advance that counter.
- A named placeholder without a matching keyword argument is looked up in the
  caller's variables, so ``rsfmt.format("{x} {y}")`` works like an f-string.
- Every supplied argument must be used, and every referenced one supplied.

## Traits

``{}`` Display, ``{:?}`` Debug, ``{:#?}`` pretty Debug, ``{:x?}``/``{:X?}``
Debug with hexadecimal integers, ``{:x}``/``{:X}``/``{:o}``/``{:b}`` radix,
``{:e}``/``{:E}`` scientific notation, ``{:p}`` object address.

Classes customise Display and Debug by defining ``__fmt_display__(self, f)``
and ``__fmt_debug__(self, f)``, where ``f`` is a :class:`Formatter`.
"""

from rsfmt.arguments import Arguments, Renderer, bind
from rsfmt.builders import DebugList, DebugMap, DebugSet, DebugStruct, DebugTuple
from rsfmt.config import DEFAULT_CONFIG, RenderConfig, parse_config
from rsfmt.errors import (
    FormatError,
    FormatSyntaxError,
    FormatTypeError,
    MissingArgumentError,
    UnusedArgumentError,
)
from rsfmt.formatter import Formatter, render
from rsfmt.ints import FixedInt, i8, i16, i32, i64, i128, isize, u8, u16, u32, u64, u128, usize
from rsfmt.options import Alignment, FormatOptions, FormatSpec, Sign, Trait
from rsfmt.parser import Template, parse_template

_DEFAULT_RENDERER = Renderer(DEFAULT_CONFIG)

format = _DEFAULT_RENDERER.format
format_args = _DEFAULT_RENDERER.format_args
write = _DEFAULT_RENDERER.write
writeln = _DEFAULT_RENDERER.writeln
print = _DEFAULT_RENDERER.print
println = _DEFAULT_RENDERER.println
eprint = _DEFAULT_RENDERER.eprint
eprintln = _DEFAULT_RENDERER.eprintln

__all__ = [
    "Alignment",
    "Arguments",
    "DEFAULT_CONFIG",
    "DebugList",
    "DebugMap",
    "DebugSet",
    "DebugStruct",
    "DebugTuple",
    "FixedInt",
    "FormatError",
    "FormatOptions",
    "FormatSpec",
    "FormatSyntaxError",
    "FormatTypeError",
    "Formatter",
    "MissingArgumentError",
    "RenderConfig",
    "Renderer",
    "Sign",
    "Template",
    "Trait",
    "UnusedArgumentError",
    "bind",
    "eprint",
    "eprintln",
    "format",
    "format_args",
    "i8",
    "i16",
    "i32",
    "i64",
    "i128",
    "isize",
    "parse_config",
    "parse_template",
    "print",
    "println",
    "render",
    "u8",
    "u16",
    "u32",
    "u64",
    "u128",
    "usize",
    "write",
    "writeln",
]
