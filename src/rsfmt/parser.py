"""
Parser for Rust-style format strings.

This module turns a template such as ``"{name:>8.2}"`` into a :class:`Template`
of literal text and placeholders. Implicit positional arguments (``{}`` and
``.*``) are numbered here, so a :class:`Template` only ever holds explicit
argument references.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias, final

from rsfmt.errors import FormatSyntaxError
from rsfmt.options import (
    ALIGNMENT_CHARACTERS,
    DEFAULT_SPEC,
    ArgumentReference,
    Count,
    DebugHex,
    FormatSpec,
    IndexReference,
    NameReference,
    Sign,
    Trait,
)

logger = logging.getLogger(__name__)

_BRACE = re.compile(r"[{}]")

_TRAITS_BY_SUFFIX = {trait.suffix: trait for trait in Trait if trait.suffix}


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class Literal:
    """Text copied to the output unchanged (escaped braces already collapsed)."""

    text: str


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class Placeholder:
    """A ``{...}`` replacement field."""

    argument: ArgumentReference
    spec: FormatSpec = DEFAULT_SPEC

    def references(self) -> Iterator[ArgumentReference]:
        yield self.argument
        yield from self.spec.references()


Piece: TypeAlias = Literal | Placeholder


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class Template:
    """A parsed template."""

    source: str
    pieces: tuple[Piece, ...]

    positional_count: int
    """One more than the highest positional index referenced anywhere."""

    names: frozenset[str]
    """Named arguments referenced by placeholders or by ``name$`` counts."""

    @property
    def is_literal(self) -> bool:
        return all(isinstance(piece, Literal) for piece in self.pieces)

    @property
    def literal(self) -> str | None:
        """The rendered text if the template has no placeholders, else ``None``."""
        if not self.is_literal:
            return None
        return "".join(piece.text for piece in self.pieces if isinstance(piece, Literal))

    def placeholders(self) -> Iterator[Placeholder]:
        for piece in self.pieces:
            if isinstance(piece, Placeholder):
                yield piece

    def references(self) -> Iterator[ArgumentReference]:
        for placeholder in self.placeholders():
            yield from placeholder.references()


@functools.lru_cache(maxsize=1024)
def parse_template(template: str) -> Template:
    """
    Parse a format string.

    :param template: The format string.
    :return: The parsed template.
    :raises FormatSyntaxError: If the template is malformed.
    """
    if not isinstance(template, str):
        raise TypeError(f"Template must be str, got {type(template).__name__}")
    logger.debug("Parsing template %r", template)
    return _TemplateParser(template).parse()


class _TemplateParser:
    __slots__ = ("source", "position", "next_implicit")

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.next_implicit = 0

    def error(self, message: str) -> FormatSyntaxError:
        return FormatSyntaxError(message, template=self.source, position=self.position)

    def peek(self, offset: int = 0) -> str | None:
        index = self.position + offset
        if index < len(self.source):
            return self.source[index]
        return None

    def consume(self, character: str) -> bool:
        if self.peek() == character:
            self.position += 1
            return True
        return False

    def implicit(self) -> IndexReference:
        reference = IndexReference(index=self.next_implicit)
        self.next_implicit += 1
        return reference

    def parse(self) -> Template:
        pieces: list[Piece] = []
        text: list[str] = []
        source = self.source
        while self.position < len(source):
            found = _BRACE.search(source, self.position)
            if found is None:
                text.append(source[self.position :])
                break
            text.append(source[self.position : found.start()])
            self.position = found.start()
            brace = found.group()
            if self.peek(1) == brace:
                # {{ or }}
                text.append(brace)
                self.position += 2
                continue
            if brace == "}":
                raise self.error("unmatched `}` found; use `}}` for a literal brace")
            self.position += 1
            if any(text):
                pieces.append(Literal(text="".join(text)))
            text = []
            pieces.append(self.placeholder())
        if any(text):
            pieces.append(Literal(text="".join(text)))

        positional_count = 0
        names: set[str] = set()
        for piece in pieces:
            if isinstance(piece, Placeholder):
                for reference in piece.references():
                    match reference:
                        case IndexReference(index=index):
                            positional_count = max(positional_count, index + 1)
                        case NameReference(name=name):
                            names.add(name)
                        case _:
                            raise AssertionError(reference)
        return Template(
            source=source,
            pieces=tuple(pieces),
            positional_count=positional_count,
            names=frozenset(names),
        )

    def placeholder(self) -> Placeholder:
        argument = self.argument()
        spec = self.format_spec() if self.consume(":") else DEFAULT_SPEC
        if argument is None:
            argument = self.implicit()
        character = self.peek()
        if character is None:
            raise self.error("expected `}` but the string was terminated")
        if character != "}":
            raise self.error(f"expected `}}`, found `{character}`")
        self.position += 1
        return Placeholder(argument=argument, spec=spec)

    def integer(self) -> int | None:
        start = self.position
        while (character := self.peek()) is not None and character.isascii() and character.isdigit():
            self.position += 1
        if self.position == start:
            return None
        return int(self.source[start : self.position])

    def identifier(self) -> str | None:
        character = self.peek()
        if character is None or not (character == "_" or character.isalpha()):
            return None
        start = self.position
        while (character := self.peek()) is not None and (character == "_" or character.isalnum()):
            self.position += 1
        return self.source[start : self.position]

    def argument(self) -> ArgumentReference | None:
        index = self.integer()
        if index is not None:
            return IndexReference(index=index)
        start = self.position
        name = self.identifier()
        if name is None:
            return None
        if name == "_":
            self.position = start
            raise self.error("invalid argument name `_`")
        return NameReference(name=name)

    def count(self) -> Count | None:
        start = self.position
        number = self.integer()
        if number is not None:
            if self.consume("$"):
                return IndexReference(index=number)
            return number
        name = self.identifier()
        if name is not None and self.consume("$"):
            if name == "_":
                self.position = start
                raise self.error("invalid argument name `_`")
            return NameReference(name=name)
        # Not a count; the identifier (if any) is the trait.
        self.position = start
        return None

    def format_spec(self) -> FormatSpec:
        fill = " "
        align = None
        first = self.peek()
        second = self.peek(1)
        if first is not None and second in ALIGNMENT_CHARACTERS:
            fill = first
            align = ALIGNMENT_CHARACTERS[second]
            self.position += 2
        elif first in ALIGNMENT_CHARACTERS:
            align = ALIGNMENT_CHARACTERS[first]
            self.position += 1

        sign = None
        if self.consume("+"):
            sign = Sign.PLUS
        elif self.consume("-"):
            sign = Sign.MINUS

        alternate = self.consume("#")

        zero_pad = False
        width: Count | None = None
        if self.peek() == "0":
            if self.peek(1) == "$":
                width = IndexReference(index=0)
                self.position += 2
            else:
                zero_pad = True
                self.position += 1
        if width is None:
            width = self.count()

        precision: Count | None = None
        if self.consume("."):
            if self.consume("*"):
                precision = self.implicit()
            else:
                precision = self.count()
                if precision is None:
                    raise self.error("expected a precision after `.`")

        trait = Trait.DISPLAY
        debug_hex = None
        if self.consume("?"):
            trait = Trait.DEBUG
        elif self.peek(1) == "?" and self.peek() in ("x", "X"):
            trait = Trait.DEBUG
            debug_hex = DebugHex.LOWER if self.peek() == "x" else DebugHex.UPPER
            self.position += 2
        else:
            start = self.position
            suffix = self.identifier()
            if suffix is not None:
                if suffix not in _TRAITS_BY_SUFFIX:
                    self.position = start
                    raise self.error(f"unknown format trait `{suffix}`")
                trait = _TRAITS_BY_SUFFIX[suffix]

        return FormatSpec(
            fill=fill,
            align=align,
            sign=sign,
            alternate=alternate,
            zero_pad=zero_pad,
            width=width,
            precision=precision,
            trait=trait,
            debug_hex=debug_hex,
        )
