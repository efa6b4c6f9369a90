"""
Binding templates to arguments, and the ``format!`` family of entry points.
"""

from __future__ import annotations

import logging
import sys
from collections import ChainMap
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from rsfmt.config import DEFAULT_CONFIG, RenderConfig
from rsfmt.errors import MissingArgumentError, UnusedArgumentError
from rsfmt.formatter import Formatter
from rsfmt.options import ArgumentReference, IndexReference, NameReference
from rsfmt.parser import Literal, Template, parse_template

if TYPE_CHECKING:
    from typing import TextIO

logger = logging.getLogger(__name__)


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


class Arguments:
    """
    A template together with the values for its placeholders.

    Rendering happens when the object is converted with :func:`str`, so an
    ``Arguments`` can be passed around and written later. Argument checks
    already happened when it was created.
    """

    __slots__ = ("template", "positional", "named", "indent")

    def __init__(
        self,
        template: Template,
        positional: tuple[object, ...],
        named: Mapping[str, object],
        *,
        indent: str = DEFAULT_CONFIG.indent,
    ) -> None:
        self.template = template
        self.positional = positional
        self.named = named
        self.indent = indent

    def lookup(self, reference: ArgumentReference) -> object:
        match reference:
            case IndexReference(index=index):
                return self.positional[index]
            case NameReference(name=name):
                return self.named[name]
            case _:
                raise AssertionError(reference)

    def as_str(self) -> str | None:
        """The text of a template without placeholders, otherwise ``None``."""
        return self.template.literal

    def __str__(self) -> str:
        parts: list[str] = []
        for piece in self.template.pieces:
            if isinstance(piece, Literal):
                parts.append(piece.text)
                continue
            formatter = Formatter(piece.spec.resolve(self.lookup), indent=self.indent)
            formatter.format_value(self.lookup(piece.argument), piece.spec.trait)
            parts.append(formatter.getvalue())
        return "".join(parts)

    def __fmt_display__(self, f: Formatter) -> None:
        f.write_fmt(self)

    def __repr__(self) -> str:
        return f"Arguments({self.template.source!r})"


def bind(
    template: Template,
    args: Sequence[object],
    kwargs: Mapping[str, object],
    *,
    config: RenderConfig = DEFAULT_CONFIG,
    namespace: Mapping[str, object] | None = None,
) -> Arguments:
    """
    Check ``args`` and ``kwargs`` against ``template``.

    :param namespace: Variables that named placeholders may capture when no
        keyword argument of that name is given.
    :raises MissingArgumentError: If a placeholder refers to an argument that
        was not supplied.
    :raises UnusedArgumentError: If ``config.strict`` is set and an argument is
        never referenced.
    """
    if len(args) < template.positional_count:
        raise MissingArgumentError(
            f"invalid reference to positional argument {template.positional_count - 1} "
            f"(there {'is' if len(args) == 1 else 'are'} {_plural(len(args), 'argument', 'arguments')}) "
            f"in {template.source!r}"
        )

    named: dict[str, object] = {}
    for name in sorted(template.names):
        if name in kwargs:
            named[name] = kwargs[name]
        elif namespace is not None and name in namespace:
            named[name] = namespace[name]
        else:
            raise MissingArgumentError(f"there is no argument named `{name}` in {template.source!r}")

    if config.strict:
        used = {
            reference.index
            for reference in template.references()
            if isinstance(reference, IndexReference)
        }
        unused = [index for index in range(len(args)) if index not in used]
        if unused:
            raise UnusedArgumentError(
                f"{'argument' if len(unused) == 1 else 'multiple arguments'} never used: "
                f"{', '.join(map(str, unused))} in {template.source!r}"
            )
        extra = sorted(set(kwargs) - template.names)
        if extra:
            raise UnusedArgumentError(
                f"named argument{'' if len(extra) == 1 else 's'} never used: "
                f"{', '.join(extra)} in {template.source!r}"
            )

    return Arguments(template, tuple(args), named, indent=config.indent)


def _stream_write(stream: object, text: str) -> None:
    write_str = getattr(stream, "write_str", None)
    if write_str is not None:
        write_str(text)
    else:
        stream.write(text)  # type: ignore[attr-defined]


class Renderer:
    """
    The ``format!`` family bound to a :class:`RenderConfig`.

    The module-level functions of :mod:`rsfmt` belong to a renderer with the
    default configuration.
    """

    __slots__ = ("config",)

    def __init__(self, config: RenderConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def _bind(
        self,
        template: str | Template,
        args: Sequence[object],
        kwargs: Mapping[str, object],
        depth: int,
    ) -> Arguments:
        parsed = template if isinstance(template, Template) else parse_template(template)
        namespace = None
        if self.config.capture and not parsed.names.issubset(kwargs):
            logger.debug("Capturing %s from the caller", ", ".join(sorted(parsed.names.difference(kwargs))))
            frame = sys._getframe(depth + 1)
            namespace = ChainMap(frame.f_locals, frame.f_globals)
        return bind(parsed, args, kwargs, config=self.config, namespace=namespace)

    def format_args(self, template: str | Template, /, *args: object, **kwargs: object) -> Arguments:
        return self._bind(template, args, kwargs, depth=1)

    def format(self, template: str | Template, /, *args: object, **kwargs: object) -> str:
        """
        Render a template to a string.

        >>> format("{0}, this is {1}. {1}, this is {0}", "Alice", "Bob")
        'Alice, this is Bob. Bob, this is Alice'
        """
        return str(self._bind(template, args, kwargs, depth=1))

    def render(
        self,
        template: Template,
        args: Sequence[object] = (),
        kwargs: Mapping[str, object] | None = None,
    ) -> str:
        """Render a parsed template without capturing any caller variables."""
        return str(bind(template, args, kwargs or {}, config=self.config))

    def write(self, stream: object, template: str | Template, /, *args: object, **kwargs: object) -> None:
        """Render into a :class:`~rsfmt.formatter.Formatter` or a text stream."""
        _stream_write(stream, str(self._bind(template, args, kwargs, depth=1)))

    def writeln(self, stream: object, template: str | Template = "", /, *args: object, **kwargs: object) -> None:
        _stream_write(stream, str(self._bind(template, args, kwargs, depth=1)) + "\n")

    def print(self, template: str | Template, /, *args: object, **kwargs: object) -> None:
        _write_to(sys.stdout, str(self._bind(template, args, kwargs, depth=1)))

    def println(self, template: str | Template = "", /, *args: object, **kwargs: object) -> None:
        _write_to(sys.stdout, str(self._bind(template, args, kwargs, depth=1)) + "\n")

    def eprint(self, template: str | Template, /, *args: object, **kwargs: object) -> None:
        _write_to(sys.stderr, str(self._bind(template, args, kwargs, depth=1)))

    def eprintln(self, template: str | Template = "", /, *args: object, **kwargs: object) -> None:
        _write_to(sys.stderr, str(self._bind(template, args, kwargs, depth=1)) + "\n")


def _write_to(stream: TextIO, text: str) -> None:
    stream.write(text)
    stream.flush()
