"""
Helpers for writing Debug output of composite values.

Each builder writes straight into its :class:`~rsfmt.formatter.Formatter`.
In pretty mode (``{:#?}``) every entry goes on its own line, indented by the
formatter's indent and followed by a comma::

    Point {
        x: 1,
        y: 2,
    }
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Self

if TYPE_CHECKING:
    from rsfmt.formatter import Formatter


def _indented(formatter: Formatter, text: str) -> str:
    indent = formatter.indent
    return indent + text.replace("\n", "\n" + indent)


class DebugStruct:
    """``Name { field: value, .. }``"""

    __slots__ = ("_formatter", "_has_fields")

    def __init__(self, formatter: Formatter, name: str) -> None:
        self._formatter = formatter
        self._has_fields = False
        formatter.write_str(name)

    def field(self, name: str, value: object) -> Self:
        formatter = self._formatter
        rendered = formatter.render_debug(value)
        if formatter.alternate:
            if not self._has_fields:
                formatter.write_str(" {\n")
            formatter.write_str(_indented(formatter, f"{name}: {rendered}") + ",\n")
        else:
            formatter.write_str(", " if self._has_fields else " { ")
            formatter.write_str(f"{name}: {rendered}")
        self._has_fields = True
        return self

    def finish_non_exhaustive(self) -> None:
        formatter = self._formatter
        if not self._has_fields:
            formatter.write_str(" { .. }")
        elif formatter.alternate:
            formatter.write_str(formatter.indent + "..\n}")
        else:
            formatter.write_str(", .. }")

    def finish(self) -> None:
        if self._has_fields:
            self._formatter.write_str("}" if self._formatter.alternate else " }")


class DebugTuple:
    """``Name(a, b)``; with an empty name, a plain tuple ``(a, b)``."""

    __slots__ = ("_formatter", "_name", "_fields")

    def __init__(self, formatter: Formatter, name: str) -> None:
        self._formatter = formatter
        self._name = name
        self._fields = 0
        formatter.write_str(name)

    def field(self, value: object) -> Self:
        formatter = self._formatter
        rendered = formatter.render_debug(value)
        if formatter.alternate:
            if not self._fields:
                formatter.write_str("(\n")
            formatter.write_str(_indented(formatter, rendered) + ",\n")
        else:
            formatter.write_str(", " if self._fields else "(")
            formatter.write_str(rendered)
        self._fields += 1
        return self

    def finish_non_exhaustive(self) -> None:
        formatter = self._formatter
        if not self._fields:
            formatter.write_str("(..)")
        elif formatter.alternate:
            formatter.write_str(formatter.indent + "..\n)")
        else:
            formatter.write_str(", ..)")

    def finish(self) -> None:
        if not self._fields:
            return
        if self._fields == 1 and not self._name and not self._formatter.alternate:
            # A one-element tuple keeps its trailing comma.
            self._formatter.write_str(",")
        self._formatter.write_str(")")


class _DebugInner:
    __slots__ = ("_formatter", "_has_entries", "_close")

    def __init__(self, formatter: Formatter, opening: str, close: str) -> None:
        self._formatter = formatter
        self._has_entries = False
        self._close = close
        formatter.write_str(opening)

    def _entry(self, rendered: str) -> None:
        formatter = self._formatter
        if formatter.alternate:
            if not self._has_entries:
                formatter.write_str("\n")
            formatter.write_str(_indented(formatter, rendered) + ",\n")
        else:
            if self._has_entries:
                formatter.write_str(", ")
            formatter.write_str(rendered)
        self._has_entries = True

    def finish_non_exhaustive(self) -> None:
        formatter = self._formatter
        if not self._has_entries:
            formatter.write_str(".." + self._close)
        elif formatter.alternate:
            formatter.write_str(formatter.indent + "..\n" + self._close)
        else:
            formatter.write_str(", .." + self._close)

    def finish(self) -> None:
        self._formatter.write_str(self._close)


class DebugList(_DebugInner):
    """``[a, b]``"""

    __slots__ = ()

    def __init__(self, formatter: Formatter) -> None:
        super().__init__(formatter, "[", "]")

    def entry(self, value: object) -> Self:
        self._entry(self._formatter.render_debug(value))
        return self

    def entries(self, values: Iterable[object]) -> Self:
        for value in values:
            self.entry(value)
        return self


class DebugSet(_DebugInner):
    """``{a, b}``"""

    __slots__ = ()

    def __init__(self, formatter: Formatter) -> None:
        super().__init__(formatter, "{", "}")

    def entry(self, value: object) -> Self:
        self._entry(self._formatter.render_debug(value))
        return self

    def entries(self, values: Iterable[object]) -> Self:
        for value in values:
            self.entry(value)
        return self


class DebugMap(_DebugInner):
    """``{key: value}``"""

    __slots__ = ("_pending_key",)

    def __init__(self, formatter: Formatter) -> None:
        super().__init__(formatter, "{", "}")
        self._pending_key: str | None = None

    def key(self, key: object) -> Self:
        if self._pending_key is not None:
            raise RuntimeError("DebugMap.key() called twice without value()")
        self._pending_key = self._formatter.render_debug(key)
        return self

    def value(self, value: object) -> Self:
        if self._pending_key is None:
            raise RuntimeError("DebugMap.value() called before key()")
        self._entry(f"{self._pending_key}: {self._formatter.render_debug(value)}")
        self._pending_key = None
        return self

    def entry(self, key: object, value: object) -> Self:
        return self.key(key).value(value)

    def entries(self, items: Iterable[tuple[object, object]]) -> Self:
        for key, value in items:
            self.entry(key, value)
        return self

    def finish(self) -> None:
        if self._pending_key is not None:
            raise RuntimeError("DebugMap.finish() called with a key but no value")
        super().finish()
