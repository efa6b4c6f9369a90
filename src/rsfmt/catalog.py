"""
Message catalogs: named templates loaded from YAML, JSON or TOML files.

A catalog file holds a ``messages`` mapping and an optional ``config``
section::

    config:
      strict: false
    messages:
      greeting: "Hello, {name}!"
      days: "{} days"

Every template is parsed when the file is loaded, so syntax errors surface
before any message is rendered.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import final

import yaml

from rsfmt.arguments import Arguments, Renderer, bind
from rsfmt.config import DEFAULT_CONFIG, RenderConfig, parse_config
from rsfmt.errors import FormatSyntaxError
from rsfmt.parser import Template, parse_template

logger = logging.getLogger(__name__)


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class MessageCatalog(Mapping[str, Template]):
    """
    Parsed templates by message name.

    Rendering a message never captures variables from the caller; every
    named placeholder must be passed as a keyword argument.
    """

    messages: Mapping[str, Template]
    config: RenderConfig = DEFAULT_CONFIG
    source_file: Path | None = None
    """Path of the file the catalog was loaded from, if any."""

    _renderer: Renderer = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_renderer", Renderer(self.config))

    def __getitem__(self, name: str) -> Template:
        return self.messages[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    def _template(self, name: str) -> Template:
        try:
            return self.messages[name]
        except KeyError:
            location = f" in {self.source_file}" if self.source_file is not None else ""
            raise KeyError(f"No message named {name!r}{location}") from None

    def format_args(self, name: str, /, *args: object, **kwargs: object) -> Arguments:
        return bind(self._template(name), args, kwargs, config=self.config)

    def render(self, name: str, /, *args: object, **kwargs: object) -> str:
        """
        Render the message called ``name``.

        :raises KeyError: If the catalog has no such message.
        """
        return self._renderer.render(self._template(name), args, kwargs)


def parse_messages(data: object, *, source: str = "<catalog>") -> dict[str, Template]:
    """
    Parse a mapping of message names to template strings.

    :raises ValueError: If a name or template is not a string, or a template
        is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError(f"messages in {source} must be a mapping, got {type(data).__name__}")
    result: dict[str, Template] = {}
    for name, template in data.items():
        if not isinstance(name, str):
            raise ValueError(f"Message name must be a string, got {type(name).__name__}: {name!r}")
        if not isinstance(template, str):
            raise ValueError(
                f"Template for message {name!r} must be a string, got {type(template).__name__}"
            )
        try:
            result[name] = parse_template(template)
        except FormatSyntaxError as e:
            raise ValueError(f"Message {name!r} in {source}: {e}") from e
    return result


def parse_catalog_file(file_path: Path) -> MessageCatalog:
    """
    Parse a catalog file (YAML/JSON/TOML).

    :param file_path: Path to the catalog file.
    :return: The catalog with every template parsed.
    :raises ValueError: If the file format is not recognized or its content is
        invalid.
    """
    content = file_path.read_text(encoding="utf-8")

    suffix = file_path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(content)
    elif suffix == ".json":
        data = json.loads(content)
    elif suffix == ".toml":
        data = tomllib.loads(content)
    else:
        raise ValueError(
            f"Unrecognized catalog file format: {file_path.name}. "
            f"Expected .yaml, .yml, .json, or .toml"
        )

    if not isinstance(data, dict):
        raise ValueError(
            f"Catalog file must contain a mapping at top level, got {type(data).__name__}"
        )
    unknown = sorted(str(key) for key in data if key not in ("messages", "config"))
    if unknown:
        raise ValueError(f"Unknown top-level keys in {file_path.name}: {', '.join(unknown)}")

    config = parse_config(data.get("config") or {})
    messages = parse_messages(data.get("messages") or {}, source=file_path.name)
    logger.debug("Loaded %d messages from %s", len(messages), file_path)
    return MessageCatalog(messages=messages, config=config, source_file=file_path)
