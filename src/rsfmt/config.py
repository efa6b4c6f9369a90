from collections.abc import Mapping
from dataclasses import dataclass, fields


@dataclass(kw_only=True, frozen=True, slots=True, weakref_slot=True)
class RenderConfig:
    strict: bool = True
    """
    Whether binding a template rejects arguments that no placeholder uses.

    Missing arguments are always an error.
    """

    capture: bool = True
    """
    Whether named placeholders without a keyword argument are looked up in the
    caller's local and global variables.
    """

    pretty_indent: int = 4
    """
    Spaces per nesting level in pretty Debug output (``{:#?}``).
    """

    def __post_init__(self) -> None:
        if isinstance(self.pretty_indent, bool) or not isinstance(self.pretty_indent, int):
            raise ValueError(
                f"pretty_indent must be an integer, got {type(self.pretty_indent).__name__}"
            )
        if self.pretty_indent < 0:
            raise ValueError(f"pretty_indent must not be negative, got {self.pretty_indent}")

    @property
    def indent(self) -> str:
        return " " * self.pretty_indent


DEFAULT_CONFIG = RenderConfig()


def parse_config(data: Mapping[str, object]) -> RenderConfig:
    """
    Build a :class:`RenderConfig` from a plain mapping, e.g. a parsed YAML section.

    :param data: Mapping of option names to values.
    :return: The validated configuration.
    :raises ValueError: If an option is unknown or has the wrong type.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")
    known = {field.name: field for field in fields(RenderConfig)}
    for key, value in data.items():
        if key not in known:
            raise ValueError(
                f"Unknown configuration option: {key!r}. Expected one of {', '.join(sorted(known))}"
            )
        if known[key].type in ("bool", bool) and not isinstance(value, bool):
            raise ValueError(f"Configuration option {key!r} must be a boolean, got {type(value).__name__}")
    return RenderConfig(**data)  # type: ignore[arg-type]
