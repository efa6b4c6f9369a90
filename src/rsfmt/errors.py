"""Exceptions raised while parsing templates and binding arguments."""

from __future__ import annotations


class FormatError(ValueError):
    """Base class for every error raised by rsfmt."""


class FormatSyntaxError(FormatError):
    """
    The template string is not a valid format string.

    ``template`` holds the offending template and ``position`` the character
    offset at which parsing stopped.
    """

    def __init__(self, message: str, *, template: str, position: int) -> None:
        self.template = template
        self.position = position
        super().__init__(f"invalid format string: {message} (at position {position} in {template!r})")


class MissingArgumentError(FormatError):
    """A placeholder refers to an argument that was not supplied."""


class UnusedArgumentError(FormatError):
    """An argument was supplied that no placeholder refers to."""


class FormatTypeError(FormatError, TypeError):
    """A value does not support the requested formatting trait."""
