"""
Fixed-width integers.

Python integers are unbounded, but the radix traits (``x``, ``X``, ``o``,
``b``) print negative numbers as their two's complement, which needs a bit
width. Wrap a value in :class:`FixedInt` to choose one explicitly::

    >>> from rsfmt import format, i8
    >>> format("{:x}", i8(-1))
    'ff'

Plain negative ``int`` values use the narrowest of ``i32``, ``i64`` and
``i128`` that can hold them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from rsfmt.errors import FormatTypeError

POINTER_BITS = 64

_IMPLICIT_WIDTHS = (32, 64, 128)


@final
@dataclass(frozen=True, slots=True, weakref_slot=True)
class FixedInt:
    value: int
    bits: int
    signed: bool

    def __post_init__(self) -> None:
        if self.bits <= 0:
            raise ValueError(f"Bit width must be positive, got {self.bits}")
        if not self.minimum <= self.value <= self.maximum:
            raise OverflowError(f"{self.value} is out of range for {self.type_name}")

    @classmethod
    def wrapping(cls, value: int, *, bits: int, signed: bool) -> FixedInt:
        """Truncate ``value`` to ``bits`` bits, like an ``as`` cast."""
        value &= (1 << bits) - 1
        if signed and value >= 1 << (bits - 1):
            value -= 1 << bits
        return cls(value=value, bits=bits, signed=signed)

    @property
    def minimum(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def maximum(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    @property
    def type_name(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.bits}"

    def unsigned(self) -> int:
        """The two's complement bit pattern as a non-negative integer."""
        return self.value & ((1 << self.bits) - 1)

    def __index__(self) -> int:
        return self.value

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"{self.type_name}({self.value})"


def i8(value: int) -> FixedInt:
    return FixedInt(value=value, bits=8, signed=True)


def i16(value: int) -> FixedInt:
    return FixedInt(value=value, bits=16, signed=True)


def i32(value: int) -> FixedInt:
    return FixedInt(value=value, bits=32, signed=True)


def i64(value: int) -> FixedInt:
    return FixedInt(value=value, bits=64, signed=True)


def i128(value: int) -> FixedInt:
    return FixedInt(value=value, bits=128, signed=True)


def isize(value: int) -> FixedInt:
    return FixedInt(value=value, bits=POINTER_BITS, signed=True)


def u8(value: int) -> FixedInt:
    return FixedInt(value=value, bits=8, signed=False)


def u16(value: int) -> FixedInt:
    return FixedInt(value=value, bits=16, signed=False)


def u32(value: int) -> FixedInt:
    return FixedInt(value=value, bits=32, signed=False)


def u64(value: int) -> FixedInt:
    return FixedInt(value=value, bits=64, signed=False)


def u128(value: int) -> FixedInt:
    return FixedInt(value=value, bits=128, signed=False)


def usize(value: int) -> FixedInt:
    return FixedInt(value=value, bits=POINTER_BITS, signed=False)


def bit_pattern(value: int | FixedInt) -> int:
    """
    The non-negative integer whose digits a radix trait prints for ``value``.

    :raises FormatTypeError: If a negative ``int`` does not fit in 128 bits.
    """
    if isinstance(value, FixedInt):
        return value.unsigned()
    if value >= 0:
        return value
    for bits in _IMPLICIT_WIDTHS:
        if value >= -(1 << (bits - 1)):
            return value & ((1 << bits) - 1)
    raise FormatTypeError(f"{value} does not fit in i128; wrap it in FixedInt to choose a width")
