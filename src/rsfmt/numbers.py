"""Digit generation for floats and integers. Signs are handled by the caller."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_EVEN, Decimal, localcontext

_RADIX_CODES = {16: "x", 8: "o", 2: "b"}


def _non_finite(value: float) -> str | None:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf"
    return None


def float_display(value: float, precision: int | None = None) -> str:
    """
    Decimal digits of ``abs(value)`` as printed by ``{}``.

    Without a precision this is the shortest string that round-trips, never in
    exponent form, with no trailing ``.0``.
    """
    value = abs(value)
    if (special := _non_finite(value)) is not None:
        return special
    if precision is not None:
        return f"{value:.{precision}f}"
    text = repr(value)
    if "e" in text:
        text = f"{Decimal(text):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def float_debug(value: float, precision: int | None = None) -> str:
    """
    Decimal digits of ``abs(value)`` as printed by ``{:?}``.

    Always keeps a fractional part, and switches to exponent form for
    magnitudes below ``1e-4`` or from ``1e16``.
    """
    value = abs(value)
    if precision is not None or _non_finite(value) is not None:
        return float_display(value, precision)
    if value != 0 and (value < 1e-4 or value >= 1e16):
        return exponent_digits(value)
    text = float_display(value)
    if "." not in text:
        text += ".0"
    return text


def exponent_digits(value: int | float, precision: int | None = None, *, upper: bool = False) -> str:
    """
    ``abs(value)`` in scientific notation, e.g. ``6.942e4``.

    Without a precision the mantissa has as many digits as needed and no
    trailing zeros. With one, it has exactly ``precision`` fractional digits,
    rounded half to even on the exact value.
    """
    marker = "E" if upper else "e"
    if isinstance(value, float):
        value = abs(value)
        if (special := _non_finite(value)) is not None:
            return special
    else:
        value = abs(value)

    if precision is None:
        decimal = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
        _, digits_tuple, exponent = decimal.as_tuple()
        assert isinstance(exponent, int)
        digits = list(digits_tuple)
        if not any(digits):
            return f"0{marker}0"
        while len(digits) > 1 and digits[-1] == 0:
            digits.pop()
            exponent += 1
        power = exponent + len(digits) - 1
        mantissa = str(digits[0])
        if len(digits) > 1:
            mantissa += "." + "".join(map(str, digits[1:]))
        return f"{mantissa}{marker}{power}"

    decimal = Decimal(value)
    if decimal == 0:
        mantissa = "0." + "0" * precision if precision else "0"
        return f"{mantissa}{marker}0"
    _, digits_tuple, exponent = decimal.as_tuple()
    assert isinstance(exponent, int)
    quantum = Decimal(1).scaleb(-precision)
    power = decimal.adjusted()
    with localcontext() as context:
        # Room for the rounded mantissa only; the scaled value below is built
        # exactly, so quantize is the single rounding step.
        context.prec = precision + 2
        rounded = Decimal((0, digits_tuple, exponent - power)).quantize(quantum, rounding=ROUND_HALF_EVEN)
        if rounded >= 10:
            power += 1
            rounded = Decimal((0, digits_tuple, exponent - power)).quantize(quantum, rounding=ROUND_HALF_EVEN)
        return f"{rounded:f}{marker}{power}"


def radix_digits(pattern: int, base: int, *, upper: bool = False) -> str:
    """Digits of the non-negative ``pattern`` in base 16, 8 or 2."""
    digits = format(pattern, _RADIX_CODES[base])
    return digits.upper() if upper else digits
