"""Raising IEEE-754 bit patterns to integer powers."""

from __future__ import annotations

from softieee.div import div
from softieee.formats import FloatFormat
from softieee.mul import mul

_I32_MIN = -(1 << 31)
_I32_MAX = (1 << 31) - 1


def powi(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bit pattern of `a` raised to the 32-bit integer power `b`."""
    base = fmt._checked(a)
    if isinstance(b, bool) or not isinstance(b, int):
        raise TypeError(f"exponent must be an int, not {type(b).__name__}")
    if not _I32_MIN <= b <= _I32_MAX:
        raise ValueError(f"exponent {b} is not a 32-bit integer")

    one = fmt.exponent_bias << fmt.significand_bits
    remaining = abs(b)
    result = one
    while True:
        if remaining & 1:
            result = mul(fmt, result, base)
        remaining >>= 1
        if not remaining:
            break
        base = mul(fmt, base, base)

    return div(fmt, one, result) if b < 0 else result