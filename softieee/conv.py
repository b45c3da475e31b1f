"""Conversions between fixed-width integers and IEEE-754 bit patterns."""

from __future__ import annotations

from softieee.formats import FloatFormat


def _int_range(int_bits: int, signed: bool) -> tuple[int, int]:
    if isinstance(int_bits, bool) or not isinstance(int_bits, int) or int_bits < 1:
        raise ValueError(f"invalid integer width: {int_bits!r}")
    if signed:
        half = 1 << (int_bits - 1)
        return -half, half - 1
    return 0, (1 << int_bits) - 1


def _check_widths(fmt: FloatFormat, int_bits: int) -> None:
    # Every integer of this width must land below the saturated exponent.
    if int_bits > fmt.exponent_bias + 1:
        raise ValueError(
            f"{int_bits}-bit integers do not fit the exponent range of "
            f"the {fmt.bits}-bit format"
        )


def _unsigned_to_bits(fmt: FloatFormat, value: int, int_bits: int) -> int:
    if value == 0:
        return 0
    sig = fmt.significand_bits
    leading_zeros = int_bits - value.bit_length()
    aligned = value << leading_zeros
    # One less than the true exponent: the mantissa carries the implicit bit.
    exponent = fmt.exponent_bias - 1 + int_bits - leading_zeros - 1
    dropped_width = int_bits - sig - 1
    if dropped_width <= 0:
        mantissa = aligned << -dropped_width
    else:
        mantissa = aligned >> dropped_width
        dropped = aligned & ((1 << dropped_width) - 1)
        half = 1 << (dropped_width - 1)
        if dropped > half or (dropped == half and mantissa & 1):
            mantissa += 1
    # Addition lets a rounding carry move into the exponent field.
    return (exponent << sig) + mantissa


def int_to_float(fmt: FloatFormat, value: int, int_bits: int, signed: bool) -> int:
    """Convert an `int_bits`-wide integer to `fmt`, rounding to nearest even."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"value must be an int, not {type(value).__name__}")
    low, high = _int_range(int_bits, signed)
    if not low <= value <= high:
        kind = "signed" if signed else "unsigned"
        raise ValueError(f"{value} is not a {kind} {int_bits}-bit integer")
    _check_widths(fmt, int_bits)
    sign = fmt.sign_mask if value < 0 else 0
    return _unsigned_to_bits(fmt, abs(value), int_bits) | sign


def float_to_int(fmt: FloatFormat, bits: int, int_bits: int, signed: bool) -> int:
    """Convert a `fmt` bit pattern to an `int_bits`-wide integer.

    The value is truncated towards zero and saturates at the integer range;
    NaN converts to zero.
    """
    bits = fmt._checked(bits)
    low, high = _int_range(int_bits, signed)
    _check_widths(fmt, int_bits)

    sig = fmt.significand_bits
    bias = fmt.exponent_bias
    negative = fmt.is_sign_negative(bits)
    if signed:
        fbits = bits & ~fmt.sign_mask
        int_max_exp = bias + int_bits - 1
    else:
        # A set sign bit puts negative values above the exponent mask.
        fbits = bits
        int_max_exp = bias + int_bits

    if fbits < bias << sig:
        return 0
    if fbits < int_max_exp << sig:
        int_mask = (1 << int_bits) - 1
        shift = int_bits - sig - 1
        if shift >= 0:
            m_base = (fbits << shift) & int_mask
        else:
            m_base = (fbits >> -shift) & int_mask
        mantissa = (1 << (int_bits - 1)) | m_base
        value = mantissa >> (bias + int_bits - 1 - (fbits >> sig))
        return -value if signed and negative else value
    if fbits <= fmt.exponent_mask:
        return low if signed and negative else high
    return 0