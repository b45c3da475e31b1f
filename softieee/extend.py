"""Widening conversion between IEEE-754 formats."""

from __future__ import annotations

from softieee.formats import FloatFormat


def extend(src: FloatFormat, dst: FloatFormat, bits: int) -> int:
    """Convert the `src` bit pattern `bits` exactly into the wider format `dst`."""
    if (
        dst.bits < src.bits
        or dst.significand_bits < src.significand_bits
        or dst.exponent_bias < src.exponent_bias
    ):
        raise ValueError(f"cannot extend {src.bits}-bit format to {dst.bits}-bit format")
    a = src._checked(bits)

    src_min_normal = src.implicit_bit
    src_infinity = src.exponent_mask
    src_sign_mask = src.sign_mask
    src_abs_mask = src_sign_mask - 1
    src_qnan = src.significand_mask
    src_nan_code = src_qnan - 1
    src_int_mask = src.int_mask

    dst_sign_bits = dst.significand_bits
    dst_min_normal = dst.implicit_bit
    dst_int_mask = dst.int_mask

    sign_bits_delta = dst_sign_bits - src.significand_bits
    exp_bias_delta = dst.exponent_bias - src.exponent_bias
    a_abs = a & src_abs_mask
    abs_result = 0

    if ((a_abs - src_min_normal) & src_int_mask) < (
        (src_infinity - src_min_normal) & src_int_mask
    ):
        # Normal: shift into place and rebias the exponent.
        abs_result = (a_abs << sign_bits_delta) + (exp_bias_delta << dst_sign_bits)
    elif a_abs >= src_infinity:
        # Infinity or NaN: keep the payload right-aligned.
        abs_result = dst.exponent_max << dst_sign_bits
        abs_result |= (a_abs & src_qnan) << sign_bits_delta
        abs_result |= (a_abs & src_nan_code) << sign_bits_delta
    elif a_abs:
        # Subnormal: renormalize and adjust the exponent.
        scale = src_min_normal.bit_length() - a_abs.bit_length()
        abs_result = (a_abs << (sign_bits_delta + scale)) & dst_int_mask
        abs_result = (abs_result ^ dst_min_normal) | (
            (exp_bias_delta - scale + 1) << dst_sign_bits
        )

    sign_result = (a & src_sign_mask) << (dst.bits - src.bits)
    return (abs_result | sign_result) & dst_int_mask