"""Narrowing conversion between IEEE-754 formats, rounding to nearest even."""

from __future__ import annotations

from softieee.formats import FloatFormat


def truncate(src: FloatFormat, dst: FloatFormat, bits: int) -> int:
    """Convert the `src` bit pattern `bits` into the narrower format `dst`."""
    if (
        dst.bits > src.bits
        or dst.significand_bits >= src.significand_bits
        or dst.exponent_bias > src.exponent_bias
    ):
        raise ValueError(f"cannot truncate {src.bits}-bit format to {dst.bits}-bit format")
    a = src._checked(bits)

    src_bits = src.bits
    src_mask = src.int_mask
    src_sig_bits = src.significand_bits
    src_exp_bias = src.exponent_bias
    src_min_normal = src.implicit_bit
    src_significand_mask = src.significand_mask
    src_infinity = src.exponent_mask
    src_sign_mask = src.sign_mask
    src_abs_mask = src_sign_mask - 1

    dst_sig_bits = dst.significand_bits
    dst_mask = dst.int_mask
    dst_inf_exp = dst.exponent_max
    dst_exp_bias = dst.exponent_bias

    sign_bits_delta = src_sig_bits - dst_sig_bits
    round_mask = (1 << sign_bits_delta) - 1
    halfway = 1 << (sign_bits_delta - 1)
    src_qnan = 1 << (src_sig_bits - 1)
    src_nan_code = src_qnan - 1
    dst_qnan = 1 << (dst_sig_bits - 1)
    dst_nan_code = dst_qnan - 1

    underflow = (src_exp_bias + 1 - dst_exp_bias) << src_sig_bits
    overflow = (src_exp_bias + dst_inf_exp - dst_exp_bias) << src_sig_bits

    a_abs = a & src_abs_mask
    sign = a & src_sign_mask

    if ((a_abs - underflow) & src_mask) < ((a_abs - overflow) & src_mask):
        # Within the normal range of the destination: shift, rebias and round.
        bias_diff = src_exp_bias - dst_exp_bias
        abs_result = ((a_abs >> sign_bits_delta) - (bias_diff << dst_sig_bits)) & dst_mask
        round_bits = a_abs & round_mask
        if round_bits > halfway:
            abs_result += 1
        elif round_bits == halfway:
            abs_result += abs_result & 1
    elif a_abs > src_infinity:
        # NaN: quiet it and keep what fits of the payload.
        abs_result = dst_inf_exp << dst_sig_bits
        abs_result |= dst_qnan
        abs_result |= dst_nan_code & ((a_abs & src_nan_code) >> sign_bits_delta)
    elif a_abs >= overflow:
        abs_result = dst_inf_exp << dst_sig_bits
    else:
        # Underflow to a subnormal or zero: denormalize with a sticky bit.
        a_exp = a_abs >> src_sig_bits
        shift = src_exp_bias - dst_exp_bias - a_exp + 1
        significand = (a & src_significand_mask) | src_min_normal
        if shift > src_sig_bits:
            abs_result = 0
        else:
            sticky = int((significand << (src_bits - shift)) & src_mask != 0)
            denormalized = (significand >> shift) | sticky
            abs_result = denormalized >> sign_bits_delta
            round_bits = denormalized & round_mask
            if round_bits > halfway:
                abs_result += 1
            elif round_bits == halfway:
                abs_result += abs_result & 1

    return (abs_result | (sign >> (src_bits - dst.bits))) & dst_mask