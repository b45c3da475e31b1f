"""Division on IEEE-754 bit patterns, using a Newton-Raphson reciprocal."""

from __future__ import annotations

from softieee.formats import FloatFormat
from softieee.recip import c_hw, get_iterations, next_guess, reciprocal_precision

_C_FULL_32 = 0x7504F333


def _reciprocal(
    fmt: FloatFormat, b_uq1: int, half_iterations: int, full_iterations: int
) -> int:
    """Estimate 1/b as a UQ0 fixed-point number of the format's width.

    `b_uq1` is the divisor's significand as UQ1 in [1, 2). The result is
    returned before the final fix-up by 2 that the caller applies.
    """
    width = fmt.bits
    mask = fmt.int_mask

    if half_iterations <= 0:
        c = (_C_FULL_32 << (width - 32)) & mask
        x_uq0 = (c - b_uq1) & mask
        for _ in range(full_iterations):
            x_uq0 = next_guess(x_uq0, b_uq1, width)
        return x_uq0

    hw = width // 2
    half_mask = (1 << hw) - 1
    lo_mask = mask >> hw

    b_uq1_hw = b_uq1 >> hw
    x_uq0_hw = (c_hw(fmt) - b_uq1_hw) & half_mask
    for _ in range(half_iterations):
        x_uq0_hw = next_guess(x_uq0_hw, b_uq1_hw, hw)
    # A possible overflow in the half-width steps is undone by one decrement.
    x_uq0_hw = (x_uq0_hw - 1) & half_mask

    # One full-width step, built from half-width products.
    blo = b_uq1 & lo_mask
    product = (x_uq0_hw * b_uq1_hw + ((x_uq0_hw * blo) >> hw)) & mask
    corr_uq1 = (1 - product) & mask

    lo_corr = corr_uq1 & lo_mask
    hi_corr = corr_uq1 >> hw

    x_uq0 = (((x_uq0_hw * hi_corr) << 1) & mask) + ((x_uq0_hw * lo_corr) >> (hw - 1))
    x_uq0 = (x_uq0 - 2) & mask
    return (x_uq0 - 1) & mask


def div(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bit pattern of `a / b` in format `fmt`."""
    a_rep = fmt._checked(a)
    b_rep = fmt._checked(b)

    half_iterations, full_iterations = get_iterations(fmt)
    recip_precision = reciprocal_precision(fmt)
    if fmt.bits == 128:
        # The 128-bit format needs one more half-width step than the bound assumes.
        half_iterations += 1

    width = fmt.bits
    mask = fmt.int_mask
    significand_bits = fmt.significand_bits
    exponent_sat = fmt.exponent_max
    implicit_bit = fmt.implicit_bit
    significand_mask = fmt.significand_mask
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    inf_rep = fmt.exponent_mask
    quiet_bit = implicit_bit >> 1
    qnan_rep = inf_rep | quiet_bit

    a_exponent = (a_rep >> significand_bits) & exponent_sat
    b_exponent = (b_rep >> significand_bits) & exponent_sat
    quotient_sign = (a_rep ^ b_rep) & sign_bit

    a_significand = a_rep & significand_mask
    b_significand = b_rep & significand_mask

    res_exponent = a_exponent - b_exponent + fmt.exponent_bias

    # Zero, subnormal, infinity or NaN on either side.
    if ((a_exponent - 1) & mask) >= exponent_sat - 1 or (
        (b_exponent - 1) & mask
    ) >= exponent_sat - 1:
        a_abs = a_rep & abs_mask
        b_abs = b_rep & abs_mask

        if a_abs > inf_rep:
            return a_rep | quiet_bit
        if b_abs > inf_rep:
            return b_rep | quiet_bit
        if a_abs == inf_rep:
            return qnan_rep if b_abs == inf_rep else a_abs | quotient_sign
        if b_abs == inf_rep:
            return quotient_sign
        if a_abs == 0:
            return qnan_rep if b_abs == 0 else quotient_sign
        if b_abs == 0:
            return inf_rep | quotient_sign

        if a_abs < implicit_bit:
            exponent, a_significand = fmt.normalize(a_significand)
            res_exponent += exponent
        if b_abs < implicit_bit:
            exponent, b_significand = fmt.normalize(b_significand)
            res_exponent -= exponent

    a_significand |= implicit_bit
    b_significand |= implicit_bit

    # The divisor's significand as UQ1 in [1, 2), left-aligned in the word.
    b_uq1 = (b_significand << (width - significand_bits - 1)) & mask

    x_uq0 = _reciprocal(fmt, b_uq1, half_iterations, full_iterations)
    x_uq0 = (x_uq0 - 2) & mask
    # Now the estimate lies strictly below 1/b.
    x_uq0 = (x_uq0 - recip_precision) & mask

    quotient = (x_uq0 * ((a_significand << 1) & mask)) >> width

    if quotient < (implicit_bit << 1):
        residual_lo = (
            ((a_significand << (significand_bits + 1)) & mask)
            - (quotient * b_significand)
        ) & mask
        res_exponent -= 1
        a_significand <<= 1
    else:
        quotient >>= 1
        residual_lo = (
            ((a_significand << significand_bits) & mask) - (quotient * b_significand)
        ) & mask

    if res_exponent >= exponent_sat:
        return inf_rep | quotient_sign

    if res_exponent > 0:
        abs_result = (quotient & significand_mask) | (res_exponent << significand_bits)
        residual_lo = (residual_lo << 1) & mask
    else:
        if significand_bits + res_exponent < 0:
            return quotient_sign
        abs_result = quotient >> (-res_exponent + 1)
        residual_lo = (
            ((a_significand << (significand_bits + res_exponent)) & mask)
            - (((abs_result * b_significand) & mask) << 1)
        ) & mask

    # Ties go to even; the comparisons below then step up to the rounded value.
    residual_lo = (residual_lo + (abs_result & 1)) & mask
    abs_result += int(residual_lo > b_significand)

    if width == 128 or (width == 32 and half_iterations > 0):
        abs_result += int(abs_result < inf_rep and residual_lo > 3 * b_significand)
    if width == 128:
        abs_result += int(abs_result < inf_rep and residual_lo > 5 * b_significand)

    return (abs_result | quotient_sign) & mask