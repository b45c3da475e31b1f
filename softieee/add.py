"""Addition and subtraction on IEEE-754 bit patterns, rounding to nearest even."""

from __future__ import annotations

from softieee.formats import FloatFormat


def add(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bit pattern of `a + b` in format `fmt`."""
    a_rep = fmt._checked(a)
    b_rep = fmt._checked(b)

    bits = fmt.bits
    significand_bits = fmt.significand_bits
    mask = fmt.int_mask
    implicit_bit = fmt.implicit_bit
    significand_mask = fmt.significand_mask
    sign_bit = fmt.sign_mask
    abs_mask = sign_bit - 1
    exponent_mask = fmt.exponent_mask
    inf_rep = exponent_mask
    quiet_bit = implicit_bit >> 1
    qnan_rep = exponent_mask | quiet_bit

    a_abs = a_rep & abs_mask
    b_abs = b_rep & abs_mask

    # Zero, infinity or NaN on either side.
    if ((a_abs - 1) & mask) >= inf_rep - 1 or ((b_abs - 1) & mask) >= inf_rep - 1:
        if a_abs > inf_rep:
            return a_abs | quiet_bit
        if b_abs > inf_rep:
            return b_abs | quiet_bit
        if a_abs == inf_rep:
            if a_rep ^ b_rep == sign_bit:
                return qnan_rep
            return a_rep
        if b_abs == inf_rep:
            return b_rep
        if a_abs == 0:
            return a_rep & b_rep if b_abs == 0 else b_rep
        if b_abs == 0:
            return a_rep

    if b_abs > a_abs:
        a_rep, b_rep = b_rep, a_rep

    a_exponent = (a_rep & exponent_mask) >> significand_bits
    b_exponent = (b_rep & exponent_mask) >> significand_bits
    a_significand = a_rep & significand_mask
    b_significand = b_rep & significand_mask

    if a_exponent == 0:
        a_exponent, a_significand = fmt.normalize(a_significand)
    if b_exponent == 0:
        b_exponent, b_significand = fmt.normalize(b_significand)

    result_sign = a_rep & sign_bit
    subtraction = bool((a_rep ^ b_rep) & sign_bit)

    # Room for round, guard and sticky bits.
    a_significand = (a_significand | implicit_bit) << 3
    b_significand = (b_significand | implicit_bit) << 3

    align = a_exponent - b_exponent
    if align:
        if align < bits:
            sticky = int((b_significand << (bits - align)) & mask != 0)
            b_significand = (b_significand >> align) | sticky
        else:
            b_significand = 1

    if subtraction:
        a_significand -= b_significand
        if a_significand == 0:
            return 0
        top = implicit_bit << 3
        if a_significand < top:
            shift = top.bit_length() - a_significand.bit_length()
            a_significand <<= shift
            a_exponent -= shift
    else:
        a_significand += b_significand
        if a_significand & (implicit_bit << 4):
            sticky = a_significand & 1
            a_significand = (a_significand >> 1) | sticky
            a_exponent += 1

    if a_exponent >= fmt.exponent_max:
        return inf_rep | result_sign

    if a_exponent <= 0:
        shift = 1 - a_exponent
        sticky = int((a_significand << (bits - shift)) & mask != 0)
        a_significand = (a_significand >> shift) | sticky
        a_exponent = 0

    round_guard_sticky = a_significand & 0x7

    result = (a_significand >> 3) & significand_mask
    result |= a_exponent << significand_bits
    result |= result_sign

    # Rounding may carry into the exponent and reach infinity, which is correct.
    if round_guard_sticky > 0x4:
        result += 1
    if round_guard_sticky == 0x4:
        result += result & 1
    return result


def sub(fmt: FloatFormat, a: int, b: int) -> int:
    """Return the bit pattern of `a - b` in format `fmt`."""
    return add(fmt, a, fmt._checked(b) ^ fmt.sign_mask)