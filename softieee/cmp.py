"""Comparisons of IEEE-754 bit patterns with the usual libgcc return conventions."""

from __future__ import annotations

from enum import Enum

from softieee.formats import FloatFormat


class Ordering(Enum):
    """The outcome of comparing two floating-point values."""

    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"
    UNORDERED = "unordered"

    def le_abi(self) -> int:
        """Encode for `le`, `lt`, `eq` and `ne`: unordered reports 1."""
        return _LE_ABI[self]

    def ge_abi(self) -> int:
        """Encode for `ge` and `gt`: unordered reports -1."""
        return _GE_ABI[self]


_LE_ABI = {
    Ordering.LESS: -1,
    Ordering.EQUAL: 0,
    Ordering.GREATER: 1,
    Ordering.UNORDERED: 1,
}
_GE_ABI = {
    Ordering.LESS: -1,
    Ordering.EQUAL: 0,
    Ordering.GREATER: 1,
    Ordering.UNORDERED: -1,
}


def _signed(fmt: FloatFormat, bits: int) -> int:
    return bits - (1 << fmt.bits) if bits & fmt.sign_mask else bits


def compare(fmt: FloatFormat, a: int, b: int) -> Ordering:
    """Order the values whose bit patterns are `a` and `b`."""
    a = fmt._checked(a)
    b = fmt._checked(b)
    abs_mask = fmt.sign_mask - 1
    inf_rep = fmt.exponent_mask
    a_abs = a & abs_mask
    b_abs = b & abs_mask

    if a_abs > inf_rep or b_abs > inf_rep:
        return Ordering.UNORDERED
    if a_abs | b_abs == 0:
        return Ordering.EQUAL

    a_srep = _signed(fmt, a)
    b_srep = _signed(fmt, b)

    if a_srep & b_srep >= 0:
        # At least one is positive: integer order matches float order.
        if a_srep < b_srep:
            return Ordering.LESS
        if a_srep == b_srep:
            return Ordering.EQUAL
        return Ordering.GREATER
    # Both negative: integer order is reversed.
    if a_srep > b_srep:
        return Ordering.LESS
    if a_srep == b_srep:
        return Ordering.EQUAL
    return Ordering.GREATER


def unordered(fmt: FloatFormat, a: int, b: int) -> bool:
    """True when either operand is a NaN."""
    a = fmt._checked(a)
    b = fmt._checked(b)
    abs_mask = fmt.sign_mask - 1
    inf_rep = fmt.exponent_mask
    return (a & abs_mask) > inf_rep or (b & abs_mask) > inf_rep


def le(fmt: FloatFormat, a: int, b: int) -> int:
    return compare(fmt, a, b).le_abi()


def ge(fmt: FloatFormat, a: int, b: int) -> int:
    return compare(fmt, a, b).ge_abi()


def eq(fmt: FloatFormat, a: int, b: int) -> int:
    return compare(fmt, a, b).le_abi()


def lt(fmt: FloatFormat, a: int, b: int) -> int:
    return compare(fmt, a, b).le_abi()


def ne(fmt: FloatFormat, a: int, b: int) -> int:
    return compare(fmt, a, b).le_abi()


def gt(fmt: FloatFormat, a: int, b: int) -> int:
    return compare(fmt, a, b).ge_abi()