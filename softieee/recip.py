"""Newton-Raphson reciprocal helpers used by the division routine."""

from __future__ import annotations

from softieee.formats import FloatFormat

WORD_BITS = 64
"""Width of a machine word; decides whether iterations run at half width."""

_C_U128 = 0x7504F333F9DE6108B2FB1366EAA6A542


def get_iterations(fmt: FloatFormat) -> tuple[int, int]:
    """Return (half-width iterations, full-width iterations) for `fmt`."""
    total = fmt.bits.bit_length() - 1 - 2
    if total < 1:
        raise ValueError(f"{fmt.bits}-bit format is too narrow for reciprocal iteration")
    if 2 * fmt.bits <= WORD_BITS:
        # Widening multiplication fits a word, so half width gains nothing.
        return 0, total
    return total - 1, 1


def reciprocal_precision(fmt: FloatFormat) -> int:
    """Bound on the reciprocal's error in units of 2**-bits, final decrement included."""
    half, full = get_iterations(fmt)
    if full < 1:
        raise ValueError("at least one full-width iteration is required")
    table = {
        (32, 2, 1): 74,
        (32, 0, 3): 10,
        (64, 3, 1): 220,
        (128, 4, 1): 13922,
    }
    try:
        return table[(fmt.bits, half, full)]
    except KeyError:
        raise ValueError(
            f"no error bound for {fmt.bits}-bit format with {half}+{full} iterations"
        ) from None


def c_hw(fmt: FloatFormat) -> int:
    """The constant 3/4 + 1/sqrt(2) - 1 as an unsigned fixed-point fraction of half width."""
    half = fmt.bits // 2
    if not 0 < half <= 128:
        raise ValueError(f"no half-width constant for {fmt.bits}-bit format")
    return _C_U128 >> (128 - half)


def next_guess(x_uq0: int, b_uq1: int, width: int) -> int:
    """One step x * (2 - b*x) towards 1/b, in `width`-bit fixed point."""
    if width < 1:
        raise ValueError("width must be positive")
    mask = (1 << width) - 1
    x_uq0 &= mask
    b_uq1 &= mask
    # In UQ1 arithmetic 0 - y wraps to 2 - y.
    corr_uq1 = (-((x_uq0 * b_uq1) >> width)) & mask
    return ((x_uq0 * corr_uq1) >> (width - 1)) & mask