import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from softieee.div import div
from softieee.extend import extend
from softieee.formats import F16, F32, F64, F128
from softieee.trunc import truncate


def _native_div(fmt, a, b):
    x = fmt.from_bits(a)
    y = fmt.from_bits(b)
    if y == 0.0:
        if math.isnan(x) or x == 0.0:
            q = math.nan
        else:
            q = math.copysign(math.inf, x) * math.copysign(1.0, y)
    else:
        q = x / y
    return fmt.to_bits(q)


def _bits(fmt):
    return st.integers(min_value=0, max_value=fmt.int_mask)


@pytest.mark.parametrize("fmt", [F32, F64, F128])
@pytest.mark.parametrize(
    "x, y, expected",
    [
        (6.0, 3.0, 2.0),
        (1.0, 4.0, 0.25),
        (-9.0, 3.0, -3.0),
        (1.0, -8.0, -0.125),
        (7.5, 2.5, 3.0),
        (-1.0, -1.0, 1.0),
    ],
)
def test_exact_quotients(fmt, x, y, expected):
    assert div(fmt, fmt.to_bits(x), fmt.to_bits(y)) == fmt.to_bits(expected)


@pytest.mark.parametrize(
    "fmt, expected",
    [
        (F32, 0x3EAAAAAB),
        (F64, 0x3FD5555555555555),
        (F128, 0x3FFD5555555555555555555555555555),
    ],
)
def test_one_third(fmt, expected):
    assert div(fmt, fmt.to_bits(1.0), fmt.to_bits(3.0)) == expected


def test_two_thirds_f128():
    result = div(F128, F128.to_bits(2.0), F128.to_bits(3.0))
    assert result == 0x3FFE5555555555555555555555555555


@pytest.mark.parametrize("fmt", [F32, F64, F128])
def test_special_values(fmt):
    one = fmt.to_bits(1.0)
    neg_one = fmt.to_bits(-1.0)
    zero = 0
    neg_zero = fmt.sign_mask
    inf = fmt.exponent_mask
    neg_inf = fmt.exponent_mask | fmt.sign_mask

    assert fmt.is_nan(div(fmt, zero, zero))
    assert fmt.is_nan(div(fmt, inf, neg_inf))
    assert div(fmt, one, zero) == inf
    assert div(fmt, one, neg_zero) == neg_inf
    assert div(fmt, neg_one, zero) == neg_inf
    assert div(fmt, zero, one) == zero
    assert div(fmt, zero, neg_one) == neg_zero
    assert div(fmt, one, inf) == zero
    assert div(fmt, one, neg_inf) == neg_zero
    assert div(fmt, inf, neg_one) == neg_inf
    assert div(fmt, neg_inf, neg_one) == inf


def test_nan_operands_are_quieted_with_payload():
    assert div(F32, 0x7F800001, F32.to_bits(1.0)) == 0x7FC00001
    assert div(F32, F32.to_bits(1.0), 0x7F800001) == 0x7FC00001
    assert div(F32, 0xFF800001, F32.to_bits(2.0)) == 0xFFC00001


def test_overflow_to_infinity():
    max_f32 = 0x7F7FFFFF
    assert div(F32, max_f32, F32.to_bits(0.5)) == 0x7F800000
    assert div(F32, max_f32 | F32.sign_mask, F32.to_bits(0.5)) == 0xFF800000


def test_underflow_rounds_to_even():
    two = F32.to_bits(2.0)
    assert div(F32, 0x1, two) == 0x0
    assert div(F32, 0x80000001, two) == 0x80000000
    assert div(F32, 0x3, two) == 0x2


def test_subnormal_quotient():
    assert div(F32, 0x200, F32.to_bits(8.0)) == 0x40


def test_subnormal_dividend_normal_result():
    # 2**-140 / 2**-10 == 2**-130 is still subnormal; 2**-140 / 2**-20 == 2**-120 is normal.
    assert div(F32, 0x200, F32.to_bits(2.0**-20)) == F32.to_bits(2.0**-120)


@settings(max_examples=500)
@given(_bits(F32), _bits(F32))
def test_f32_matches_native(a, b):
    result = div(F32, a, b)
    assert F32.eq_repr(result, _native_div(F32, a, b))


@settings(max_examples=500)
@given(_bits(F64), _bits(F64))
def test_f64_matches_native(a, b):
    result = div(F64, a, b)
    assert F64.eq_repr(result, _native_div(F64, a, b))


@settings(max_examples=300)
@given(_bits(F64), _bits(F64))
def test_f128_agrees_with_f64_after_narrowing(a, b):
    wide = div(F128, extend(F64, F128, a), extend(F64, F128, b))
    assert F64.eq_repr(truncate(F128, F64, wide), _native_div(F64, a, b))


@given(st.floats(allow_nan=False, allow_infinity=False, width=32).filter(bool))
def test_f32_self_division_is_one(x):
    bits = F32.to_bits(x)
    assert div(F32, bits, bits) == F32.to_bits(1.0)


def test_unsupported_format_raises():
    with pytest.raises(ValueError):
        div(F16, F16.to_bits(1.0), F16.to_bits(2.0))


def test_out_of_range_pattern_raises():
    with pytest.raises(ValueError):
        div(F32, 1 << 32, F32.to_bits(1.0))


def test_non_integer_pattern_raises():
    with pytest.raises(TypeError):
        div(F64, 1.0, F64.to_bits(1.0))