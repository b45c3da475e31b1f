import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from softieee.extend import extend
from softieee.formats import F16, F32, F64, F128
from softieee.trunc import truncate

U64 = st.integers(min_value=0, max_value=2**64 - 1)
U32 = st.integers(min_value=0, max_value=2**32 - 1)


def _native(dst, src, bits):
    return dst.to_bits(src.from_bits(bits))


@settings(max_examples=2000)
@given(U64)
def test_f64_to_f32_matches_native(x):
    assert F32.eq_repr(_native(F32, F64, x), truncate(F64, F32, x))


@settings(max_examples=2000)
@given(U32)
def test_f32_to_f16_matches_native(x):
    assert F16.eq_repr(_native(F16, F32, x), truncate(F32, F16, x))


@settings(max_examples=2000)
@given(U64)
def test_f64_to_f16_matches_native(x):
    assert F16.eq_repr(_native(F16, F64, x), truncate(F64, F16, x))


@given(U64)
def test_f128_to_f64_round_trip(x):
    result = truncate(F128, F64, extend(F64, F128, x))
    assert F64.eq_repr(result, x)
    if not F64.is_nan(x):
        assert result == x


@given(U32)
def test_f128_to_f32_round_trip(x):
    result = truncate(F128, F32, extend(F32, F128, x))
    assert F32.eq_repr(result, x)
    if not F32.is_nan(x):
        assert result == x


@given(U32)
def test_f64_to_f32_round_trip(x):
    assert F32.eq_repr(truncate(F64, F32, extend(F32, F64, x)), x)


def test_one():
    assert truncate(F64, F32, F64.to_bits(1.0)) == F32.to_bits(1.0)


def test_tie_rounds_to_even():
    tie = 1.0 + 2.0**-24
    assert truncate(F64, F32, F64.to_bits(tie)) == F32.to_bits(1.0)
    above = 1.0 + 3 * 2.0**-24
    assert truncate(F64, F32, F64.to_bits(above)) == F32.to_bits(1.0 + 2.0**-22)


def test_f128_halfway_ties_to_even():
    one = extend(F64, F128, F64.to_bits(1.0))
    halfway = one | (1 << (F128.significand_bits - F64.significand_bits - 1))
    assert truncate(F128, F64, halfway) == F64.to_bits(1.0)
    assert truncate(F128, F64, halfway | 1) == F64.to_bits(1.0) + 1


def test_underflow_keeps_sign():
    assert truncate(F64, F32, F64.to_bits(-1e-300)) == F32.sign_mask
    assert truncate(F64, F32, F64.to_bits(1e-300)) == 0


def test_overflow_to_infinity():
    assert truncate(F64, F32, F64.to_bits(1e300)) == F32.exponent_mask
    assert truncate(F64, F32, F64.to_bits(-math.inf)) == F32.exponent_mask | F32.sign_mask


def test_nan_stays_quiet_nan():
    result = truncate(F64, F32, F64.to_bits(math.nan))
    assert F32.is_nan(result)
    assert result & (F32.implicit_bit >> 1)


def test_rejects_widening():
    with pytest.raises(ValueError):
        truncate(F32, F64, 0)


def test_rejects_out_of_range_pattern():
    with pytest.raises(ValueError):
        truncate(F64, F32, 1 << 64)