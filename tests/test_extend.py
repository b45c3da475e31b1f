import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from softieee.extend import extend
from softieee.formats import F16, F32, F64, F128


def _patterns(fmt):
    edges = [
        0,
        fmt.sign_mask,
        1,
        fmt.significand_mask,
        fmt.implicit_bit,
        fmt.exponent_mask,
        fmt.exponent_mask | fmt.sign_mask,
        fmt.exponent_mask | 1,
        fmt.exponent_mask | (fmt.implicit_bit >> 1),
        fmt.exponent_mask - 1,
    ]
    return st.one_of(st.integers(0, fmt.int_mask), st.sampled_from(edges))


@pytest.mark.parametrize(
    "src, dst",
    [(F32, F64), (F16, F32), (F16, F64), (F16, F128), (F32, F128), (F64, F128)],
)
@given(data=st.data())
def test_against_native(src, dst, data):
    a = data.draw(_patterns(src))
    expected = dst.to_bits(src.from_bits(a))
    assert dst.eq_repr(extend(src, dst, a), expected)


def test_pinned_values():
    assert extend(F32, F64, 0x3F800000) == 0x3FF0000000000000
    assert extend(F16, F32, 0x3C00) == 0x3F800000
    assert extend(F16, F128, 0x3C00) == 0x3FFF << 112
    assert extend(F32, F64, 0x80000000) == 0x8000000000000000


def test_subnormal_becomes_normal():
    result = extend(F32, F64, 1)
    assert F64.from_bits(result) == math.ldexp(1.0, -149)
    assert not F64.is_subnormal(result)


def test_infinity_and_nan():
    assert extend(F32, F64, 0xFF800000) == 0xFFF0000000000000
    assert F64.is_nan(extend(F32, F64, 0x7FC00000))
    assert F64.is_nan(extend(F32, F64, 0x7F800001))


def test_narrowing_rejected():
    with pytest.raises(ValueError):
        extend(F64, F32, 0)


def test_rejects_out_of_range():
    with pytest.raises(ValueError):
        extend(F32, F64, 1 << 32)