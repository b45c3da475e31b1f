# softieee

Software IEEE-754 binary floating point, computed entirely with Python
integers. Every operation takes and returns raw bit patterns (plain `int`s),
so results are bit-exact and do not depend on the host FPU. One generic
implementation, driven by a `FloatFormat` description, handles half, single,
double and quad precision.

## Formats

`softieee.formats.FloatFormat(bits, significand_bits, name="")` describes a
format. Ready-made instances are provided:

| Name   | Format    | Bits | Significand bits |
|--------|-----------|------|------------------|
| `F16`  | binary16  | 16   | 10               |
| `F32`  | binary32  | 32   | 23               |
| `F64`  | binary64  | 64   | 52               |
| `F128` | binary128 | 128  | 112              |

A `FloatFormat` also exposes its derived layout as properties:
`exponent_bits`, `exponent_max`, `exponent_bias`, `int_mask`, `sign_mask`,
`significand_mask`, `implicit_bit` and `exponent_mask`.

- `to_bits(value)` encodes a Python float. For binary16/32/64 it rounds to
  nearest and turns overflow into a signed infinity. For binary128 the
  encoding is exact.
- `from_bits(bits)` decodes to a Python float and raises `ValueError` when
  the value cannot be represented exactly, which can happen with binary128.
- The helpers `normalize`, `from_parts`, `is_nan`, `is_subnormal`,
  `is_sign_negative`, `exp`, `frac`, `imp_frac`, `abs` and `eq_repr` inspect
  and build bit patterns directly. `is_subnormal` is true for zeros as well.
  `eq_repr` is bitwise equality, except that any two NaNs count as equal.

Bit patterns outside the format's width raise `ValueError`. Non-integers
raise `TypeError`.

## Operations

- `softieee.add`: `add(fmt, a, b)` and `sub(fmt, a, b)`
- `softieee.mul`: `mul(fmt, a, b)`
- `softieee.div`: `div(fmt, a, b)`, using a Newton–Raphson reciprocal. Its
  helpers `get_iterations`, `reciprocal_precision`, `c_hw` and `next_guess`
  live in `softieee.recip`.
- `softieee.pow`: `powi(fmt, a, b)` raises a float to a 32-bit integer power
  by repeated squaring. A negative power divides one by the result.
- `softieee.cmp`: `compare(fmt, a, b)` returns an `Ordering`: `LESS`,
  `EQUAL`, `GREATER` or `UNORDERED`. `unordered(fmt, a, b)` is true when
  either operand is a NaN. `le`, `lt`, `eq` and `ne` return -1/0/1 and give
  1 for unordered operands. `ge` and `gt` return -1/0/1 and give -1 for
  unordered operands. `+0` and `-0` compare equal.
- `softieee.extend`: `extend(src, dst, bits)` widens exactly to a larger
  format and keeps NaN payloads.
- `softieee.trunc`: `truncate(src, dst, bits)` narrows with
  round-to-nearest-even. It overflows to infinity and underflows to
  subnormals or zero. NaNs come out quiet.
- `softieee.conv`:
  - `int_to_float(fmt, value, int_bits, signed)` converts an `int_bits`-wide
    integer, rounding to nearest even.
  - `float_to_int(fmt, bits, int_bits, signed)` truncates toward zero and
    saturates at the integer range. NaN converts to 0, and negative values
    convert to 0 when `signed` is false.
  - Both raise `ValueError` when the integer width is too large for the
    format's exponent range, for example 32-bit integers with binary16.

Arithmetic always rounds to nearest, ties to even. NaN inputs produce quiet
NaNs.

## Installing

```
pip install softieee
```

To run the test suite, install the `test` extra and run `pytest`:

```
pip install "softieee[test]"
pytest
```

## Usage

```python
from softieee.formats import F64
from softieee.add import add
from softieee.mul import mul
from softieee.div import div

one = F64.to_bits(1.0)
three = F64.to_bits(3.0)

third = div(F64, one, three)
print(F64.from_bits(third))            # 0.3333333333333333

total = add(F64, third, mul(F64, third, F64.to_bits(2.0)))
print(F64.from_bits(total))            # 1.0
```

Converting between formats, and to and from integers:

```python
from softieee.formats import F16, F32
from softieee.extend import extend
from softieee.trunc import truncate
from softieee.conv import int_to_float, float_to_int

h = truncate(F32, F16, F32.to_bits(0.1))
s = extend(F16, F32, h)

f = int_to_float(F32, -7, 32, True)
print(float_to_int(F32, f, 32, True))  # -7
```

## What it does not do

This is a library only. It has no command-line tool. It supports only the
round-to-nearest-even mode, and it does not raise or record IEEE exception
flags (inexact, overflow and so on). It offers no fused multiply-add,
square root or remainder.