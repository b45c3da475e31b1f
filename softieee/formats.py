"""IEEE-754 binary interchange formats, handled as unsigned bit patterns."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from fractions import Fraction

_NATIVE_CODES = {(16, 10): "e", (32, 23): "f", (64, 52): "d"}
_DOUBLE_PRECISION = 53


@dataclass(frozen=True)
class FloatFormat:
    """An IEEE-754 binary format given by its total width and significand width."""

    bits: int
    significand_bits: int
    name: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.significand_bits < 1 or self.bits - self.significand_bits - 1 < 2:
            raise ValueError(
                f"invalid float format: {self.bits} bits with "
                f"{self.significand_bits} significand bits"
            )

    @property
    def exponent_bits(self) -> int:
        return self.bits - self.significand_bits - 1

    @property
    def exponent_max(self) -> int:
        """The saturated exponent field, which encodes infinity and NaN."""
        return (1 << self.exponent_bits) - 1

    @property
    def exponent_bias(self) -> int:
        return self.exponent_max >> 1

    @property
    def int_mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def sign_mask(self) -> int:
        return 1 << (self.bits - 1)

    @property
    def significand_mask(self) -> int:
        return (1 << self.significand_bits) - 1

    @property
    def implicit_bit(self) -> int:
        return 1 << self.significand_bits

    @property
    def exponent_mask(self) -> int:
        return self.int_mask & ~(self.sign_mask | self.significand_mask)

    @property
    def _native_code(self) -> str | None:
        return _NATIVE_CODES.get((self.bits, self.significand_bits))

    def _checked(self, bits: int) -> int:
        if isinstance(bits, bool) or not isinstance(bits, int):
            raise TypeError(f"bit pattern must be an int, not {type(bits).__name__}")
        if not 0 <= bits <= self.int_mask:
            raise ValueError(f"{bits:#x} is not a {self.bits}-bit pattern")
        return bits

    def to_bits(self, value: float) -> int:
        """Encode a Python float in this format, rounding to nearest where needed."""
        value = float(value)
        code = self._native_code
        if code is not None:
            try:
                packed = struct.pack("<" + code, value)
            except OverflowError:
                sign = self.sign_mask if math.copysign(1.0, value) < 0 else 0
                return self.exponent_mask | sign
            return int.from_bytes(packed, "little")
        return self._encode_exact(value)

    def _encode_exact(self, value: float) -> int:
        if self.significand_bits < _DOUBLE_PRECISION - 1 or self.exponent_bias < 1023 + 52:
            raise ValueError(f"no exact encoding of Python floats in {self.bits}-bit format")
        sign = self.sign_mask if math.copysign(1.0, value) < 0 else 0
        if math.isnan(value):
            return self.exponent_mask | (self.implicit_bit >> 1) | sign
        if math.isinf(value):
            return self.exponent_mask | sign
        if value == 0.0:
            return sign
        mantissa, exponent = math.frexp(abs(value))
        significand = int(mantissa * (1 << _DOUBLE_PRECISION))
        biased = exponent - 1 + self.exponent_bias
        shifted = significand << (self.significand_bits - (_DOUBLE_PRECISION - 1))
        return sign | (biased << self.significand_bits) | (shifted & self.significand_mask)

    def from_bits(self, bits: int) -> float:
        """Decode a bit pattern to a Python float; raise ValueError if that loses value."""
        bits = self._checked(bits)
        code = self._native_code
        if code is not None:
            return struct.unpack("<" + code, bits.to_bytes(self.bits // 8, "little"))[0]
        sign = -1.0 if self.is_sign_negative(bits) else 1.0
        if self.is_nan(bits):
            return math.copysign(math.nan, sign)
        biased = self.exp(bits)
        if biased == self.exponent_max:
            return sign * math.inf
        if biased == 0:
            significand = self.frac(bits)
            exponent = 1 - self.exponent_bias - self.significand_bits
        else:
            significand = self.imp_frac(bits)
            exponent = biased - self.exponent_bias - self.significand_bits
        if significand == 0:
            return math.copysign(0.0, sign)
        trailing = (significand & -significand).bit_length() - 1
        significand >>= trailing
        exponent += trailing
        if significand.bit_length() > _DOUBLE_PRECISION:
            raise ValueError(f"{bits:#x} has no exact Python float value")
        try:
            result = math.ldexp(float(significand), exponent)
        except OverflowError as exc:
            raise ValueError(f"{bits:#x} is out of Python float range") from exc
        if Fraction(result) != Fraction(significand) * Fraction(2) ** exponent:
            raise ValueError(f"{bits:#x} has no exact Python float value")
        return math.copysign(result, sign)

    def normalize(self, significand: int) -> tuple[int, int]:
        """Return (exponent, significand) with the significand shifted to the implicit bit."""
        leading_zeros = self.bits - significand.bit_length()
        shift = leading_zeros - self.exponent_bits
        return 1 - shift, (significand << shift) & self.int_mask

    def from_parts(self, negative: bool, exponent: int, significand: int) -> int:
        """Assemble a bit pattern from a sign, an exponent field and a significand field."""
        return (
            (int(bool(negative)) << (self.bits - 1))
            | ((exponent << self.significand_bits) & self.exponent_mask)
            | (significand & self.significand_mask)
        )

    def is_nan(self, bits: int) -> bool:
        return (bits & self.exponent_mask) == self.exponent_mask and bool(
            bits & self.significand_mask
        )

    def is_subnormal(self, bits: int) -> bool:
        """True when the exponent field is zero (zeros included)."""
        return (bits & self.exponent_mask) == 0

    def is_sign_negative(self, bits: int) -> bool:
        return bool(bits & self.sign_mask)

    def exp(self, bits: int) -> int:
        """The biased exponent field."""
        return (bits & self.exponent_mask) >> self.significand_bits

    def frac(self, bits: int) -> int:
        """The significand field without the implicit bit."""
        return bits & self.significand_mask

    def imp_frac(self, bits: int) -> int:
        """The significand field with the implicit bit set."""
        return self.frac(bits) | self.implicit_bit

    def abs(self, bits: int) -> int:
        return bits & ~self.sign_mask & self.int_mask

    def eq_repr(self, a: int, b: int) -> bool:
        """Bitwise equality, except that any two NaNs compare equal."""
        if self.is_nan(a) and self.is_nan(b):
            return True
        return a == b


F16 = FloatFormat(16, 10, "binary16")
F32 = FloatFormat(32, 23, "binary32")
F64 = FloatFormat(64, 52, "binary64")
F128 = FloatFormat(128, 112, "binary128")