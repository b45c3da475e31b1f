"""Bit-exact software IEEE-754 arithmetic, comparisons and conversions on integer bit patterns."""

__version__ = "0.1.0"

__all__ = ["formats", "add", "cmp", "mul", "extend", "trunc", "recip", "div", "conv", "pow"]