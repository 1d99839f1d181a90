"""Bit-exact conversion between float32 and IEEE-754 half precision."""
from __future__ import annotations

from typing import Any

import numpy as np

from half_common import (
    CANONICAL_NAN,
    EXPONENT_BIAS,
    EXPONENT_MASK,
    EXPONENT_MAX,
    F32_EXPONENT_BIAS,
    F32_EXPONENT_MAX,
    F32_MANTISSA_BITS,
    F32_MANTISSA_MASK,
    MANTISSA_BITS,
    MANTISSA_MASK,
    POSITIVE_INFINITY,
    SIGN_MASK,
    PrecisionLossError,
    check_bits,
)

# Mantissa bits dropped when narrowing a float32 significand to half.
_DROPPED_BITS = F32_MANTISSA_BITS - MANTISSA_BITS
_IMPLICIT_F32 = 1 << F32_MANTISSA_BITS
_IMPLICIT_HALF = 1 << MANTISSA_BITS
_REBIAS = F32_EXPONENT_BIAS - EXPONENT_BIAS


def _round_shift(significand: int, shift: int) -> int:
    """Shift right by shift bits, rounding to nearest even."""
    quotient = significand >> shift
    remainder = significand & ((1 << shift) - 1)
    halfway = 1 << (shift - 1)
    if remainder > halfway or (remainder == halfway and quotient & 1):
        quotient += 1
    return quotient


def float_to_f32_bits(value: float) -> int:
    """Round a float to float32 and return its bit pattern."""
    with np.errstate(over="ignore"):
        return int(np.float32(value).view(np.uint32))


def f32_bits_to_half_bits(bits: int) -> int:
    """Narrow a float32 bit pattern to a half bit pattern."""
    sign = (bits >> 16) & SIGN_MASK
    exp = (bits >> F32_MANTISSA_BITS) & F32_EXPONENT_MAX
    mant = bits & F32_MANTISSA_MASK

    if exp == F32_EXPONENT_MAX:
        if mant:
            return sign | CANONICAL_NAN
        return sign | POSITIVE_INFINITY
    if exp == 0:
        # float32 subnormals sit far below half's smallest subnormal.
        return sign

    exp16 = exp - _REBIAS
    if exp16 >= EXPONENT_MAX:
        return sign | POSITIVE_INFINITY

    significand = mant | _IMPLICIT_F32
    if exp16 <= 0:
        shift = _DROPPED_BITS + 1 - exp16
        if shift > F32_MANTISSA_BITS + 1:
            return sign
        # A carry into bit 10 lands on the smallest normal, which is correct.
        return sign | _round_shift(significand, shift)

    rounded = _round_shift(significand, _DROPPED_BITS)
    half = (exp16 << MANTISSA_BITS) + (rounded - _IMPLICIT_HALF)
    if half >= POSITIVE_INFINITY:
        return sign | POSITIVE_INFINITY
    return sign | half


def f32_to_half_bits(value: float, strict: bool = False) -> int:
    """Convert a float to half bits, optionally failing on precision loss."""
    bits = f32_bits_to_half_bits(float_to_f32_bits(value))
    if strict:
        original = float(value)
        magnitude = bits & ~SIGN_MASK
        if magnitude == POSITIVE_INFINITY and np.isfinite(original):
            raise PrecisionLossError(f"Half: {original!r} exceeds the maximum half value")
        if magnitude == 0 and original != 0.0:
            raise PrecisionLossError(f"Half: {original!r} underflows to zero")
    return bits


def half_bits_to_f32_bits(bits: int) -> int:
    """Widen a half bit pattern to the equivalent float32 bit pattern."""
    bits = check_bits(bits)
    sign = (bits & SIGN_MASK) << 16
    exp = (bits & EXPONENT_MASK) >> MANTISSA_BITS
    mant = bits & MANTISSA_MASK

    if exp == EXPONENT_MAX:
        return sign | (F32_EXPONENT_MAX << F32_MANTISSA_BITS) | (mant << _DROPPED_BITS)
    if exp == 0:
        if mant == 0:
            return sign
        exp32 = _REBIAS + 1
        while not mant & _IMPLICIT_HALF:
            mant <<= 1
            exp32 -= 1
        mant &= MANTISSA_MASK
        return sign | (exp32 << F32_MANTISSA_BITS) | (mant << _DROPPED_BITS)
    return sign | ((exp + _REBIAS) << F32_MANTISSA_BITS) | (mant << _DROPPED_BITS)


def half_bits_to_f32(bits: int) -> float:
    """Convert half bits to a float holding the exact float32 value."""
    return float(np.uint32(half_bits_to_f32_bits(bits)).view(np.float32))


def f32_to_half_array(values: Any, strict: bool = False) -> np.ndarray:
    """Convert an array of floats to an array of half bit patterns."""
    arr = np.asarray(values, dtype=np.float64)
    vec = np.vectorize(lambda v: f32_to_half_bits(float(v), strict), otypes=[np.uint16])
    return vec(arr)


def half_array_to_f32(bits: Any) -> np.ndarray:
    """Convert an array of half bit patterns to float32."""
    arr = np.asarray(bits, dtype=np.uint16)
    vec = np.vectorize(lambda b: half_bits_to_f32_bits(int(b)), otypes=[np.uint32])
    return vec(arr).view(np.float32)


encode = f32_to_half_bits
decode = half_bits_to_f32
