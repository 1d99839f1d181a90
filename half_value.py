"""Immutable half-precision scalar value."""
from __future__ import annotations

import dataclasses
from typing import BinaryIO

from half_common import (
    CANONICAL_NAN,
    EPSILON,
    EXPONENT_MASK,
    EXPONENT_MAX,
    MANTISSA_BITS,
    MANTISSA_MASK,
    MAX_FINITE,
    MIN_NORMAL,
    MIN_SUBNORMAL,
    NEGATIVE_INFINITY,
    POSITIVE_INFINITY,
    POSITIVE_ZERO,
    SIGN_MASK,
    SIZE_IN_BYTES,
    Buffer,
    HalfError,
    check_bits,
)
from half_numeric import f32_to_half_bits, half_bits_to_f32
from half_serial import from_bytes, read_stream, to_bytes, write_stream


@dataclasses.dataclass(frozen=True)
class Half:
    """A 16-bit float; the bit pattern is the only state."""

    bits: int = POSITIVE_ZERO

    SIZE_IN_BYTES = SIZE_IN_BYTES

    def __post_init__(self) -> None:
        object.__setattr__(self, "bits", check_bits(self.bits))

    @classmethod
    def from_float(cls, value: float, strict: bool = False) -> "Half":
        """Encode a float, raising PrecisionLossError in strict mode."""
        return cls(f32_to_half_bits(value, strict))

    @classmethod
    def from_bytes(cls, buffer: Buffer, offset: int = 0) -> "Half":
        return cls(from_bytes(buffer, offset))

    @classmethod
    def read_from(cls, stream: BinaryIO) -> "Half":
        return cls(read_stream(stream))

    @classmethod
    def parse(cls, text: str, strict: bool = False) -> "Half":
        """Parse a decimal string into a half value."""
        try:
            value = float(text)
        except (TypeError, ValueError) as exc:
            raise HalfError(f"Cannot parse {text!r} as a half value") from exc
        return cls.from_float(value, strict)

    def to_float(self) -> float:
        return half_bits_to_f32(self.bits)

    def __float__(self) -> float:
        return self.to_float()

    def to_bytes(self) -> bytes:
        return to_bytes(self.bits)

    def write_to(self, stream: BinaryIO) -> None:
        write_stream(self.bits, stream)

    @property
    def sign_bit(self) -> int:
        return (self.bits & SIGN_MASK) >> 15

    @property
    def exponent(self) -> int:
        """Raw biased exponent field."""
        return (self.bits & EXPONENT_MASK) >> MANTISSA_BITS

    @property
    def mantissa(self) -> int:
        return self.bits & MANTISSA_MASK

    @property
    def is_zero(self) -> bool:
        return self.bits & ~SIGN_MASK == 0

    @property
    def is_nan(self) -> bool:
        return self.exponent == EXPONENT_MAX and self.mantissa != 0

    @property
    def is_infinity(self) -> bool:
        return self.bits & ~SIGN_MASK == POSITIVE_INFINITY

    @property
    def is_positive_infinity(self) -> bool:
        return self.bits == POSITIVE_INFINITY

    @property
    def is_negative_infinity(self) -> bool:
        return self.bits == NEGATIVE_INFINITY

    @property
    def is_subnormal(self) -> bool:
        return self.exponent == 0 and self.mantissa != 0

    @property
    def is_finite(self) -> bool:
        return self.exponent != EXPONENT_MAX

    def __str__(self) -> str:
        return f"{self.to_float():.6g}"

    def __repr__(self) -> str:
        return f"Half({self.to_float()!r}, bits=0x{self.bits:04x})"


Half.ZERO = Half(POSITIVE_ZERO)
Half.MAX_VALUE = Half(MAX_FINITE)
Half.MIN_VALUE = Half(MAX_FINITE | SIGN_MASK)
Half.EPSILON = Half(EPSILON)
Half.MIN_NORMAL = Half(MIN_NORMAL)
Half.MIN_SUBNORMAL = Half(MIN_SUBNORMAL)
Half.NAN = Half(CANONICAL_NAN)
Half.POSITIVE_INFINITY = Half(POSITIVE_INFINITY)
Half.NEGATIVE_INFINITY = Half(NEGATIVE_INFINITY)
