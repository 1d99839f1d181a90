"""Common errors, layout constants and byte helpers for half-precision values."""
from __future__ import annotations

import operator
from typing import BinaryIO, Union

import numpy as np


class HalfError(ValueError):
    """Raised for half-precision validation or conversion errors."""


class PrecisionLossError(HalfError):
    """Raised by strict encoding when a value saturates or flushes to zero."""


class HalfRangeError(HalfError):
    """Raised when a buffer or stream holds too few bytes."""


SIZE_IN_BYTES = 2

SIGN_MASK = 0x8000
EXPONENT_MASK = 0x7C00
MANTISSA_MASK = 0x03FF
EXPONENT_BIAS = 15
EXPONENT_MAX = 0x1F
MANTISSA_BITS = 10

F32_SIGN_MASK = 0x80000000
F32_EXPONENT_BIAS = 127
F32_EXPONENT_MAX = 0xFF
F32_MANTISSA_BITS = 23
F32_MANTISSA_MASK = 0x007FFFFF

POSITIVE_ZERO = 0x0000
NEGATIVE_ZERO = 0x8000
POSITIVE_INFINITY = 0x7C00
NEGATIVE_INFINITY = 0xFC00
MAX_FINITE = 0x7BFF
MIN_NORMAL = 0x0400
MIN_SUBNORMAL = 0x0001
EPSILON = 0x1400
# Quiet bit set, empty payload. Encoding any NaN yields sign | CANONICAL_NAN.
CANONICAL_NAN = 0x7E00

Buffer = Union[bytes, bytearray, memoryview]


def check_bits(bits: int) -> int:
    """Validate a raw 16-bit half pattern and return it as an int."""
    if isinstance(bits, (bool, np.bool_)):
        raise HalfError(f"Half bits must be int, got {type(bits)}")
    try:
        bits = operator.index(bits)
    except TypeError as exc:
        raise HalfError(f"Half bits must be int, got {type(bits)}") from exc
    if bits < 0 or bits > 0xFFFF:
        raise HalfError(f"Half bits out of range: {bits:#x}")
    return bits


def require_bytes(buffer: Buffer, offset: int, count: int) -> None:
    """Ensure at least count bytes are available from offset."""
    if offset < 0:
        raise HalfRangeError(f"Negative offset {offset}")
    if offset + count > len(buffer):
        raise HalfRangeError(
            f"Need {count} bytes at offset {offset}, buffer has {len(buffer)}"
        )


def read_exact(stream: BinaryIO, count: int) -> bytes:
    """Read exactly count bytes from a binary stream, tolerating short reads."""
    data = bytearray()
    while len(data) < count:
        chunk = stream.read(count - len(data))
        if not chunk:
            raise HalfRangeError(f"Stream exhausted: needed {count} bytes, got {len(data)}")
        data += chunk
    return bytes(data)
