"""Packing utilities for contiguous little-endian half buffers."""
from __future__ import annotations

from typing import Any, Optional

import numpy as np

from half_common import SIZE_IN_BYTES, Buffer, HalfRangeError, require_bytes
from half_numeric import f32_to_half_array, half_array_to_f32

HALF_LE = np.dtype(np.uint16).newbyteorder("<")


def pack_half_bits(bits: Any) -> bytes:
    """Pack half bit patterns into contiguous little-endian bytes."""
    arr = np.asarray(bits, dtype=np.uint16)
    return arr.astype(HALF_LE).tobytes()


def pack_halves(values: Any, strict: bool = False) -> bytes:
    """Encode floats and pack them as contiguous halves."""
    return pack_half_bits(f32_to_half_array(values, strict))


def unpack_half_bits(raw: Buffer, count: Optional[int] = None, offset: int = 0) -> np.ndarray:
    """Unpack half bit patterns from a little-endian buffer."""
    if count is None:
        remaining = len(raw) - offset
        if remaining < 0:
            raise HalfRangeError(f"Offset {offset} exceeds buffer of {len(raw)} bytes")
        if remaining % SIZE_IN_BYTES:
            raise HalfRangeError(f"Trailing odd byte in {remaining}-byte half buffer")
        count = remaining // SIZE_IN_BYTES
    elif count < 0:
        raise HalfRangeError(f"Negative half count {count}")
    require_bytes(raw, offset, count * SIZE_IN_BYTES)
    if count == 0:
        return np.empty(0, dtype=np.uint16)
    arr = np.frombuffer(raw, dtype=HALF_LE, count=count, offset=offset)
    return arr.astype(np.uint16)


def unpack_halves(raw: Buffer, count: Optional[int] = None, offset: int = 0) -> np.ndarray:
    """Unpack and decode contiguous halves to float32."""
    return half_array_to_f32(unpack_half_bits(raw, count, offset))
