"""Little-endian byte and stream serialization of half bit patterns."""
from __future__ import annotations

import struct
from typing import BinaryIO

from half_common import SIZE_IN_BYTES, Buffer, check_bits, read_exact, require_bytes

_HALF = struct.Struct("<H")


def to_bytes(bits: int) -> bytes:
    """Serialize half bits to two little-endian bytes."""
    return _HALF.pack(check_bits(bits))


def from_bytes(buffer: Buffer, offset: int = 0) -> int:
    """Read half bits from a buffer at offset."""
    require_bytes(buffer, offset, SIZE_IN_BYTES)
    return _HALF.unpack_from(buffer, offset)[0]


def write_stream(bits: int, stream: BinaryIO) -> None:
    """Write half bits to a binary stream."""
    stream.write(to_bytes(bits))


def read_stream(stream: BinaryIO) -> int:
    """Read half bits from a binary stream."""
    return _HALF.unpack(read_exact(stream, SIZE_IN_BYTES))[0]
