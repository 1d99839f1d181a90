from __future__ import annotations

import io
import sys
from pathlib import Path
import unittest


ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from half_common import (
    CANONICAL_NAN,
    HalfError,
    HalfRangeError,
    PrecisionLossError,
    check_bits,
    read_exact,
    require_bytes,
)
from half_serial import read_stream


class _OneBytePerRead(io.RawIOBase):
    def __init__(self, data: bytes):
        self._data = data
        self._pos = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self._pos >= len(self._data) or len(buffer) == 0:
            return 0
        buffer[0] = self._data[self._pos]
        self._pos += 1
        return 1


class TestCommon(unittest.TestCase):
    def test_error_hierarchy(self) -> None:
        self.assertTrue(issubclass(PrecisionLossError, HalfError))
        self.assertTrue(issubclass(HalfRangeError, HalfError))
        self.assertTrue(issubclass(HalfError, ValueError))

    def test_check_bits(self) -> None:
        self.assertEqual(check_bits(0), 0)
        self.assertEqual(check_bits(0xFFFF), 0xFFFF)
        with self.assertRaises(HalfError):
            check_bits(0x10000)
        with self.assertRaises(HalfError):
            check_bits(-1)
        with self.assertRaises(HalfError):
            check_bits(True)
        with self.assertRaises(HalfError):
            check_bits(1.0)

    def test_canonical_nan_is_quiet(self) -> None:
        self.assertEqual(CANONICAL_NAN & 0x7C00, 0x7C00)
        self.assertTrue(CANONICAL_NAN & 0x0200)

    def test_require_bytes(self) -> None:
        require_bytes(b"\x00\x01", 0, 2)
        require_bytes(b"\x00\x01\x02", 1, 2)
        with self.assertRaises(HalfRangeError):
            require_bytes(b"\x00\x01\x02", 2, 2)
        with self.assertRaises(HalfRangeError):
            require_bytes(b"\x00\x01", -1, 2)

    def test_read_exact(self) -> None:
        stream = io.BytesIO(b"\x01\x02\x03")
        self.assertEqual(read_exact(stream, 2), b"\x01\x02")
        with self.assertRaises(HalfRangeError):
            read_exact(stream, 2)

    def test_read_exact_short_reads(self) -> None:
        stream = _OneBytePerRead(b"\x00\x3c\x01")
        self.assertEqual(read_exact(stream, 2), b"\x00\x3c")
        with self.assertRaises(HalfRangeError):
            read_exact(stream, 2)
        self.assertEqual(read_stream(_OneBytePerRead(b"\x00\x3c")), 0x3C00)
