from __future__ import annotations

import contextlib
import io
import sys
from pathlib import Path
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from half_common import HalfError, PrecisionLossError
from half_inspect import decode_lines, dump_lines, encode_lines, main, parse_bits
from half_packed import pack_halves


class TestInspect(unittest.TestCase):
    def test_parse_bits(self) -> None:
        self.assertEqual(parse_bits("3c00"), 0x3C00)
        self.assertEqual(parse_bits("0x7BFF"), 0x7BFF)
        with self.assertRaises(HalfError):
            parse_bits("zz")
        with self.assertRaises(HalfError):
            parse_bits("10000")

    def test_encode_lines(self) -> None:
        lines = encode_lines(["65504", "1e-8"])
        self.assertEqual(lines[0], "65504: 0x7bff [0 11110 1111111111] normal = 65504")
        self.assertEqual(lines[1], "1e-8: 0x0000 [0 00000 0000000000] zero = 0")
        with self.assertRaises(PrecisionLossError):
            encode_lines(["70000"], strict=True)
        with self.assertRaises(HalfError):
            encode_lines(["abc"])

    def test_decode_lines(self) -> None:
        self.assertEqual(decode_lines(["0001"]), ["0x0001 [0 00000 0000000001] subnormal = 5.96046e-08"])

    def test_dump_lines(self) -> None:
        blob = pack_halves([1.0, 2.0, float("nan"), float("inf")])
        lines = dump_lines(blob)
        self.assertEqual(lines[0], "halves: 4 (8 bytes)")
        self.assertEqual(lines[1], "values = { 1, 2, nan, inf }")
        self.assertIn("nan: 1, inf: 1, min: 1, max: 2, mean: 1.5", lines[2])

    def test_dump_vectors(self) -> None:
        blob = pack_halves([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        lines = dump_lines(blob, components=3)
        self.assertEqual(lines[1], "Vector3h[2] = (1, 2, 3), (4, 5, 6)")

    def test_main(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.assertEqual(main(["decode", "3c00"]), 0)
        self.assertIn("normal = 1", out.getvalue())

        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            self.assertEqual(main(["encode", "--strict", "1e6"]), 1)
        self.assertIn("error:", err.getvalue())

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "values.f16"
            path.write_bytes(pack_halves([0.5, 0.25]))
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                self.assertEqual(main(["dump", str(path)]), 0)
            self.assertIn("values = { 0.5, 0.25 }", out.getvalue())
