"""Inspect half encodings and pretty-print buffers of packed halves."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from half_common import HalfError, SIZE_IN_BYTES
from half_format import (
    describe_half,
    format_bits,
    format_scalar,
    format_values,
    histogram_string,
)
from half_numeric import f32_to_half_bits, half_array_to_f32, half_bits_to_f32
from half_packed import unpack_half_bits
from half_vector import vector_type

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _half_stats(values: np.ndarray) -> Dict[str, Any]:
    finite = values[np.isfinite(values)].astype(np.float64)
    stats: Dict[str, Any] = {
        "count": int(values.size),
        "nan": int(np.sum(np.isnan(values))),
        "inf": int(np.sum(np.isinf(values))),
    }
    if finite.size == 0:
        stats.update({"min": 0.0, "max": 0.0, "mean": 0.0, "std": 0.0})
        return stats
    stats.update(
        {
            "min": float(np.min(finite)),
            "max": float(np.max(finite)),
            "mean": float(np.mean(finite)),
            "std": float(np.std(finite)),
        }
    )
    return stats


def parse_bits(text: str) -> int:
    """Parse a hex half pattern such as '3c00' or '0x3C00'."""
    try:
        bits = int(text, 16)
    except ValueError as exc:
        raise HalfError(f"Invalid hex half pattern '{text}'") from exc
    if bits < 0 or bits > 0xFFFF:
        raise HalfError(f"Half pattern '{text}' exceeds 16 bits")
    return bits


def encode_lines(values: Sequence[str], strict: bool = False) -> List[str]:
    """Describe the half encoding of each decimal input."""
    lines = []
    for text in values:
        try:
            value = float(text)
        except ValueError as exc:
            raise HalfError(f"Invalid number '{text}'") from exc
        bits = f32_to_half_bits(value, strict)
        logger.debug("encoded %r -> 0x%04x", value, bits)
        decoded = half_bits_to_f32(bits)
        lines.append(
            f"{text}: 0x{bits:04x} [{format_bits(bits)}] "
            f"{describe_half(bits)} = {format_scalar(decoded)}"
        )
    return lines


def decode_lines(patterns: Sequence[str]) -> List[str]:
    """Describe the value of each hex half pattern."""
    lines = []
    for text in patterns:
        bits = parse_bits(text)
        decoded = half_bits_to_f32(bits)
        lines.append(
            f"0x{bits:04x} [{format_bits(bits)}] "
            f"{describe_half(bits)} = {format_scalar(decoded)}"
        )
    return lines


def dump_lines(
    blob: bytes, offset: int = 0, count: Optional[int] = None, components: int = 1
) -> List[str]:
    """Describe a buffer of packed little-endian halves."""
    bits = unpack_half_bits(blob, count, offset)
    values = half_array_to_f32(bits)
    logger.debug("unpacked %d halves from %d bytes at offset %d", bits.size, len(blob), offset)
    lines = [f"halves: {bits.size} ({bits.size * SIZE_IN_BYTES} bytes)"]
    if components > 1:
        cls = vector_type(components)
        usable = bits.size - bits.size % components
        if usable != bits.size:
            logger.warning("ignoring %d trailing halves", bits.size - usable)
        raw = blob[offset : offset + usable * SIZE_IN_BYTES]
        step = cls.SIZE_IN_BYTES
        vectors = [cls.from_bytes(raw, pos) for pos in range(0, len(raw), step)]
        preview = vectors[:5]
        text = ", ".join(str(v) for v in preview)
        if len(vectors) > len(preview):
            text += ", ..."
        lines.append(f"{cls.__name__}[{len(vectors)}] = {text}")
    elif bits.size:
        lines.append(f"values = {format_values(values)}")
    if bits.size:
        stats = _half_stats(values)
        lines.append(
            f"- [nan: {stats['nan']}, inf: {stats['inf']}, min: {stats['min']:.6g}, "
            f"max: {stats['max']:.6g}, mean: {stats['mean']:.6g}, std: {stats['std']:.6g}]"
        )
        lines.append(f"- hist: {histogram_string(values)}")
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect IEEE-754 half-precision values")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="Encode decimal values to half bits")
    enc.add_argument("values", nargs="+", help="Decimal values")
    enc.add_argument(
        "--strict", action="store_true", help="Fail on overflow or underflow to zero"
    )

    dec = sub.add_parser("decode", help="Decode hex half patterns")
    dec.add_argument("patterns", nargs="+", help="Hex patterns, e.g. 3c00")

    dump = sub.add_parser("dump", help="Pretty-print a file of packed halves")
    dump.add_argument("path", help="Path to a binary file")
    dump.add_argument("--offset", type=int, default=0, help="Byte offset of the first half")
    dump.add_argument("--count", type=int, default=None, help="Number of halves to read")
    dump.add_argument("--components", type=int, default=1, choices=(1, 2, 3, 4),
                      help="Group halves into vectors of this size")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for half inspection."""
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)

    try:
        if args.command == "encode":
            lines = encode_lines(args.values, args.strict)
        elif args.command == "decode":
            lines = decode_lines(args.patterns)
        else:
            with open(args.path, "rb") as handle:
                blob = handle.read()
            lines = dump_lines(blob, args.offset, args.count, args.components)
    except HalfError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
