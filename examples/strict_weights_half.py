#!/usr/bin/env python3
"""
Quantize float32 weights to half, refusing values that would saturate or flush.
"""

from __future__ import annotations

from pathlib import Path
import sys

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from half_common import PrecisionLossError  # noqa: E402
from half_packed import pack_halves, unpack_halves  # noqa: E402


def build_weights() -> np.ndarray:
    rng = np.random.default_rng(11)
    return rng.normal(0.0, 0.5, size=(8, 8)).astype(np.float32)


def main() -> None:
    weights = build_weights()
    payload = pack_halves(weights, strict=True)
    restored = unpack_halves(payload).reshape(weights.shape)
    err = float(np.max(np.abs(restored - weights)))
    print(f"Packed {weights.size} weights into {len(payload)} bytes, max abs error {err:.3g}")

    try:
        pack_halves(np.array([1.0, 1.0e6], dtype=np.float32), strict=True)
    except PrecisionLossError as exc:
        print(f"Rejected out-of-range weight: {exc}")


if __name__ == "__main__":
    main()
