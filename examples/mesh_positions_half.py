#!/usr/bin/env python3
"""
Write a vertex position buffer as packed Vector3h values (6 bytes per vertex).
"""

from __future__ import annotations

from pathlib import Path
import sys

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from half_vector import Vector3h, pack_vectors  # noqa: E402


def build_positions() -> list[Vector3h]:
    rng = np.random.default_rng(3)
    points = rng.uniform(-4.0, 4.0, size=(16, 3)).astype(np.float32)
    return [Vector3h.from_array(p) for p in points]


def main() -> None:
    positions = build_positions()
    output = ROOT / "res/buffers/mesh_positions.f16"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(pack_vectors(positions))
    print(f"Wrote {len(positions)} vertices to {output}")


if __name__ == "__main__":
    main()
