"""Pretty-print helpers for half values and half buffers."""
from __future__ import annotations

import numpy as np

from half_common import EXPONENT_MASK, EXPONENT_MAX, MANTISSA_BITS, MANTISSA_MASK, check_bits


def format_bits(bits: int) -> str:
    """Render half bits as 'sign exponent mantissa' fields."""
    bits = check_bits(bits)
    text = f"{bits:016b}"
    return f"{text[0]} {text[1:6]} {text[6:]}"


def describe_half(bits: int) -> str:
    """Classify half bits as zero, subnormal, normal, infinity or nan."""
    bits = check_bits(bits)
    exp = (bits & EXPONENT_MASK) >> MANTISSA_BITS
    mant = bits & MANTISSA_MASK
    if exp == EXPONENT_MAX:
        return "nan" if mant else "infinity"
    if exp == 0:
        return "subnormal" if mant else "zero"
    return "normal"


def format_scalar(value: object) -> str:
    """Format a scalar value for display."""
    if isinstance(value, float):
        return f"{value:.6g}"
    return str(value)


def format_values(values: np.ndarray) -> str:
    """Format a 1D array with truncation."""
    flat = np.asarray(values).flatten()
    if flat.size <= 10:
        items = [format_scalar(v.item()) for v in flat]
    else:
        first = [format_scalar(v.item()) for v in flat[:5]]
        last = [format_scalar(v.item()) for v in flat[-5:]]
        items = first + ["..."] + last
    return "{ " + ", ".join(items) + " }"


def histogram_string(values: np.ndarray) -> str:
    """Build a compact histogram string over the finite values."""
    numeric = np.asarray(values, dtype=np.float64).flatten()
    numeric = numeric[np.isfinite(numeric)]
    if numeric.size == 0:
        return "{(empty)}"
    vmin = float(np.min(numeric))
    vmax = float(np.max(numeric))
    if vmin == vmax:
        return f"{{([{vmin:.6g}, {vmax:.6g}], {numeric.size})}}"
    bins = 10
    hist, edges = np.histogram(numeric, bins=bins, range=(vmin, vmax))
    entries = []
    for i in range(bins):
        count = int(hist[i])
        if count:
            entries.append(f"([{edges[i]:.6g}, {edges[i + 1]:.6g}], {count})")
    return "{" + ", ".join(entries) + "}"
