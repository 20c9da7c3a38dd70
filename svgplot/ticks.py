from __future__ import annotations

from decimal import Decimal
import math

import numpy as np


X_TICK_MULTIPLIER_NARROW = 5.0
Y_TICK_MULTIPLIER_NARROW = 2.5
DEFAULT_LABEL_DECIMALS = 4
MAX_LABEL_DECIMALS = 12
SCIENTIFIC_BELOW = 1e-6
SCIENTIFIC_ABOVE = 1e6


def tick_multipliers(axis_width: float, axis_height: float) -> tuple[float, float]:
    """Step multipliers for (x, y) ticks; the shorter side gets the coarser one."""
    if axis_width < axis_height:
        return (X_TICK_MULTIPLIER_NARROW, Y_TICK_MULTIPLIER_NARROW)
    return (Y_TICK_MULTIPLIER_NARROW, X_TICK_MULTIPLIER_NARROW)


def auto_tick_positions(vmin: float, vmax: float, multiplier: float) -> np.ndarray:
    if multiplier <= 0:
        raise ValueError("multiplier must be > 0")
    lo = float(min(vmin, vmax))
    hi = float(max(vmin, vmax))
    span = hi - lo
    if span == 0 or not np.isfinite(span):
        return np.asarray([lo], dtype=np.float64) if np.isfinite(lo) else np.asarray([], dtype=np.float64)

    magnitude = math.floor(math.log10(span))
    base = 10.0 ** (magnitude - 1)
    step = base * multiplier
    start = math.ceil(lo / base) * base
    stop = math.floor(hi / base) * base
    if stop < start:
        return np.asarray([], dtype=np.float64)

    count = int(math.floor((stop - start) / step + 1e-9)) + 1
    ticks = start + step * np.arange(count, dtype=np.float64)
    # Snap floating-point drift onto the base grid, e.g. 0.30000000000000004 -> 0.3.
    ticks = np.round(ticks / base) * base
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=base * 1e-9)] = 0.0
    return ticks


def format_tick(value: float, *, decimals: int = DEFAULT_LABEL_DECIMALS) -> str:
    """Fixed-point label with trailing zeros dropped; very large or tiny values use an exponent."""
    if not np.isfinite(value):
        return str(value)
    magnitude = abs(value)
    if magnitude != 0 and not (SCIENTIFIC_BELOW <= magnitude < SCIENTIFIC_ABOVE):
        return f"{value:.4e}"
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(np.min(np.abs(np.diff(ticks))))
    decimals = step_decimals(step)
    # Grid drift around zero would otherwise print as an exponent.
    values = np.where(np.abs(ticks) <= step * 1e-9, 0.0, ticks)
    return [format_tick(float(v), decimals=decimals) for v in values]


def step_decimals(step: float) -> int:
    """Digits after the decimal point needed to write multiples of ``step``."""
    if not (np.isfinite(step) and step > 0):
        return DEFAULT_LABEL_DECIMALS
    exponent = Decimal(repr(float(step))).normalize().as_tuple().exponent
    return min(MAX_LABEL_DECIMALS, max(0, -int(exponent)))
