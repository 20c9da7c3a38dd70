"""Coercion of caller-supplied series into float64 numpy arrays."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any

import numpy as np

from svgplot.errors import PlotDataError


LOGGER = logging.getLogger(__name__)

try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_xy(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Coerce plot input into equal-length float64 ``(xs, ys)`` arrays.

    ``x`` defaults to the sample index. With ``data`` (a pandas DataFrame),
    string arguments name its columns. Pairs with a missing or non-finite
    coordinate are dropped.
    """
    if y is None:
        raise PlotDataError("y input is required")
    ys = coerce_1d_numeric(_lookup_column(data, y), label="y")
    if x is None:
        xs = np.arange(ys.size, dtype=np.float64)
    else:
        xs = coerce_1d_numeric(_lookup_column(data, x), label="x")
    if xs.shape != ys.shape:
        raise PlotDataError(f"x and y length mismatch: {xs.size} != {ys.size}")

    finite = np.isfinite(xs) & np.isfinite(ys)
    if bool(finite.all()):
        return xs, ys
    LOGGER.debug("dropping %d non-finite point(s)", int(finite.size - np.count_nonzero(finite)))
    return xs[finite], ys[finite]


def _lookup_column(data: Any, key: Any) -> Any:
    if data is None:
        return key
    if pd is None or not isinstance(data, pd.DataFrame):
        raise PlotDataError("`data` must be a pandas DataFrame")
    if not isinstance(key, str):
        return key
    if key not in data.columns:
        raise PlotDataError(f"column not found: {key}")
    return data[key]


def coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, range):
        return np.arange(value.start, value.stop, value.step, dtype=np.float64)
    if torch is not None and isinstance(value, torch.Tensor):
        value = value.detach().cpu().to(torch.float64).numpy()
    elif pd is not None and isinstance(value, pd.Series):
        value = value.to_numpy()
    elif isinstance(value, (str, bytes, bytearray)) or not isinstance(value, (np.ndarray, Sequence)):
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")

    arr = value if isinstance(value, np.ndarray) else np.asarray(value, dtype=object)
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.dtype.kind in "iufb":
        return arr.astype(np.float64, copy=False)
    return _object_to_float(arr, label=label)


def _object_to_float(arr: np.ndarray, *, label: str) -> np.ndarray:
    # None marks a missing sample; Decimal and numeric strings go through float().
    out = np.empty(arr.size, dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        try:
            out[i] = np.nan if raw is None else float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
