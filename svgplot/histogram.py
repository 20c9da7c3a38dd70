from __future__ import annotations

from dataclasses import replace
import logging
import math

import numpy as np

from .transform import AxisLimits


LOGGER = logging.getLogger(__name__)
HISTOGRAM_HEADROOM = 1.1


def histogram_bins(values, start: float, stop: float, step: float) -> tuple[np.ndarray, np.ndarray]:
    """Bucket ``values`` into bins ``(left, right]`` between ``start`` and ``stop``.

    Returns ``(centers, relative_frequencies)``. Frequencies sum to 1 unless no
    value falls in any bin, in which case they are all zero.
    """
    if step <= 0:
        raise ValueError("histogram step must be > 0")
    if stop <= start:
        raise ValueError("histogram stop must be > start")
    # Edges run from start in whole steps and never pass stop.
    n_bins = int(math.floor((stop - start) / step + 1e-9))
    if n_bins < 1:
        raise ValueError("histogram range must contain at least one bin")
    edges = float(start) + float(step) * np.arange(n_bins + 1, dtype=np.float64)

    data = np.asarray(values, dtype=np.float64).ravel()
    data = data[np.isfinite(data)]
    # side="left" puts v into bin k when edges[k-1] < v <= edges[k].
    idx = np.searchsorted(edges, data, side="left")
    in_range = (idx >= 1) & (idx < edges.size)
    counts = np.bincount(idx[in_range] - 1, minlength=edges.size - 1).astype(np.float64)

    centers = (edges[:-1] + edges[1:]) / 2.0
    total = counts.sum()
    if total == 0:
        LOGGER.warning("no values fall inside histogram range [%s, %s]", start, stop)
        return centers, counts
    return centers, counts / total


def autoscale_histogram_limits(limits: AxisLimits, relative_frequencies: np.ndarray) -> AxisLimits:
    peak = float(np.max(relative_frequencies)) if relative_frequencies.size else 0.0
    if peak <= 0:
        return limits
    return replace(limits, ymin=0.0, ymax=peak * HISTOGRAM_HEADROOM)
