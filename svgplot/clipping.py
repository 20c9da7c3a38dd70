"""Clipping of polylines against the visible data rectangle of an axis.

A polyline that leaves the rectangle is split into segments. Every segment
lies inside the rectangle; where the line crosses the rectangle boundary the
crossing point is interpolated and placed exactly on the edge, so drawing each
segment as its own open polyline reproduces the visible part of the line.
"""

from __future__ import annotations

from itertools import islice
import logging
from typing import Iterator
import warnings

import numpy as np

from .errors import DegenerateAxisError, InsufficientPointsWarning
from .transform import AxisLimits


LOGGER = logging.getLogger(__name__)

Segment = tuple[np.ndarray, np.ndarray]
Point = tuple[float, float]


class _SegmentBuilder:
    def __init__(self) -> None:
        self._segments: list[tuple[list[float], list[float]]] = [([], [])]

    def push(self, x: float, y: float) -> None:
        cur_x, cur_y = self._segments[-1]
        cur_x.append(float(x))
        cur_y.append(float(y))

    def push_all(self, points: Iterator[Point]) -> None:
        for x, y in points:
            self.push(x, y)

    def break_segment(self) -> None:
        if self._segments[-1][0]:
            self._segments.append(([], []))

    def segments(self) -> list[Segment]:
        return [
            (np.asarray(seg_x, dtype=np.float64), np.asarray(seg_y, dtype=np.float64))
            for seg_x, seg_y in self._segments
        ]


def inside_mask(xs: np.ndarray, ys: np.ndarray, limits: AxisLimits) -> np.ndarray:
    xmin, xmax = limits.x_bounds()
    ymin, ymax = limits.y_bounds()
    return (xs >= xmin) & (xs <= xmax) & (ys >= ymin) & (ys <= ymax)


def filter_points_inside(xs, ys, limits: AxisLimits) -> Segment:
    """Drop every point outside the (inclusive) axis rectangle."""
    x_arr = np.asarray(xs, dtype=np.float64)
    y_arr = np.asarray(ys, dtype=np.float64)
    n = min(x_arr.size, y_arr.size)
    x_arr = x_arr[:n]
    y_arr = y_arr[:n]
    mask = inside_mask(x_arr, y_arr, limits)
    return x_arr[mask], y_arr[mask]


def clip_polyline(xs, ys, limits: AxisLimits) -> list[Segment]:
    """Split a polyline into the runs that are visible inside ``limits``.

    Returns a list of ``(xs, ys)`` segments in data space. Segments can hold
    fewer than two points; those draw nothing. A polyline with fewer than two
    points is returned unchanged as a single segment.
    """
    x_arr = np.asarray(xs, dtype=np.float64)
    y_arr = np.asarray(ys, dtype=np.float64)
    if x_arr.size < 2 or y_arr.size < 2:
        warnings.warn(
            f"need at least two points to draw a line (got {x_arr.size} x and {y_arr.size} y values)",
            InsufficientPointsWarning,
            stacklevel=2,
        )
        return [(x_arr, y_arr)]

    n = min(x_arr.size, y_arr.size)
    x_arr = x_arr[:n]
    y_arr = y_arr[:n]
    inside = inside_mask(x_arr, y_arr, limits)
    if bool(np.all(inside)):
        return [(x_arr.copy(), y_arr.copy())]

    xmin, xmax = limits.x_bounds()
    ymin, ymax = limits.y_bounds()
    xspan = xmax - xmin
    yspan = ymax - ymin
    if xspan == 0 or yspan == 0:
        raise DegenerateAxisError("cannot clip against a rectangle with zero span")

    builder = _SegmentBuilder()
    last = n - 2
    for i in range(n - 1):
        x0, y0 = float(x_arr[i]), float(y_arr[i])
        x1, y1 = float(x_arr[i + 1]), float(y_arr[i + 1])

        # Normalized pair ordered by x so that xm <= xn.
        if x0 < x1:
            xa, ya, xb, yb = x0, y0, x1, y1
        else:
            xa, ya, xb, yb = x1, y1, x0, y0
        xm = (xa - xmin) / xspan
        xn = (xb - xmin) / xspan
        ym = (ya - ymin) / yspan
        yn = (yb - ymin) / yspan

        if (xm < 0 and xn < 0) or (xm > 1 and xn > 1) or (ym < 0 and yn < 0) or (ym > 1 and yn > 1):
            continue

        if not inside[i]:
            builder.break_segment()
        else:
            builder.push(x0, y0)
            if inside[i + 1]:
                if i == last:
                    builder.push(x1, y1)
                continue

        if xm == xn:
            builder.push_all(_vertical_crossings(x0, y0, y1, ym, yn, ymin, ymax))
        else:
            crossings = _edge_crossings(xm, xn, ym, yn, xmin, xmax, ymin, ymax, xspan, yspan)
            # A segment meets a convex boundary at most twice.
            builder.push_all(islice(crossings, 2))

        if i == last and inside[i + 1]:
            builder.push(x1, y1)

    segments = builder.segments()
    LOGGER.debug("clipped %d points into %d segment(s)", n, len(segments))
    return segments


def _vertical_crossings(
    x: float, y0: float, y1: float, ym: float, yn: float, ymin: float, ymax: float
) -> Iterator[Point]:
    crosses_top = ym > 1 or yn > 1
    crosses_bottom = ym < 0 or yn < 0
    if y0 <= y1:
        if crosses_bottom:
            yield (x, ymin)
        if crosses_top:
            yield (x, ymax)
    else:
        if crosses_top:
            yield (x, ymax)
        if crosses_bottom:
            yield (x, ymin)


def _edge_crossings(
    xm: float,
    xn: float,
    ym: float,
    yn: float,
    xmin: float,
    xmax: float,
    ymin: float,
    ymax: float,
    xspan: float,
    yspan: float,
) -> Iterator[Point]:
    # Edge order is left, top, right, bottom. Callers rely on it for output ordering.
    m = (yn - ym) / (xn - xm)
    b = ym - xm * m

    if xm < 0 and 0 < b <= 1:
        yield (xmin, ymin + b * yspan)

    if m != 0 and (ym > 1 or yn > 1):
        t = (1 - b) / m
        if 0 <= t < 1:
            yield (xmin + t * xspan, ymax)

    if xn > 1 and 0 < m + b <= 1:
        yield (xmax, ymin + (m + b) * yspan)

    if m != 0 and (ym < 0 or yn < 0):
        t = -b / m
        if 0 <= t < 1:
            yield (xmin + t * xspan, ymin)
