from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

import numpy as np

from .errors import DegenerateAxisError


Numeric = TypeVar("Numeric", float, np.ndarray)


@dataclass(frozen=True)
class AxisLimits:
    """Visible data rectangle of one axis. ``min > max`` reverses the direction."""

    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @classmethod
    def from_sequence(cls, values) -> "AxisLimits":
        xmin, xmax, ymin, ymax = (float(v) for v in values)
        return cls(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)

    def x_bounds(self) -> tuple[float, float]:
        return (min(self.xmin, self.xmax), max(self.xmin, self.xmax))

    def y_bounds(self) -> tuple[float, float]:
        return (min(self.ymin, self.ymax), max(self.ymin, self.ymax))

    def contains_x(self, x: float) -> bool:
        lo, hi = self.x_bounds()
        return lo <= x <= hi

    def contains_y(self, y: float) -> bool:
        lo, hi = self.y_bounds()
        return lo <= y <= hi


@dataclass(frozen=True)
class AxisTransform:
    """Maps data values of one axis to absolute image pixels.

    ``norm_x``/``norm_y`` take data values to axis-local ``[0, 1]`` coordinates
    (y flipped, image rows grow downward). ``to_image_x``/``to_image_y`` take
    axis-local coordinates to figure pixels. All four accept scalars or numpy
    arrays and are recomputed on every call.
    """

    figure_width: float
    figure_height: float
    origin: tuple[float, float]
    size: tuple[float, float]
    limits: AxisLimits

    def to_image_x(self, u: Numeric) -> Numeric:
        u0, _ = self.origin
        w, _ = self.size
        return self.figure_width * (u0 + u * w)

    def to_image_y(self, v: Numeric) -> Numeric:
        _, v0 = self.origin
        _, h = self.size
        return self.figure_height * (v0 + v * h)

    def norm_x(self, x: Numeric) -> Numeric:
        span = self.limits.xmax - self.limits.xmin
        if span == 0:
            raise DegenerateAxisError(f"x range has zero span (xmin == xmax == {self.limits.xmin})")
        return (x - self.limits.xmin) / span

    def norm_y(self, y: Numeric) -> Numeric:
        span = self.limits.ymax - self.limits.ymin
        if span == 0:
            raise DegenerateAxisError(f"y range has zero span (ymin == ymax == {self.limits.ymin})")
        return 1 - (y - self.limits.ymin) / span

    def pixel_x(self, x: Numeric) -> Numeric:
        return self.to_image_x(self.norm_x(x))

    def pixel_y(self, y: Numeric) -> Numeric:
        return self.to_image_y(self.norm_y(y))

    def data_to_image(self, x: Numeric, y: Numeric) -> tuple[Numeric, Numeric]:
        return self.pixel_x(x), self.pixel_y(y)

    def axis_rect(self) -> tuple[float, float, float, float]:
        u0, v0 = self.origin
        w, h = self.size
        return (
            self.figure_width * u0,
            self.figure_height * v0,
            self.figure_width * w,
            self.figure_height * h,
        )
