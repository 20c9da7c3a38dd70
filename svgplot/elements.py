from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias

import numpy as np

from .errors import PlotDataError


TickDirection = Literal["x", "y"]


def _as_float_array(values: Any, label: str) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    return arr


def _check_xy(xs: np.ndarray, ys: np.ndarray) -> None:
    if xs.shape != ys.shape:
        raise PlotDataError(f"x and y length mismatch: {xs.size} != {ys.size}")


@dataclass(frozen=True)
class Text:
    """Text placed in axis-local coordinates (``v`` grows upward)."""

    text: str
    u: float
    v: float
    angle: float | None = None
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Ticks:
    direction: TickDirection
    positions: np.ndarray
    color: str = "black"
    linewidth: float = 1.0

    def __post_init__(self) -> None:
        if self.direction not in ("x", "y"):
            raise ValueError(f"tick direction must be 'x' or 'y', got {self.direction!r}")
        object.__setattr__(self, "positions", _as_float_array(self.positions, "tick positions"))


@dataclass(frozen=True)
class LinePlot:
    xs: np.ndarray
    ys: np.ndarray
    properties: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "xs", _as_float_array(self.xs, "x"))
        object.__setattr__(self, "ys", _as_float_array(self.ys, "y"))
        _check_xy(self.xs, self.ys)


@dataclass(frozen=True)
class ScatterPlot:
    xs: np.ndarray
    ys: np.ndarray
    properties: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "xs", _as_float_array(self.xs, "x"))
        object.__setattr__(self, "ys", _as_float_array(self.ys, "y"))
        _check_xy(self.xs, self.ys)


@dataclass(frozen=True)
class BarPlot:
    """Vertical bars from the zero baseline to each ``y``; ``width`` is in pixels."""

    xs: np.ndarray
    ys: np.ndarray
    width: float = 1.0
    properties: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "xs", _as_float_array(self.xs, "x"))
        object.__setattr__(self, "ys", _as_float_array(self.ys, "y"))
        _check_xy(self.xs, self.ys)
        if self.width <= 0:
            raise ValueError("bar width must be > 0")


Element: TypeAlias = Text | Ticks | LinePlot | ScatterPlot | BarPlot


def element_kind(element: Element) -> str:
    if isinstance(element, Ticks):
        return f"{element.direction}-ticks"
    return type(element).__name__
