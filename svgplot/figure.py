from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

from .adapters import coerce_1d_numeric, normalize_xy
from .compile import CompileFailure, compile_axis
from .elements import BarPlot, Element, LinePlot, ScatterPlot, Text, Ticks
from .histogram import autoscale_histogram_limits, histogram_bins
from .markup import MarkupNode, append_child, serialize, svg_tag
from .ticks import auto_tick_positions, tick_multipliers
from .transform import AxisLimits, AxisTransform


LOGGER = logging.getLogger(__name__)


def _coerce_limits(limits: AxisLimits | Sequence[float]) -> AxisLimits:
    if isinstance(limits, AxisLimits):
        return limits
    if len(limits) != 4:
        raise ValueError("limits must be (xmin, xmax, ymin, ymax)")
    return AxisLimits.from_sequence(limits)


@dataclass
class Axis:
    """One plotting rectangle placed on a figure in normalized coordinates.

    ``origin`` is the top-left corner and ``size`` the extent, both as
    fractions of the figure. The axis does not hold its figure; the figure
    passes its pixel size when the axis is compiled.
    """

    origin: tuple[float, float]
    size: tuple[float, float]
    limits: AxisLimits
    elements: list[Element] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        u, v = (float(c) for c in self.origin)
        w, h = (float(c) for c in self.size)
        if not (0.0 <= u <= 1.0 and 0.0 <= v <= 1.0):
            raise ValueError("axis origin must lie in [0, 1] x [0, 1]")
        if not (0.0 < w <= 1.0 and 0.0 < h <= 1.0):
            raise ValueError("axis size must lie in (0, 1] x (0, 1]")
        self.origin = (u, v)
        self.size = (w, h)
        self.limits = _coerce_limits(self.limits)

    def transform(self, figure_width: int, figure_height: int) -> AxisTransform:
        return AxisTransform(
            figure_width=float(figure_width),
            figure_height=float(figure_height),
            origin=self.origin,
            size=self.size,
            limits=self.limits,
        )

    def set_limits(self, limits: AxisLimits | Sequence[float]) -> "Axis":
        self.limits = _coerce_limits(limits)
        return self

    def add(self, element: Element) -> Element:
        self.elements.append(element)
        return element

    def text(self, text: str, u: float, v: float, *, angle: float | None = None, **style: Any) -> Text:
        return self.add(Text(text=str(text), u=float(u), v=float(v), angle=angle, properties=style))  # type: ignore[return-value]

    def line(self, y: Any = None, *, x: Any = None, data: Any = None, **style: Any) -> LinePlot:
        xs, ys = normalize_xy(y, x=x, data=data)
        return self.add(LinePlot(xs=xs, ys=ys, properties=style))  # type: ignore[return-value]

    def scatter(self, y: Any = None, *, x: Any = None, data: Any = None, **style: Any) -> ScatterPlot:
        xs, ys = normalize_xy(y, x=x, data=data)
        return self.add(ScatterPlot(xs=xs, ys=ys, properties=style))  # type: ignore[return-value]

    def bar(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        width: float = 1.0,
        **style: Any,
    ) -> BarPlot:
        xs, ys = normalize_xy(y, x=x, data=data)
        return self.add(BarPlot(xs=xs, ys=ys, width=float(width), properties=style))  # type: ignore[return-value]

    def ticks(
        self,
        xticks: Any,
        yticks: Any,
        *,
        color: str = "black",
        linewidth: float = 1.0,
    ) -> "Axis":
        self.add(Ticks("x", coerce_1d_numeric(xticks, label="xticks"), color=color, linewidth=linewidth))
        self.add(Ticks("y", coerce_1d_numeric(yticks, label="yticks"), color=color, linewidth=linewidth))
        return self

    def autoticks(self) -> "Axis":
        """Replace the first x and y tick sets with positions derived from the limits."""
        x_mult, y_mult = tick_multipliers(*self.size)
        for direction, (lo, hi), mult in (
            ("x", (self.limits.xmin, self.limits.xmax), x_mult),
            ("y", (self.limits.ymin, self.limits.ymax), y_mult),
        ):
            index = self._find_ticks(direction)
            if index is None:
                continue
            current = self.elements[index]
            self.elements[index] = replace(current, positions=auto_tick_positions(lo, hi, mult))
        return self

    def histogram(
        self,
        values: Any,
        start: float,
        stop: float,
        step: float,
        *,
        autoscale: bool = True,
        width: float = 4.0,
        **style: Any,
    ) -> BarPlot:
        centers, rel = histogram_bins(coerce_1d_numeric(values, label="values"), start, stop, step)
        if autoscale:
            scaled = autoscale_histogram_limits(self.limits, rel)
            if scaled == self.limits:
                LOGGER.debug("histogram autoscale left axis limits unchanged")
            else:
                self.limits = scaled
                self.autoticks()
        return self.add(BarPlot(xs=centers, ys=rel, width=float(width), properties=style))  # type: ignore[return-value]

    def _find_ticks(self, direction: str) -> int | None:
        for index, element in enumerate(self.elements):
            if isinstance(element, Ticks) and element.direction == direction:
                return index
        return None


@dataclass
class Figure:
    width: int = 640
    height: int = 480
    axes: list[Axis] = field(default_factory=list)
    _last_failures: tuple[CompileFailure, ...] = field(default=(), init=False, repr=False)

    def __post_init__(self) -> None:
        if int(self.width) != self.width or int(self.height) != self.height:
            raise ValueError("width and height must be integers")
        self.width = int(self.width)
        self.height = int(self.height)
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")

    def add_axis(
        self,
        placement: Sequence[float],
        limits: AxisLimits | Sequence[float],
        **style: Any,
    ) -> Axis:
        if len(placement) != 4:
            raise ValueError("placement must be (u, v, width, height)")
        u, v, w, h = placement
        axis = Axis(origin=(u, v), size=(w, h), limits=_coerce_limits(limits), properties=style)
        self.axes.append(axis)
        return axis

    @property
    def last_failures(self) -> tuple[CompileFailure, ...]:
        return self._last_failures

    def build(self) -> MarkupNode:
        root = svg_tag(self.width, self.height)
        failures: list[CompileFailure] = []
        for index, axis in enumerate(self.axes):
            compiled = compile_axis(axis, self.width, self.height, axis_index=index)
            for node in compiled.nodes:
                append_child(root, node)
            failures.extend(compiled.failures)
        self._last_failures = tuple(failures)
        if failures:
            LOGGER.warning("figure rendered with %d failed element(s)", len(failures))
        return root

    def render(self) -> str:
        return serialize(self.build())

    def to_html(self) -> str:
        return f"<html>{self.render()}</html>"

    def save(self, path: str | Path, *, html: bool = False) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.to_html() if html else self.render(), encoding="utf-8")
        LOGGER.info("wrote %s", out)
        return out


def render_figures(figures: Iterable[Figure], *, max_workers: int | None = None) -> list[str]:
    """Render independent figures concurrently; results keep the input order."""
    items = list(figures)
    if not items:
        return []
    if max_workers is not None and max_workers <= 0:
        raise ValueError("max_workers must be > 0")
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(Figure.render, items))
