"""Compilation of axes and their elements into SVG markup nodes.

Every element compiles independently. A ``PlotError`` raised by one element
(for instance a zero-span axis range) is logged and recorded as a
``CompileFailure``; the remaining elements of the axis still compile.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from .clipping import clip_polyline, filter_points_inside
from .elements import BarPlot, Element, LinePlot, ScatterPlot, Text, Ticks, element_kind
from .errors import PlotError
from .markup import MarkupNode, circle_tag, format_value, line_tag, polyline_tag, rect_tag, text_tag
from .ticks import format_ticks_for_axis
from .transform import AxisTransform

if TYPE_CHECKING:
    from .figure import Axis


LOGGER = logging.getLogger(__name__)

# Tick geometry in axis-local coordinates.
X_TICK_MARK_SPAN = (0.99, 1.01)
X_TICK_LABEL_V = 1.1
Y_TICK_MARK_SPAN = (-0.005, 0.005)
Y_TICK_LABEL_U = -0.03
Y_TICK_LABEL_DV = 0.02
SCATTER_DEFAULT_RADIUS = 1


@dataclass(frozen=True)
class CompileFailure:
    axis_index: int
    element_index: int
    kind: str
    message: str


@dataclass(frozen=True)
class CompiledAxis:
    nodes: tuple[MarkupNode, ...]
    failures: tuple[CompileFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


def compile_axis(axis: "Axis", figure_width: int, figure_height: int, *, axis_index: int = 0) -> CompiledAxis:
    transform = axis.transform(figure_width, figure_height)
    x, y, w, h = transform.axis_rect()
    nodes: list[MarkupNode] = [rect_tag(x, y, w, h, **axis.properties)]
    failures: list[CompileFailure] = []
    for index, element in enumerate(axis.elements):
        try:
            nodes.extend(compile_element(element, transform))
        except PlotError as exc:
            kind = element_kind(element)
            LOGGER.warning("skipping %s (element %d of axis %d): %s", kind, index, axis_index, exc)
            failures.append(CompileFailure(axis_index=axis_index, element_index=index, kind=kind, message=str(exc)))
    return CompiledAxis(nodes=tuple(nodes), failures=tuple(failures))


def compile_element(element: Element, transform: AxisTransform) -> list[MarkupNode]:
    if isinstance(element, Text):
        return [compile_text(element, transform)]
    if isinstance(element, LinePlot):
        return compile_line(element, transform)
    if isinstance(element, ScatterPlot):
        return compile_scatter(element, transform)
    if isinstance(element, BarPlot):
        return compile_bars(element, transform)
    if isinstance(element, Ticks):
        return compile_ticks(element, transform)
    raise TypeError(f"unsupported element type: {type(element)!r}")


def compile_text(text: Text, transform: AxisTransform) -> MarkupNode:
    x = transform.to_image_x(text.u)
    y = transform.to_image_y(1 - text.v)
    if text.angle is None:
        return text_tag(x, y, text.text, **text.properties)
    theta = math.radians(text.angle)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    # Row vector times [[cos, -sin], [sin, cos]]; the rotate() attribute maps the point back onto (x, y).
    rx = x * cos_t + y * sin_t
    ry = -x * sin_t + y * cos_t
    style = {"transform": f"rotate({format_value(float(text.angle))},0,0)", **text.properties}
    return text_tag(rx, ry, text.text, **style)


def compile_line(line: LinePlot, transform: AxisTransform) -> list[MarkupNode]:
    nodes: list[MarkupNode] = []
    for seg_x, seg_y in clip_polyline(line.xs, line.ys, transform.limits):
        if seg_x.size < 2 or seg_y.size < 2:
            continue
        px, py = transform.data_to_image(seg_x, seg_y)
        nodes.append(polyline_tag(px, py, **line.properties))
    return nodes


def compile_scatter(scatter: ScatterPlot, transform: AxisTransform) -> list[MarkupNode]:
    xs, ys = filter_points_inside(scatter.xs, scatter.ys, transform.limits)
    px, py = transform.data_to_image(xs, ys)
    return [circle_tag(cx, cy, SCATTER_DEFAULT_RADIUS, **scatter.properties) for cx, cy in zip(px, py)]


def compile_bars(bars: BarPlot, transform: AxisTransform) -> list[MarkupNode]:
    ylo, yhi = transform.limits.y_bounds()
    nodes: list[MarkupNode] = []
    for xi, yi in zip(bars.xs.tolist(), bars.ys.tolist()):
        if not transform.limits.contains_x(xi):
            continue
        # The bar spans the zero baseline to yi; only the visible part is drawn.
        bottom = max(min(0.0, yi), ylo)
        top = min(max(0.0, yi), yhi)
        if bottom > top:
            continue
        py_bottom = transform.pixel_y(bottom)
        py_top = transform.pixel_y(top)
        x_screen = transform.pixel_x(xi) - bars.width / 2
        nodes.append(
            rect_tag(
                x_screen,
                min(py_bottom, py_top),
                bars.width,
                abs(py_bottom - py_top),
                **bars.properties,
            )
        )
    return nodes


def visible_tick_positions(ticks: Ticks, transform: AxisTransform) -> np.ndarray:
    lo, hi = transform.limits.x_bounds() if ticks.direction == "x" else transform.limits.y_bounds()
    return ticks.positions[(ticks.positions >= lo) & (ticks.positions <= hi)]


def compile_ticks(ticks: Ticks, transform: AxisTransform) -> list[MarkupNode]:
    visible = visible_tick_positions(ticks, transform)
    labels = format_ticks_for_axis(visible)
    style = {"stroke": ticks.color, "stroke_width": ticks.linewidth}

    marks: list[MarkupNode] = []
    texts: list[MarkupNode] = []
    if ticks.direction == "x":
        y0 = transform.to_image_y(X_TICK_MARK_SPAN[0])
        y1 = transform.to_image_y(X_TICK_MARK_SPAN[1])
        label_y = transform.to_image_y(X_TICK_LABEL_V)
        for value, label in zip(visible.tolist(), labels):
            px = transform.pixel_x(value)
            marks.append(line_tag(px, px, y0, y1, **style))
            texts.append(text_tag(px, label_y, label, text_anchor="middle"))
    else:
        x0 = transform.to_image_x(Y_TICK_MARK_SPAN[0])
        x1 = transform.to_image_x(Y_TICK_MARK_SPAN[1])
        label_x = transform.to_image_x(Y_TICK_LABEL_U)
        for value, label in zip(visible.tolist(), labels):
            py = transform.pixel_y(value)
            marks.append(line_tag(x0, x1, py, py, **style))
            label_y = transform.to_image_y(transform.norm_y(value) + Y_TICK_LABEL_DV)
            texts.append(text_tag(label_x, label_y, label, text_anchor="end"))
    return marks + texts

