from svgplot.clipping import clip_polyline, filter_points_inside
from svgplot.compile import CompiledAxis, CompileFailure, compile_axis, compile_element
from svgplot.config import load_figure, loads_figure
from svgplot.elements import BarPlot, Element, LinePlot, ScatterPlot, Text, Ticks
from svgplot.errors import (
    ChartConfigError,
    DegenerateAxisError,
    InsufficientPointsWarning,
    InvalidChildError,
    PlotDataError,
    PlotError,
)
from svgplot.figure import Axis, Figure, render_figures
from svgplot.histogram import autoscale_histogram_limits, histogram_bins
from svgplot.markup import MarkupNode, append_child, create_node, serialize
from svgplot.ticks import auto_tick_positions
from svgplot.transform import AxisLimits, AxisTransform

__all__ = [
    "Axis",
    "AxisLimits",
    "AxisTransform",
    "BarPlot",
    "ChartConfigError",
    "CompileFailure",
    "CompiledAxis",
    "DegenerateAxisError",
    "Element",
    "Figure",
    "InsufficientPointsWarning",
    "InvalidChildError",
    "LinePlot",
    "MarkupNode",
    "PlotDataError",
    "PlotError",
    "ScatterPlot",
    "Text",
    "Ticks",
    "append_child",
    "auto_tick_positions",
    "autoscale_histogram_limits",
    "clip_polyline",
    "compile_axis",
    "compile_element",
    "create_node",
    "filter_points_inside",
    "histogram_bins",
    "load_figure",
    "loads_figure",
    "render_figures",
    "serialize",
]
