from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

import numpy as np

from svgplot import Figure, render_figures
from svgplot.adapters.normalize import normalize_xy
from svgplot.elements import BarPlot, Ticks
from svgplot.errors import InsufficientPointsWarning, PlotDataError
from svgplot.histogram import autoscale_histogram_limits, histogram_bins
from svgplot.ticks import auto_tick_positions, format_ticks_for_axis, tick_multipliers
from svgplot.transform import AxisLimits


def _sample_figure(stroke: str = "blue") -> Figure:
    fig = Figure(width=320, height=200)
    ax = fig.add_axis((0.1, 0.1, 0.8, 0.8), (0, 10, 0, 10), fill="#eeeeee")
    ax.ticks([0, 5, 10], [0, 5, 10])
    ax.line([1, 12, 3], x=[1, 5, 9], stroke=stroke)
    ax.scatter([1, 12, 3], x=[1, 5, 9], fill="red")
    return fig


class FigureTests(unittest.TestCase):
    def test_figure_rejects_non_positive_size(self) -> None:
        with self.assertRaises(ValueError):
            Figure(width=0, height=10)
        with self.assertRaises(ValueError):
            Figure(width=10, height=-1)

    def test_failure_record_is_not_a_constructor_argument(self) -> None:
        with self.assertRaises(TypeError):
            Figure(width=10, height=10, _last_failures=())  # type: ignore[call-arg]
        fig = Figure(width=10, height=10)
        self.assertEqual(fig.last_failures, ())
        self.assertNotIn("_last_failures", repr(fig))

    def test_axis_placement_is_validated(self) -> None:
        fig = Figure(width=100, height=100)
        with self.assertRaises(ValueError):
            fig.add_axis((0.1, 0.1, 0.0, 0.5), (0, 1, 0, 1))
        with self.assertRaises(ValueError):
            fig.add_axis((1.2, 0.1, 0.5, 0.5), (0, 1, 0, 1))
        with self.assertRaises(ValueError):
            fig.add_axis((0.1, 0.1, 0.5), (0, 1, 0, 1))
        self.assertEqual(fig.axes, [])

    def test_render_produces_svg_root(self) -> None:
        svg = _sample_figure().render()
        root = ET.fromstring(svg)
        self.assertEqual(root.tag, "svg")
        self.assertEqual(root.attrib["width"], "320")
        self.assertEqual(root.attrib["height"], "200")
        self.assertEqual(root.attrib["viewBox"], "0 0 320 200")
        tags = [child.tag for child in root]
        self.assertEqual(tags[0], "rect")
        self.assertEqual(tags.count("polyline"), 2)
        self.assertEqual(tags.count("circle"), 2)
        self.assertEqual(tags.count("line"), 6)

    def test_axes_render_in_insertion_order(self) -> None:
        fig = Figure(width=100, height=100)
        fig.add_axis((0.0, 0.0, 0.5, 0.5), (0, 1, 0, 1), fill="red")
        fig.add_axis((0.5, 0.5, 0.5, 0.5), (0, 1, 0, 1), fill="blue")
        root = ET.fromstring(fig.render())
        self.assertEqual([child.attrib["fill"] for child in root], ["red", "blue"])

    def test_html_wrapper(self) -> None:
        html = _sample_figure().to_html()
        self.assertTrue(html.startswith("<html><svg "))
        self.assertTrue(html.endswith("</svg></html>"))

    def test_failures_are_reported_without_aborting_render(self) -> None:
        fig = Figure(width=100, height=100)
        bad = fig.add_axis((0.0, 0.0, 0.5, 1.0), (0, 1, 5, 5))
        bad.line([1, 2], x=[0, 1])
        good = fig.add_axis((0.5, 0.0, 0.5, 1.0), (0, 1, 0, 1))
        good.line([0, 1], x=[0, 1])
        with self.assertLogs("svgplot", level="WARNING"):
            svg = fig.render()
        self.assertEqual(len(fig.last_failures), 1)
        self.assertEqual(fig.last_failures[0].axis_index, 0)
        self.assertEqual([child.tag for child in ET.fromstring(svg)], ["rect", "rect", "polyline"])

    def test_save_writes_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = _sample_figure().save(Path(tmp) / "nested" / "plot.html", html=True)
            text = out.read_text(encoding="utf-8")
        self.assertTrue(text.startswith("<html>"))

    def test_render_figures_keeps_input_order(self) -> None:
        figures = [_sample_figure(stroke) for stroke in ("red", "green", "blue", "black")]
        expected = [fig.render() for fig in figures]
        self.assertEqual(render_figures(figures, max_workers=3), expected)
        self.assertEqual(render_figures([]), [])

    def test_line_input_length_mismatch(self) -> None:
        ax = Figure().add_axis((0, 0, 1, 1), (0, 1, 0, 1))
        with self.assertRaises(PlotDataError):
            ax.line([1, 2, 3], x=[1, 2])
        with self.assertRaises(PlotDataError):
            BarPlot(xs=[1.0], ys=[1.0, 2.0])

    def test_empty_line_renders_nothing(self) -> None:
        fig = Figure(width=100, height=100)
        fig.add_axis((0, 0, 1, 1), (0, 1, 0, 1)).line([], x=[])
        with self.assertWarns(InsufficientPointsWarning):
            root = ET.fromstring(fig.render())
        self.assertEqual([child.tag for child in root], ["rect"])


class TickTests(unittest.TestCase):
    def test_auto_tick_positions(self) -> None:
        self.assertTrue(np.allclose(auto_tick_positions(0.0, 100.0, 2.5), [0, 25, 50, 75, 100]))
        self.assertTrue(np.allclose(auto_tick_positions(0.0, 1.0, 5.0), [0.0, 0.5, 1.0]))
        self.assertTrue(np.allclose(auto_tick_positions(100.0, 0.0, 2.5), [0, 25, 50, 75, 100]))
        self.assertTrue(np.allclose(auto_tick_positions(-1.0, 101.0, 2.5), [0, 25, 50, 75, 100]))

    def test_tick_multipliers_follow_axis_shape(self) -> None:
        self.assertEqual(tick_multipliers(0.2, 0.8), (5.0, 2.5))
        self.assertEqual(tick_multipliers(0.8, 0.2), (2.5, 5.0))

    def test_autoticks_replaces_tick_elements(self) -> None:
        ax = Figure().add_axis((0.1, 0.1, 0.8, 0.4), (0, 100, 0, 1))
        ax.ticks([1, 2], [3])
        before = list(ax.elements)
        ax.autoticks()
        xticks, yticks = ax.elements
        self.assertIsInstance(xticks, Ticks)
        self.assertTrue(np.allclose(xticks.positions, [0, 25, 50, 75, 100]))
        self.assertTrue(np.allclose(yticks.positions, [0.0, 0.5, 1.0]))
        # The previous tick elements are left untouched.
        self.assertEqual(before[0].positions.tolist(), [1.0, 2.0])

    def test_tick_labels_share_decimals(self) -> None:
        self.assertEqual(format_ticks_for_axis(np.asarray([1.5, 2.0, 2.5])), ["1.5", "2", "2.5"])
        self.assertEqual(format_ticks_for_axis(np.asarray([20.0, 30.0, 40.0])), ["20", "30", "40"])
        self.assertEqual(format_ticks_for_axis(np.asarray([-0.005, 0.0, 0.005])), ["-0.005", "0", "0.005"])

    def test_tick_labels_zero_drift_and_large_values(self) -> None:
        self.assertEqual(format_ticks_for_axis(np.asarray([-0.1, 1e-17, 0.1])), ["-0.1", "0", "0.1"])
        self.assertEqual(format_ticks_for_axis(np.asarray([0.0, 1e6, 2e6])), ["0", "1.0000e+06", "2.0000e+06"])
        self.assertEqual(format_ticks_for_axis(np.asarray([7.0])), ["7"])


class HistogramTests(unittest.TestCase):
    def test_bins_are_right_closed_and_normalized(self) -> None:
        centers, rel = histogram_bins([0.5, 1.0, 1.5, 2.0, 2.5, 7.0], 0.0, 3.0, 1.0)
        self.assertTrue(np.allclose(centers, [0.5, 1.5, 2.5]))
        self.assertTrue(np.allclose(rel, [0.4, 0.4, 0.2]))

    def test_partial_last_step_adds_no_bin(self) -> None:
        centers, rel = histogram_bins([1.0, 12.0, 27.0, 29.0], 0.0, 26.0, 10.0)
        self.assertTrue(np.allclose(centers, [5.0, 15.0]))
        self.assertTrue(np.allclose(rel, [0.5, 0.5]))

    def test_range_shorter_than_one_step(self) -> None:
        with self.assertRaises(ValueError):
            histogram_bins([0.5], 0.0, 0.5, 1.0)

    def test_start_edge_is_excluded(self) -> None:
        _, rel = histogram_bins([0.0, 0.5], 0.0, 2.0, 1.0)
        self.assertTrue(np.allclose(rel, [1.0, 0.0]))

    def test_no_values_in_range_gives_zero_frequencies(self) -> None:
        with self.assertLogs("svgplot.histogram", level="WARNING"):
            _, rel = histogram_bins([10.0], 0.0, 2.0, 1.0)
        self.assertEqual(rel.tolist(), [0.0, 0.0])
        limits = AxisLimits(0.0, 2.0, -1.0, 1.0)
        self.assertEqual(autoscale_histogram_limits(limits, rel), limits)

    def test_invalid_ranges_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            histogram_bins([1.0], 0.0, 1.0, 0.0)
        with self.assertRaises(ValueError):
            histogram_bins([1.0], 2.0, 1.0, 0.5)

    def test_axis_histogram_autoscales_limits_and_ticks(self) -> None:
        ax = Figure().add_axis((0.1, 0.1, 0.8, 0.4), (0, 3, -5, 5))
        ax.ticks([], [])
        bars = ax.histogram([0.5, 1.0, 1.5, 2.0, 2.5], 0.0, 3.0, 1.0, width=6, fill="magenta")
        self.assertEqual(ax.limits.ymin, 0.0)
        self.assertAlmostEqual(ax.limits.ymax, 0.44)
        self.assertEqual(bars.width, 6.0)
        self.assertEqual(bars.properties, {"fill": "magenta"})
        self.assertGreater(ax.elements[1].positions.size, 0)

    def test_axis_histogram_without_autoscale_keeps_limits(self) -> None:
        ax = Figure().add_axis((0.1, 0.1, 0.8, 0.4), (0, 3, -5, 5))
        ax.histogram([1.0], 0.0, 3.0, 1.0, autoscale=False)
        self.assertEqual(ax.limits, AxisLimits(0.0, 3.0, -5.0, 5.0))


class NormalizeTests(unittest.TestCase):
    def test_decimal_and_missing_values(self) -> None:
        xs, ys = normalize_xy([Decimal("1.5"), Decimal("2.25"), None, Decimal("3.5")])
        self.assertEqual(xs.tolist(), [0.0, 1.0, 3.0])
        self.assertEqual(ys.tolist(), [1.5, 2.25, 3.5])

    def test_range_input(self) -> None:
        xs, ys = normalize_xy(range(3), x=range(10, 13))
        self.assertEqual(xs.tolist(), [10.0, 11.0, 12.0])
        self.assertEqual(ys.tolist(), [0.0, 1.0, 2.0])

    def test_rejects_two_dimensional_input(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy([[1, 2], [3, 4]])

    def test_rejects_non_numeric_values(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy(["a", "b"])

    def test_torch_tensor(self) -> None:
        try:
            import torch
        except Exception:
            self.skipTest("torch is not installed")
        _, ys = normalize_xy(torch.tensor([1, 2, 3], dtype=torch.int64))
        self.assertEqual(ys.dtype, np.float64)
        self.assertEqual(ys.tolist(), [1.0, 2.0, 3.0])

    def test_pandas_columns(self) -> None:
        try:
            import pandas as pd
        except Exception:
            self.skipTest("pandas is not installed")
        df = pd.DataFrame({"t": [0, 1, 2], "value": [1.0, 2.0, 3.0]})
        xs, ys = normalize_xy("value", x="t", data=df)
        self.assertEqual(xs.tolist(), [0.0, 1.0, 2.0])
        self.assertEqual(ys.tolist(), [1.0, 2.0, 3.0])
        with self.assertRaisesRegex(PlotDataError, "column not found"):
            normalize_xy("missing", data=df)
        with self.assertRaises(PlotDataError):
            normalize_xy(df)

    def test_data_must_be_a_dataframe(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy("value", data={"value": [1, 2]})


if __name__ == "__main__":
    unittest.main()
