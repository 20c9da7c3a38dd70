"""Declarative chart descriptions in TOML.

Example::

    width = 640
    height = 480

    [[axes]]
    placement = [0.2, 0.1, 0.75, 0.35]
    limits = [-1, 101, -10, 180]
    style = { fill = "#dedede" }
    xticks = [0, 50, 100]
    yticks = [0, 50, 100, 150]

    [[axes.elements]]
    kind = "line"
    x = [0, 50, 100]
    y = [10, 200, 40]
    style = { stroke = "blue" }
"""

from __future__ import annotations

from pathlib import Path
import tomllib
from typing import Any

from .errors import ChartConfigError, PlotDataError
from .figure import Axis, Figure


ELEMENT_KINDS = ("text", "line", "scatter", "bar", "histogram")


def load_figure(path: str | Path) -> Figure:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart description not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ChartConfigError(f"{config_path}: {exc}") from exc
    return figure_from_dict(raw)


def loads_figure(text: str) -> Figure:
    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ChartConfigError(str(exc)) from exc
    return figure_from_dict(raw)


def figure_from_dict(raw: dict[str, Any]) -> Figure:
    width = _require_int(raw.get("width", 640), "width")
    height = _require_int(raw.get("height", 480), "height")
    try:
        fig = Figure(width=width, height=height)
    except ValueError as exc:
        raise ChartConfigError(str(exc)) from exc
    axes = raw.get("axes", [])
    if not isinstance(axes, list):
        raise ChartConfigError("axes must be an array of tables")
    for index, axis_raw in enumerate(axes):
        _build_axis(fig, _require_table(axis_raw, f"axes[{index}]"), f"axes[{index}]")
    return fig


def _build_axis(fig: Figure, raw: dict[str, Any], where: str) -> Axis:
    placement = _require_numbers(raw.get("placement"), f"{where}.placement", length=4)
    limits = _require_numbers(raw.get("limits"), f"{where}.limits", length=4)
    style = _optional_style(raw.get("style"), f"{where}.style")
    try:
        axis = fig.add_axis(placement, limits, **style)
    except ValueError as exc:
        raise ChartConfigError(f"{where}: {exc}") from exc

    xticks = raw.get("xticks")
    yticks = raw.get("yticks")
    if xticks is not None or yticks is not None:
        axis.ticks(
            _require_numbers(xticks if xticks is not None else [], f"{where}.xticks"),
            _require_numbers(yticks if yticks is not None else [], f"{where}.yticks"),
            color=_require_str(raw.get("tick_color", "black"), f"{where}.tick_color"),
            linewidth=_require_float(raw.get("tick_linewidth", 1.0), f"{where}.tick_linewidth"),
        )

    elements = raw.get("elements", [])
    if not isinstance(elements, list):
        raise ChartConfigError(f"{where}.elements must be an array of tables")
    for index, element_raw in enumerate(elements):
        element_where = f"{where}.elements[{index}]"
        try:
            _build_element(axis, _require_table(element_raw, element_where), element_where)
        except (PlotDataError, ValueError) as exc:
            if isinstance(exc, ChartConfigError):
                raise
            raise ChartConfigError(f"{element_where}: {exc}") from exc

    if _require_bool(raw.get("autoticks", False), f"{where}.autoticks"):
        axis.autoticks()
    return axis


def _build_element(axis: Axis, raw: dict[str, Any], where: str) -> None:
    kind = raw.get("kind")
    if kind not in ELEMENT_KINDS:
        raise ChartConfigError(f"{where}.kind must be one of {', '.join(ELEMENT_KINDS)}")
    style = _optional_style(raw.get("style"), f"{where}.style")

    if kind == "text":
        angle = raw.get("angle")
        axis.text(
            _require_str(raw.get("text"), f"{where}.text"),
            _require_float(raw.get("u"), f"{where}.u"),
            _require_float(raw.get("v"), f"{where}.v"),
            angle=None if angle is None else _require_float(angle, f"{where}.angle"),
            **style,
        )
        return

    if kind == "histogram":
        axis.histogram(
            _require_numbers(raw.get("values"), f"{where}.values"),
            _require_float(raw.get("start"), f"{where}.start"),
            _require_float(raw.get("stop"), f"{where}.stop"),
            _require_float(raw.get("step"), f"{where}.step"),
            autoscale=_require_bool(raw.get("autoscale", True), f"{where}.autoscale"),
            width=_require_float(raw.get("width", 4.0), f"{where}.width"),
            **style,
        )
        return

    ys = _require_numbers(raw.get("y"), f"{where}.y")
    xs = raw.get("x")
    x_values = None if xs is None else _require_numbers(xs, f"{where}.x")
    if kind == "line":
        axis.line(ys, x=x_values, **style)
    elif kind == "scatter":
        axis.scatter(ys, x=x_values, **style)
    else:
        axis.bar(ys, x=x_values, width=_require_float(raw.get("width", 1.0), f"{where}.width"), **style)


def _require_table(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ChartConfigError(f"{where} must be a table")
    return value


def _require_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ChartConfigError(f"{where} must be a string")
    return value


def _require_float(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ChartConfigError(f"{where} must be a number")
    return float(value)


def _require_bool(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise ChartConfigError(f"{where} must be true or false")
    return value


def _require_int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ChartConfigError(f"{where} must be an integer")
    return value


def _require_numbers(value: Any, where: str, *, length: int | None = None) -> list[float]:
    if not isinstance(value, list):
        raise ChartConfigError(f"{where} must be an array of numbers")
    numbers = [_require_float(item, f"{where}[{i}]") for i, item in enumerate(value)]
    if length is not None and len(numbers) != length:
        raise ChartConfigError(f"{where} must contain exactly {length} numbers")
    return numbers


def _optional_style(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    table = _require_table(value, where)
    for key, item in table.items():
        if isinstance(item, (dict, list)):
            raise ChartConfigError(f"{where}.{key} must be a scalar")
    return dict(table)
