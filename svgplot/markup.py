"""Minimal SVG tag tree.

Attribute values and text children are written verbatim. Nothing is escaped,
so callers may embed pre-formatted markup fragments in text nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral
from typing import Any, Iterable, Mapping, Union

from .errors import InvalidChildError


@dataclass
class MarkupNode:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Union["MarkupNode", str]] = field(default_factory=list)
    self_closing: bool = False


MarkupChild = Union[MarkupNode, str]


def create_node(tag: str, attributes: Mapping[str, Any] | None = None, *, self_closing: bool = False) -> MarkupNode:
    attrs = {str(k): format_value(v) for k, v in (attributes or {}).items()}
    return MarkupNode(tag=tag, attributes=attrs, children=[], self_closing=self_closing)


def append_child(parent: MarkupNode, child: MarkupChild) -> None:
    # Only direct self-insertion is detected; deeper cycles are the caller's responsibility.
    if child is parent:
        raise InvalidChildError(f"cannot append <{parent.tag}> to itself")
    parent.children.append(child)


def serialize(node: MarkupChild) -> str:
    parts: list[str] = []
    _serialize_into(parts, node)
    return "".join(parts)


def _serialize_into(parts: list[str], node: MarkupChild) -> None:
    if isinstance(node, str):
        parts.append(node)
        return
    parts.append(f"<{node.tag}")
    for key, value in node.attributes.items():
        parts.append(f' {key}="{value}"')
    if node.self_closing:
        # Children of a self-closing node are never emitted.
        parts.append(" />")
        return
    parts.append(">")
    for child in node.children:
        _serialize_into(parts, child)
    parts.append(f"</{node.tag}>")


def format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, Integral):
        return str(value)
    try:
        return repr(float(value))
    except (TypeError, ValueError):
        return str(value)


def to_svg_properties(properties: Mapping[str, Any]) -> dict[str, str]:
    return {str(k).replace("_", "-"): format_value(v) for k, v in properties.items()}


def _tag(tag: str, defaults: dict[str, Any], style: Mapping[str, Any], *, self_closing: bool = True) -> MarkupNode:
    attrs = {k: format_value(v) for k, v in defaults.items()}
    attrs.update(to_svg_properties(style))
    return MarkupNode(tag=tag, attributes=attrs, children=[], self_closing=self_closing)


def svg_tag(width: int, height: int, /, **style: Any) -> MarkupNode:
    defaults = {"width": width, "height": height, "viewBox": f"0 0 {width} {height}"}
    return _tag("svg", defaults, style, self_closing=False)


def rect_tag(x: float, y: float, width: float, height: float, /, **style: Any) -> MarkupNode:
    return _tag("rect", {"x": x, "y": y, "width": width, "height": height, "fill": "white"}, style)


def circle_tag(cx: float, cy: float, r: float | str, /, **style: Any) -> MarkupNode:
    return _tag("circle", {"cx": cx, "cy": cy, "r": r}, style)


def line_tag(x1: float, x2: float, y1: float, y2: float, /, **style: Any) -> MarkupNode:
    return _tag("line", {"x1": x1, "x2": x2, "y1": y1, "y2": y2, "stroke": "black"}, style)


def polyline_tag(xs: Iterable[float], ys: Iterable[float], /, **style: Any) -> MarkupNode:
    points = " ".join(f"{format_value(x)},{format_value(y)}" for x, y in zip(xs, ys))
    return _tag("polyline", {"points": points, "fill": "none"}, style)


def text_tag(x: float, y: float, text: str, /, **style: Any) -> MarkupNode:
    node = _tag("text", {"x": x, "y": y}, style, self_closing=False)
    node.children.append(text)
    return node
