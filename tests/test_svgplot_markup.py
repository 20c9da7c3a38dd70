from __future__ import annotations

import unittest
import xml.etree.ElementTree as ET

import numpy as np

from svgplot.errors import InvalidChildError
from svgplot.markup import (
    append_child,
    circle_tag,
    create_node,
    format_value,
    line_tag,
    polyline_tag,
    rect_tag,
    serialize,
    svg_tag,
    text_tag,
    to_svg_properties,
)


class MarkupTreeTests(unittest.TestCase):
    def test_self_closing_node_serializes_with_slash(self) -> None:
        node = create_node("rect", {"x": "0", "y": "0"}, self_closing=True)
        self.assertEqual(serialize(node), '<rect x="0" y="0" />')

    def test_wrapping_node_emits_children_in_order(self) -> None:
        root = create_node("g", {"id": "outer"})
        append_child(root, create_node("circle", {"r": 1}, self_closing=True))
        append_child(root, "label")
        self.assertEqual(serialize(root), '<g id="outer"><circle r="1" />label</g>')

    def test_self_closing_node_drops_children(self) -> None:
        node = create_node("line", {}, self_closing=True)
        append_child(node, create_node("title"))
        self.assertEqual(serialize(node), "<line />")

    def test_string_children_are_not_escaped(self) -> None:
        node = text_tag(0, 0, "<tspan>a & b</tspan>")
        self.assertEqual(serialize(node), '<text x="0" y="0"><tspan>a & b</tspan></text>')

    def test_append_self_is_rejected(self) -> None:
        node = create_node("g")
        with self.assertRaises(InvalidChildError):
            append_child(node, node)
        self.assertEqual(node.children, [])

    def test_invalid_child_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(InvalidChildError, ValueError))

    def test_property_names_use_hyphens(self) -> None:
        self.assertEqual(
            to_svg_properties({"text_anchor": "middle", "stroke_width": 2}),
            {"text-anchor": "middle", "stroke-width": "2"},
        )

    def test_caller_style_overrides_defaults(self) -> None:
        self.assertEqual(rect_tag(0, 0, 10, 10).attributes["fill"], "white")
        self.assertEqual(rect_tag(0, 0, 10, 10, fill="#dedede").attributes["fill"], "#dedede")
        self.assertEqual(line_tag(0, 1, 0, 1).attributes["stroke"], "black")
        self.assertEqual(line_tag(0, 1, 0, 1, stroke="red").attributes["stroke"], "red")

    def test_circle_radius_can_be_overridden_by_style(self) -> None:
        node = circle_tag(1.5, 2.5, 1, r="4px", fill="red")
        self.assertEqual(node.attributes["r"], "4px")
        self.assertEqual(node.attributes["cx"], "1.5")

    def test_svg_root_attributes(self) -> None:
        node = svg_tag(640, 480)
        self.assertEqual(node.attributes, {"width": "640", "height": "480", "viewBox": "0 0 640 480"})
        self.assertFalse(node.self_closing)

    def test_polyline_points_and_default_fill(self) -> None:
        node = polyline_tag([0, 1.5], [2, 3.25], stroke="blue")
        self.assertEqual(node.attributes["points"], "0,2 1.5,3.25")
        self.assertEqual(node.attributes["fill"], "none")
        self.assertEqual(node.attributes["stroke"], "blue")

    def test_numbers_format_as_shortest_repr(self) -> None:
        self.assertEqual(format_value(3), "3")
        self.assertEqual(format_value(np.int64(7)), "7")
        self.assertEqual(format_value(np.float64(0.1)), "0.1")
        self.assertEqual(format_value(2.0), "2.0")
        self.assertEqual(format_value(True), "true")

    def test_serialized_tree_is_well_formed_xml(self) -> None:
        root = svg_tag(100, 50)
        append_child(root, rect_tag(0, 0, 100, 50, fill="#eee"))
        append_child(root, text_tag(50, 25, "hello", text_anchor="middle"))
        parsed = ET.fromstring(serialize(root))
        self.assertEqual(parsed.tag, "svg")
        self.assertEqual([child.tag for child in parsed], ["rect", "text"])
        self.assertEqual(parsed[1].text, "hello")
        self.assertEqual(parsed[1].attrib["text-anchor"], "middle")


if __name__ == "__main__":
    unittest.main()
