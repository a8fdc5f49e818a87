"""
Tests for layout tree assembly.
"""

import pytest

from html_layout.config import LayoutConfig
from html_layout.engine.layout_builder import HtmlLayoutBuilder, build_layout
from html_layout.engine.layout_tree import BaseNode, Dispatcher, LeafNode, walk
from html_layout.exceptions import LayoutError, StructuralError
from html_layout.models.element import HtmlElement, TextNode


def nodes_of_kind(root, kind):
    return [node for node in walk(root) if node.kind == kind]


class TestLayoutTree:
    """Node containers and the dispatcher."""

    def test_leaf_rejects_children(self):
        leaf = LeafNode("text")
        with pytest.raises(LayoutError):
            leaf.append(BaseNode("view"))
        with pytest.raises(LayoutError):
            leaf.extend([BaseNode("view")])

    def test_walk_is_depth_first(self):
        tree = BaseNode("a", children=[BaseNode("b", children=[LeafNode("c")]), LeafNode("d")])
        assert [node.kind for node in walk(tree)] == ["a", "b", "c", "d"]

    def test_to_dict(self):
        tree = BaseNode("view", style={"color": "red"}, children=[LeafNode("text", metadata={"text": "x"})])
        assert tree.to_dict() == {
            "kind": "view",
            "style": {"color": "red"},
            "metadata": {},
            "children": [{"kind": "text", "style": {}, "metadata": {"text": "x"}, "children": []}],
        }

    def test_unhandled_element_raises_lookup_error(self):
        with pytest.raises(LookupError):
            Dispatcher([]).dispatch(HtmlElement("div"))

    def test_engine_failures_are_wrapped(self):
        class BrokenEngine:
            def can_handle(self, element):
                return True

            def build(self, element, dispatcher, **context):
                raise KeyError("boom")

        with pytest.raises(LayoutError) as excinfo:
            Dispatcher([BrokenEngine()]).dispatch(HtmlElement("div"))

        assert isinstance(excinfo.value.__cause__, KeyError)

    def test_register_appends_engine(self):
        class CatchAll:
            def can_handle(self, element):
                return True

            def build(self, element, dispatcher, **context):
                return LeafNode("custom", element)

        dispatcher = Dispatcher([])
        dispatcher.register(CatchAll())
        assert dispatcher.dispatch(HtmlElement("p")).kind == "custom"


class TestHtmlLayoutBuilder:
    """Tag bindings."""

    def test_ordered_list_items_get_markers(self):
        tree = build_layout("<ol><li>One</li><li>Two</li></ol>")

        items = nodes_of_kind(tree, "list_item")
        assert len(items) == 2
        assert [item.children[0].kind for item in items] == ["list_marker", "list_marker"]
        assert [item.children[0].metadata["text"] for item in items] == ["1.", "2."]
        assert items[0].children[0].metadata["system"] == "decimal"

        content = items[0].children[1]
        assert content.kind == "list_content"
        assert content.children[0].metadata["text"] == "One"

    def test_hidden_marker_leaves_only_content(self):
        tree = build_layout('<ul style="list-style-type: none"><li>x</li></ul>')
        item = nodes_of_kind(tree, "list_item")[0]
        assert [child.kind for child in item.children] == ["list_content"]

    def test_image_marker_metadata(self):
        tree = build_layout('<ul style="list-style-type: url(dot.png)"><li>x</li></ul>')
        marker = nodes_of_kind(tree, "list_marker")[0]
        assert marker.metadata == {"system": "image", "image": "dot.png"}

    def test_marker_and_content_styles_come_from_config(self):
        config = LayoutConfig(default_stylesheet={
            "li_bullet": {"width": "20px"},
            "li_content": "flex-grow: 1",
        })
        tree = build_layout("<ul><li>x</li></ul>", config=config)
        item = nodes_of_kind(tree, "list_item")[0]

        assert item.children[0].style == {"width": "20px"}
        assert item.children[1].style == {"flexGrow": "1"}

    def test_author_marker_styles_apply(self):
        tree = build_layout("<ul><li>a</li></ul>", stylesheet={"li_bullet": {"width": "30"}})
        marker = nodes_of_kind(tree, "list_marker")[0]
        assert marker.style == {"width": "30"}

    def test_author_part_styles_override_config(self):
        config = LayoutConfig(default_stylesheet={
            "li_bullet": {"width": "20px", "color": "gray"},
            "li_content": "flex-grow: 1",
        })
        stylesheet = {"li_bullet": "color: black", "li_content": {"padding-left": "4px"}}
        tree = build_layout("<ol><li>x</li></ol>", stylesheet=stylesheet, config=config)
        item = nodes_of_kind(tree, "list_item")[0]

        assert item.children[0].style == {"width": "20px", "color": "black"}
        assert item.children[1].style == {"flexGrow": "1", "paddingLeft": "4px"}

    def test_builder_accepts_stylesheet_for_parsed_tree(self, parse):
        root = parse("<ul><li>x</li></ul>")
        tree = HtmlLayoutBuilder(stylesheet={"li_content": "margin: 0"}).build(root)
        assert nodes_of_kind(tree, "list_content")[0].style == {"margin": "0"}

    def test_table_cells_are_resolved(self):
        tree = build_layout(
            '<table style="border-width: 1px">'
            "<tr><th>A</th><th>B</th></tr>"
            "<tr><td colspan=\"2\">C</td></tr>"
            "</table>"
        )

        table = nodes_of_kind(tree, "table")[0]
        assert table.style["borderLeftWidth"] == 0
        assert table.style["borderTopWidth"] == 0

        rows = nodes_of_kind(tree, "row")
        assert all(row.metadata["wrap"] is False for row in rows)

        cells = nodes_of_kind(tree, "cell")
        assert [cell.style["width"] for cell in cells] == ["50.00000%", "50.00000%", "100.00000%"]
        assert [cell.metadata["header"] for cell in cells] == [True, True, False]
        assert cells[1].style["borderLeftWidth"] == "1px"

    def test_structural_error_propagates_unwrapped(self):
        root = HtmlElement("div", children=[HtmlElement("td", children=[TextNode("x")])])
        with pytest.raises(StructuralError):
            HtmlLayoutBuilder().build(root)

    def test_style_and_script_are_dropped(self):
        tree = build_layout("<div><style>p { color: red }</style><script>x()</script><p>kept</p></div>")
        tags = [node.source.tag_name for node in walk(tree) if isinstance(node.source, HtmlElement)]

        assert "style" not in tags
        assert "script" not in tags
        assert "p" in tags

    def test_html_root_is_a_fragment(self):
        root = HtmlElement("html", children=[HtmlElement("p", children=[TextNode("x")])])
        tree = HtmlLayoutBuilder().build(root)

        assert tree.kind == "fragment"
        assert tree.children[0].kind == "view"

    def test_links_images_and_breaks(self):
        tree = build_layout('<p><a href="https://example.com">go</a><br><img src="a.png"></p>')

        link = nodes_of_kind(tree, "link")[0]
        image = nodes_of_kind(tree, "image")[0]
        breaks = [node for node in nodes_of_kind(tree, "text") if node.metadata.get("text") == "\n"]

        assert link.metadata["href"] == "https://example.com"
        assert image.metadata["src"] == "a.png"
        assert breaks and breaks[0].metadata["wrap"] is False

    def test_inline_and_block_kinds(self):
        tree = build_layout("<div><span>a</span><p>b</p></div>")
        div = tree.children[0]
        assert [child.kind for child in div.children] == ["text", "view"]

    def test_svg_attributes_are_camelized(self):
        tree = build_layout('<svg width="10"><circle stroke-width="2" r="5" style="fill: red"></circle></svg>')

        svg_nodes = nodes_of_kind(tree, "svg")
        assert [node.metadata["element"] for node in svg_nodes] == ["svg", "circle"]
        circle = svg_nodes[1]
        assert circle.style["strokeWidth"] == "2"
        assert circle.style["r"] == "5"
        assert circle.style["fill"] == "red"
        assert "style" not in circle.style

    def test_block_styles_are_merged(self):
        tree = build_layout('<p class="lead" style="color: blue">x</p>', stylesheet={".lead": "color: red; margin: 0"})
        paragraph = tree.children[0]
        assert paragraph.style == {"color": "blue", "margin": "0"}
