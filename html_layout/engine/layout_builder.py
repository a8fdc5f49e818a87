"""
Builds the layout tree from a parsed element tree.

Lists and table cells go through the numbering and grid resolvers; every
other tag maps one-to-one onto a container, text, link, image or SVG node.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..models.element import HtmlElement, NodeType, TextNode
from ..parser.html_parser import HtmlTreeParser
from ..styles.style_cascade import StyleDict, StyleSheet, camelize, merge_styles
from .layout_tree import BaseNode, Dispatcher, LayoutNode, LeafNode
from .numbering_formatter import ListNumberingResolver
from .table_grid import TableGridResolver

logger = logging.getLogger(__name__)

NOOP_TAGS = frozenset({"style", "script", "head", "title", "meta", "link"})
INLINE_TAGS = frozenset({
    "span", "b", "strong", "i", "em", "u", "s", "strike", "del", "ins", "mark",
    "small", "big", "sub", "sup", "code", "kbd", "samp", "var", "abbr", "cite",
    "q", "label", "font", "time",
})
SVG_TAGS = frozenset({
    "svg", "line", "polyline", "polygon", "path", "rect", "circle", "ellipse",
    "text", "tspan", "g", "stop", "defs", "clippath", "lineargradient",
    "radialgradient",
})


def _merged(element: HtmlElement) -> StyleDict:
    return merge_styles(element.style)


class TextEngine:
    """Character data becomes a text leaf."""

    def can_handle(self, element: Any) -> bool:
        return isinstance(element, TextNode)

    def build(self, element: TextNode, dispatcher: Dispatcher, **context: Any) -> Optional[LayoutNode]:
        if not element.text:
            return None
        return LeafNode("text", element, metadata={"text": element.text})


class NoopEngine:
    """Drops elements that never render (``style``, ``script``...)."""

    def can_handle(self, element: Any) -> bool:
        return getattr(element, "node_type", None) == NodeType.ELEMENT and element.tag_name in NOOP_TAGS

    def build(self, element: HtmlElement, dispatcher: Dispatcher, **context: Any) -> Optional[LayoutNode]:
        return None


class FragmentEngine:
    """``<html>`` passes its children through unchanged."""

    def can_handle(self, element: Any) -> bool:
        return getattr(element, "tag_name", None) == "html"

    def build(self, element: HtmlElement, dispatcher: Dispatcher, **context: Any) -> LayoutNode:
        return BaseNode("fragment", element, children=dispatcher.dispatch_children(element.child_nodes, **context))


class ListItemEngine:
    """``<li>``: optional marker leaf followed by the item content."""

    def __init__(self, config: LayoutConfig, stylesheet: Optional[StyleSheet] = None) -> None:
        self.resolver = ListNumberingResolver(config)
        self.config = config
        # User-agent rules first, author rules second.
        self.stylesheets = [StyleSheet(config.default_stylesheet)]
        if stylesheet is not None:
            self.stylesheets.append(stylesheet)

    def can_handle(self, element: Any) -> bool:
        return getattr(element, "tag_name", None) == "li"

    def _part_style(self, name: str) -> StyleDict:
        return merge_styles(sheet.rule(name) for sheet in self.stylesheets)

    def build(self, element: HtmlElement, dispatcher: Dispatcher, **context: Any) -> LayoutNode:
        node = BaseNode("list_item", element, style=_merged(element))

        marker = self.resolver.resolve(element)
        if marker is not None:
            node.append(LeafNode(
                "list_marker",
                element,
                style=self._part_style("li_bullet"),
                metadata={"system": marker.system.value, **marker.to_dict()},
            ))

        node.append(BaseNode(
            "list_content",
            element,
            style=self._part_style("li_content"),
            children=dispatcher.dispatch_children(element.child_nodes, **context),
        ))
        return node


class TableEngine:
    """``<table>``, ``<tr>`` and ``<td>``/``<th>`` through the grid resolver."""

    def __init__(self, config: LayoutConfig) -> None:
        self.resolver = TableGridResolver(config)

    def can_handle(self, element: Any) -> bool:
        return getattr(element, "tag_name", None) in ("table", "tr", "td", "th")

    def build(self, element: HtmlElement, dispatcher: Dispatcher, **context: Any) -> LayoutNode:
        children = dispatcher.dispatch_children(element.child_nodes, **context)
        if element.tag_name == "table":
            return BaseNode("table", element, style=self.resolver.resolve_table_style(element), children=children)
        if element.tag_name == "tr":
            return BaseNode("row", element, style=_merged(element), metadata={"wrap": False}, children=children)
        return BaseNode(
            "cell",
            element,
            style=self.resolver.resolve_cell_style(element),
            metadata={"header": element.tag_name == "th"},
            children=children,
        )


class MediaEngine:
    """Links, images and line breaks."""

    def can_handle(self, element: Any) -> bool:
        return getattr(element, "tag_name", None) in ("a", "img", "br")

    def build(self, element: HtmlElement, dispatcher: Dispatcher, **context: Any) -> LayoutNode:
        if element.tag_name == "a":
            return BaseNode(
                "link",
                element,
                style=_merged(element),
                metadata={"href": element.attributes.get("href")},
                children=dispatcher.dispatch_children(element.child_nodes, **context),
            )
        if element.tag_name == "img":
            return LeafNode("image", element, style=_merged(element), metadata={"src": element.attributes.get("src")})
        return LeafNode("text", element, style=_merged(element), metadata={"text": "\n", "wrap": False})


class SvgEngine:
    """SVG primitives forward their attributes (camelized) and styles."""

    def can_handle(self, element: Any) -> bool:
        return getattr(element, "tag_name", None) in SVG_TAGS

    def build(self, element: HtmlElement, dispatcher: Dispatcher, **context: Any) -> LayoutNode:
        style = {camelize(key): value for key, value in element.attributes.items() if key != "style"}
        style.update(_merged(element))
        return BaseNode(
            "svg",
            element,
            style=style,
            metadata={"element": element.tag_name},
            children=dispatcher.dispatch_children(element.child_nodes, **context),
        )


class BlockEngine:
    """Fallback: inline tags become text runs, everything else a view."""

    def can_handle(self, element: Any) -> bool:
        return getattr(element, "node_type", None) == NodeType.ELEMENT

    def build(self, element: HtmlElement, dispatcher: Dispatcher, **context: Any) -> LayoutNode:
        kind = "text" if element.tag_name in INLINE_TAGS else "view"
        return BaseNode(
            kind,
            element,
            style=_merged(element),
            metadata={"tag": element.tag_name},
            children=dispatcher.dispatch_children(element.child_nodes, **context),
        )


class HtmlLayoutBuilder:
    """
    Converts a parsed element tree into a layout tree.

    Args:
        config: Layout configuration; its ``default_stylesheet`` is the
            user-agent sheet.
        stylesheet: Author rules. Besides element selectors they may carry
            ``li_bullet`` and ``li_content`` entries, which style the marker
            and content parts of list items after the user-agent entries.
    """

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        stylesheet: Optional[Union[StyleSheet, Mapping[str, Any]]] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        if not isinstance(stylesheet, StyleSheet):
            stylesheet = StyleSheet(stylesheet)
        self.stylesheet = stylesheet
        self.dispatcher = Dispatcher([
            TextEngine(),
            NoopEngine(),
            FragmentEngine(),
            ListItemEngine(self.config, self.stylesheet),
            TableEngine(self.config),
            MediaEngine(),
            SvgEngine(),
            BlockEngine(),
        ])

    def build(self, root: HtmlElement) -> Optional[LayoutNode]:
        node = self.dispatcher.dispatch(root)
        logger.debug(f"Built layout tree for <{root.tag_name}>")
        return node


def build_layout(
    html: str,
    stylesheet: Optional[Union[StyleSheet, Mapping[str, Any]]] = None,
    config: Optional[LayoutConfig] = None,
) -> Optional[LayoutNode]:
    """Parse markup and build its layout tree in one step."""
    config = config or DEFAULT_CONFIG
    if not isinstance(stylesheet, StyleSheet):
        stylesheet = StyleSheet(stylesheet)
    root = HtmlTreeParser(stylesheet=stylesheet, config=config).parse(html)
    return HtmlLayoutBuilder(config, stylesheet).build(root)
