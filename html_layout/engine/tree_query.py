"""Read-only queries over the parsed element tree."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..models.element import HtmlElement, NodeType

ROW_SECTIONS = ("thead", "tbody")


def element_children(node: Optional[HtmlElement], tag_filter: Optional[Iterable[str]] = None) -> List[HtmlElement]:
    """Direct element children of ``node``, optionally restricted to the given tag names."""
    if node is None:
        return []
    tags = {tag.lower() for tag in tag_filter} if tag_filter else None
    return [
        child for child in node.child_nodes
        if child.node_type == NodeType.ELEMENT and (not tags or child.tag_name in tags)
    ]


def closest_ancestor(node: Optional[HtmlElement], tag_set: Iterable[str]) -> Optional[HtmlElement]:
    """Nearest element matching ``tag_set``, searching upward from ``node`` itself."""
    if node is None:
        return None
    return node.closest(tag_set)


def rows_of(table: Optional[HtmlElement]) -> List[HtmlElement]:
    """
    Rows of a table: bare ``tr`` children first, then the rows of each
    ``thead``/``tbody`` section in document order.
    """
    rows = element_children(table, ["tr"])
    for section in element_children(table, ROW_SECTIONS):
        rows.extend(element_children(section, ["tr"]))
    return rows
