"""
Element model consumed by the layout resolvers.

The tree is built once by the parser and treated as read-only afterwards:
resolvers only navigate it through ``parent_node``, ``child_nodes`` and
``previous_element_sibling``. Sibling positions are recorded when a child is
appended, so children must be attached through ``append_child``.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Iterable, List, Optional, Union

from ..styles.style_cascade import StyleDict


class NodeType(IntEnum):
    """DOM node types that occur in a parsed tree."""

    ELEMENT = 1
    TEXT = 3


class TextNode:
    """Character data between elements."""

    node_type = NodeType.TEXT

    def __init__(self, text: str, parent_node: Optional["HtmlElement"] = None) -> None:
        self.text = text
        self.parent_node = parent_node

    def __repr__(self) -> str:
        return f"TextNode({self.text!r})"


Node = Union["HtmlElement", TextNode]


def _tag_set(selector: Union[str, Iterable[str]]) -> frozenset:
    if isinstance(selector, str):
        parts = selector.split(",")
    else:
        parts = list(selector)
    return frozenset(part.strip().lower() for part in parts if part and part.strip())


class HtmlElement:
    """
    Element node with resolved attributes and cascaded style.

    Attributes:
        tag_name: Lowercase tag name.
        attributes: Raw attribute values keyed by lowercase name.
        style: Cascade-ordered list of style mappings; later entries win.
        child_nodes: Element and text children in document order.
        parent_node: Enclosing element, ``None`` for the root.
    """

    node_type = NodeType.ELEMENT

    def __init__(
        self,
        tag_name: str,
        attributes: Optional[Dict[str, str]] = None,
        style: Optional[List[StyleDict]] = None,
        children: Optional[Iterable[Node]] = None,
    ) -> None:
        self.tag_name = tag_name.lower()
        self.attributes: Dict[str, str] = dict(attributes or {})
        self.style: List[StyleDict] = list(style or [])
        self.child_nodes: List[Node] = []
        self.parent_node: Optional[HtmlElement] = None
        self._previous_element: Optional[HtmlElement] = None
        self._index_of_type = 0
        # Sibling positions of element children, filled in by append_child.
        self._last_element: Optional[HtmlElement] = None
        self._type_counts: Dict[str, int] = {}
        for child in children or ():
            self.append_child(child)

    @property
    def tag(self) -> str:
        return self.tag_name

    def append_child(self, child: Node) -> Node:
        """Attach ``child`` as the last child node and record its sibling position."""
        child.parent_node = self
        self.child_nodes.append(child)
        if child.node_type == NodeType.ELEMENT:
            child._previous_element = self._last_element
            child._index_of_type = self._type_counts.get(child.tag_name, 0)
            self._type_counts[child.tag_name] = child._index_of_type + 1
            self._last_element = child
        return child

    @property
    def children(self) -> List["HtmlElement"]:
        return [child for child in self.child_nodes if child.node_type == NodeType.ELEMENT]

    @property
    def previous_element_sibling(self) -> Optional["HtmlElement"]:
        return self._previous_element

    @property
    def index_of_type(self) -> int:
        """0-based position among element siblings that share this tag."""
        return self._index_of_type

    def closest(self, selector: Union[str, Iterable[str]]) -> Optional["HtmlElement"]:
        """Nearest element matching one of the tags, starting with this element."""
        tags = _tag_set(selector)
        node: Optional[HtmlElement] = self
        while node is not None:
            if node.tag_name in tags:
                return node
            node = node.parent_node
        return None

    @property
    def text_content(self) -> str:
        parts: List[str] = []
        for child in self.child_nodes:
            if isinstance(child, TextNode):
                parts.append(child.text)
            else:
                parts.append(child.text_content)
        return "".join(parts)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name.lower(), default)

    def __repr__(self) -> str:
        return f"<HtmlElement {self.tag_name} attrs={self.attributes!r}>"
