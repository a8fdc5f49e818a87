"""Element tree model shared by the parser and the resolvers."""

from .element import HtmlElement, Node, NodeType, TextNode

__all__ = [
    "HtmlElement",
    "Node",
    "NodeType",
    "TextNode",
]
