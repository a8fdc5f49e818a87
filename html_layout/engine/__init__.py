"""
Layout engine: list numbering, table grid resolution and layout tree assembly.
"""

from .layout_builder import HtmlLayoutBuilder, build_layout
from .layout_tree import BaseNode, Dispatcher, LeafNode, walk
from .numbering_formatter import (
    ListMarker,
    ListNumberingResolver,
    NumeralSystem,
    classify_list_style,
    resolve_list_marker,
    to_alpha,
    to_roman,
)
from .table_grid import TableGridResolver, max_columns, resolve_cell_style
from .tree_query import closest_ancestor, element_children, rows_of

__all__ = [
    "HtmlLayoutBuilder",
    "build_layout",
    "BaseNode",
    "Dispatcher",
    "LeafNode",
    "walk",
    "ListMarker",
    "ListNumberingResolver",
    "NumeralSystem",
    "classify_list_style",
    "resolve_list_marker",
    "to_alpha",
    "to_roman",
    "TableGridResolver",
    "max_columns",
    "resolve_cell_style",
    "closest_ancestor",
    "element_children",
    "rows_of",
]
