"""
html_layout - structural layout resolution for HTML to paginated documents.

Converts a parsed HTML tree into a layout-annotated tree that a pagination
engine can consume. The interesting decisions happen in two places:

- List numbering: bullets, images, decimal/alphabetic/Roman markers with
  ``start`` offsets and per-item ``value`` overrides
- Table grids: row discovery, colspan accounting, cell widths and the
  border-collapse / border-spacing models

Everything else maps element by element onto layout nodes.
"""

from .config import DEFAULT_CONFIG, LayoutConfig
from .exceptions import HtmlLayoutError, LayoutError, ParsingError, StructuralError
from .models import HtmlElement, NodeType, TextNode
from .parser import HtmlTreeParser, parse_html
from .styles import StyleSheet, merge_styles
from .engine import (
    HtmlLayoutBuilder,
    ListMarker,
    ListNumberingResolver,
    NumeralSystem,
    TableGridResolver,
    build_layout,
    max_columns,
    resolve_cell_style,
    resolve_list_marker,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "LayoutConfig",
    "HtmlLayoutError",
    "LayoutError",
    "ParsingError",
    "StructuralError",
    "HtmlElement",
    "NodeType",
    "TextNode",
    "HtmlTreeParser",
    "parse_html",
    "StyleSheet",
    "merge_styles",
    "HtmlLayoutBuilder",
    "ListMarker",
    "ListNumberingResolver",
    "NumeralSystem",
    "TableGridResolver",
    "build_layout",
    "max_columns",
    "resolve_cell_style",
    "resolve_list_marker",
]
