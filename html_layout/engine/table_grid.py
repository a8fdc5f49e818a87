"""Column counting and cell geometry for HTML tables."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..exceptions import StructuralError
from ..models.element import HtmlElement
from ..styles.style_cascade import StyleDict, merge_styles
from ..utils.attr_utils import parse_int
from .tree_query import closest_ancestor, element_children, rows_of

logger = logging.getLogger(__name__)

CELL_TAGS = ("td", "th")
BORDER_PROPERTIES = ("border", "borderColor", "borderWidth", "borderStyle")


def cell_span(cell: HtmlElement) -> Optional[int]:
    """Parsed ``colspan`` of a cell, ``None`` when absent or malformed."""
    raw = cell.attributes.get("colspan")
    span = parse_int(raw)
    if span is None and raw:
        logger.debug(f"Ignoring malformed colspan {raw!r} on <{cell.tag_name}>")
    return span


def max_columns(table: Optional[HtmlElement]) -> int:
    """Widest row of the table in columns, spans included; never less than 1."""
    if table is None:
        return 1
    col_counts = [0]
    for row in rows_of(table):
        col_count = 0
        for cell in element_children(row, CELL_TAGS):
            span = cell_span(cell)
            col_count += 1 if span is None else span
        col_counts.append(col_count)
    return max(1, *col_counts)


def uses_border_spacing(table_style: Dict[str, Any]) -> bool:
    """True for the separated-borders model, False when borders collapse."""
    return bool(table_style.get("borderSpacing")) and table_style.get("borderCollapse") != "collapse"


class TableGridResolver:
    """Computes cell borders and widths relative to the enclosing table."""

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def format_percent(self, value: float) -> str:
        return f"{value:.{self.config.width_precision}f}%"

    def resolve_cell_style(self, cell: HtmlElement) -> StyleDict:
        """
        Resolve the style of a ``td``/``th``.

        Raises:
            StructuralError: If the cell has no enclosing table.
        """
        table = closest_ancestor(cell, ("table",))
        if table is None:
            logger.error(f"<{cell.tag_name}> has no enclosing table")
            raise StructuralError(f"{cell.tag_name} element rendered outside of a table")

        table_style = merge_styles(table.style)
        base_style: StyleDict = {
            key: table_style[key] for key in BORDER_PROPERTIES if table_style.get(key) is not None
        }

        if uses_border_spacing(table_style):
            base_style["margin"] = table_style["borderSpacing"]
        else:
            base_style["borderRightWidth"] = 0
            base_style["borderBottomWidth"] = 0
            if cell.index_of_type != 0 and table_style.get("borderWidth") is not None:
                base_style["borderLeftWidth"] = table_style["borderWidth"]
                base_style["borderTopWidth"] = table_style["borderWidth"]

        base_percent = 100 / max_columns(table)
        base_style["width"] = self.format_percent(base_percent)
        span = cell_span(cell)
        if span is not None:
            base_style["width"] = self.format_percent(span * base_percent)

        return {**base_style, **merge_styles(cell.style)}

    def resolve_table_style(self, table: HtmlElement) -> StyleDict:
        """Table style with the outer left/top borders removed when cells collapse."""
        table_style = merge_styles(table.style)
        if not uses_border_spacing(table_style):
            table_style["borderLeftWidth"] = 0
            table_style["borderTopWidth"] = 0
        return table_style


def resolve_cell_style(cell: HtmlElement, config: Optional[LayoutConfig] = None) -> StyleDict:
    """Functional shortcut for :meth:`TableGridResolver.resolve_cell_style`."""
    return TableGridResolver(config).resolve_cell_style(cell)
