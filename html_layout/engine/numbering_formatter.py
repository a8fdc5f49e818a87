"""Helpers for resolving list item markers during layout."""

from __future__ import annotations

import logging
import re
import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..models.element import HtmlElement
from ..styles.style_cascade import merge_styles
from ..utils.attr_utils import parse_int
from .tree_query import closest_ancestor

logger = logging.getLogger(__name__)

ORDERED_ALPHA = string.ascii_lowercase
LOWER_ALPHA = ("lower-alpha", "lower-latin")
UPPER_ALPHA = ("upper-alpha", "upper-latin")

ROMAN_NUMERALS: Tuple[Tuple[int, str], ...] = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)

_URL_ARGUMENT = re.compile(r"\((.*?)\)")
_QUOTES = re.compile(r"['\"]")


class NumeralSystem(str, Enum):
    """Marker kinds a ``list-style-type`` can resolve to."""

    DECIMAL = "decimal"
    LOWER_ALPHA = "lower-alpha"
    UPPER_ALPHA = "upper-alpha"
    LOWER_ROMAN = "lower-roman"
    UPPER_ROMAN = "upper-roman"
    NONE = "none"
    IMAGE = "image"
    BULLET = "bullet"


@dataclass(frozen=True)
class ListMarker:
    """Resolved marker: exactly one of ``text`` or ``image`` is set."""

    system: NumeralSystem
    text: Optional[str] = None
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        if self.image is not None:
            return {"image": self.image}
        return {"text": self.text or ""}


def to_roman(num: int) -> str:
    """Uppercase Roman numeral for ``num``; empty for zero or negative input."""
    result = ""
    for decimal, roman in ROMAN_NUMERALS:
        if num <= 0:
            break
        quotient, num = divmod(num, decimal)
        result += roman * quotient
    return result


def to_alpha(index: int) -> str:
    """
    Lowercase letter sequence for a 0-based index.

    0 -> ``a`` ... 25 -> ``z``, then ``aa``, ``ab`` ... Negative indexes yield
    an empty string.
    """
    if index < 0:
        return ""
    letters = ""
    while index >= 0:
        letters = ORDERED_ALPHA[index % 26] + letters
        index = index // 26 - 1
    return letters


def classify_list_style(list_style_type: str, ordered: bool) -> Tuple[NumeralSystem, Optional[str]]:
    """
    Map a cascaded ``list-style-type`` string to a numeral system.

    ``"none"`` and ``"url("`` are matched as substrings so shorthand values
    such as ``"none inside"`` still resolve. The alpha and Roman families
    match whole whitespace-separated keywords, so ``"lower-roman inside"``
    is Roman too. Returns the system and, for images, the url.
    """
    if "none" in list_style_type:
        return NumeralSystem.NONE, None
    if "url(" in list_style_type:
        match = _URL_ARGUMENT.search(list_style_type)
        url = _QUOTES.sub("", match.group(1)) if match else ""
        return NumeralSystem.IMAGE, url
    if not ordered:
        return NumeralSystem.BULLET, None
    tokens = list_style_type.split()
    if any(token in LOWER_ALPHA for token in tokens):
        return NumeralSystem.LOWER_ALPHA, None
    if any(token in UPPER_ALPHA for token in tokens):
        return NumeralSystem.UPPER_ALPHA, None
    if "lower-roman" in tokens:
        return NumeralSystem.LOWER_ROMAN, None
    if "upper-roman" in tokens:
        return NumeralSystem.UPPER_ROMAN, None
    return NumeralSystem.DECIMAL, None


class ListNumberingResolver:
    """Resolves the marker drawn in front of a ``li`` element."""

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def resolve(
        self,
        element: HtmlElement,
        item_style: Optional[Mapping[str, Any]] = None,
        list_style: Optional[Mapping[str, Any]] = None,
    ) -> Optional[ListMarker]:
        """
        Resolve the marker for a list item.

        Args:
            element: The ``li`` element.
            item_style: Merged item style; defaults to the element's cascade.
            list_style: Merged style of the owning list; defaults to the
                cascade of the closest ``ol``/``ul``.

        Returns:
            ``None`` when no marker is drawn, otherwise a :class:`ListMarker`.
        """
        list_element = closest_ancestor(element, ("ol", "ul"))
        if item_style is None:
            item_style = merge_styles(element.style)
        if list_style is None:
            list_style = merge_styles(list_element.style) if list_element is not None else {}

        list_style_type = self.list_style_type(item_style, list_style)
        ordered = self.is_ordered(element, list_element)
        system, url = classify_list_style(list_style_type, ordered)

        if system is NumeralSystem.NONE:
            return None
        if system is NumeralSystem.IMAGE:
            return ListMarker(system, image=url)
        if system is NumeralSystem.BULLET:
            return ListMarker(system, text=self.config.bullet_glyph)
        return ListMarker(system, text=self._format_ordered(element, system))

    @staticmethod
    def list_style_type(item_style: Mapping[str, Any], list_style: Mapping[str, Any]) -> str:
        return (
            item_style.get("listStyleType")
            or item_style.get("listStyle")
            or list_style.get("listStyleType")
            or list_style.get("listStyle")
            or ""
        )

    @staticmethod
    def is_ordered(element: HtmlElement, list_element: Optional[HtmlElement] = None) -> bool:
        if list_element is None:
            list_element = closest_ancestor(element, ("ol", "ul"))
        if list_element is not None and list_element.tag_name == "ol":
            return True
        parent = element.parent_node
        return parent is not None and parent.tag_name == "ol"

    def resolve_index(self, element: HtmlElement) -> int:
        """
        0-based number of an ordered item after ``start`` and ``value`` overrides.

        The nearest ``li`` at or before the item carrying a numeric ``value``
        anchors the count; otherwise the parent's ``start`` offsets the item's
        position.
        """
        current_index = element.index_of_type
        parent = element.parent_node
        start = parse_int(parent.attributes.get("start")) if parent is not None else None
        offset = start - 1 if start is not None else 0
        updated_index = current_index + offset

        current: Optional[HtmlElement] = element
        while current is not None:
            if current.tag_name == "li":
                start_value = parse_int(current.attributes.get("value"))
                if start_value is not None:
                    updated_index = start_value + (current_index - current.index_of_type) - 1
                    break
                if current.attributes.get("value"):
                    logger.debug(f"Ignoring non-numeric list value {current.attributes['value']!r}")
            current = current.previous_element_sibling

        return updated_index

    def _format_ordered(self, element: HtmlElement, system: NumeralSystem) -> str:
        suffix = self.config.marker_suffix
        # Roman markers follow the raw position; value/start overrides do not apply.
        if system is NumeralSystem.LOWER_ROMAN:
            return to_roman(element.index_of_type + 1).lower() + suffix
        if system is NumeralSystem.UPPER_ROMAN:
            return to_roman(element.index_of_type + 1).upper() + suffix

        updated_index = self.resolve_index(element)
        if system is NumeralSystem.LOWER_ALPHA:
            return to_alpha(updated_index) + suffix
        if system is NumeralSystem.UPPER_ALPHA:
            return to_alpha(updated_index).upper() + suffix
        return f"{updated_index + 1}{suffix}"


def resolve_list_marker(
    element: HtmlElement,
    item_style: Optional[Mapping[str, Any]] = None,
    list_style: Optional[Mapping[str, Any]] = None,
    config: Optional[LayoutConfig] = None,
) -> Optional[ListMarker]:
    """Functional shortcut for :meth:`ListNumberingResolver.resolve`."""
    return ListNumberingResolver(config).resolve(element, item_style, list_style)
