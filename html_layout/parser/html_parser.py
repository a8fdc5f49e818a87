"""
HTML tree parser.

Turns markup into the :class:`HtmlElement` tree used by the layout
resolvers. ``lxml.html`` does the tokenizing; this module only attaches the
cascaded style of every element:

- the configured user-agent stylesheet
- author rules matched by tag, ``.class`` and ``#id``
- the inline ``style`` attribute
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from lxml import etree, html as lxml_html

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..exceptions import ParsingError
from ..models.element import HtmlElement, TextNode
from ..styles.style_cascade import StyleSheet, parse_inline_style

logger = logging.getLogger(__name__)


class HtmlTreeParser:
    """Parses HTML fragments or documents into an element tree."""

    def __init__(
        self,
        stylesheet: Optional[Union[StyleSheet, Mapping[str, Any]]] = None,
        config: Optional[LayoutConfig] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.user_agent = StyleSheet(self.config.default_stylesheet)
        if isinstance(stylesheet, StyleSheet):
            self.stylesheet = stylesheet
        else:
            self.stylesheet = StyleSheet(stylesheet)

    def parse(self, markup: str) -> HtmlElement:
        """
        Parse markup into an element tree.

        Full documents keep their ``<html>`` root; fragments are wrapped in a
        ``<body>`` element.

        Raises:
            ParsingError: If the markup is empty or cannot be parsed.
        """
        if not markup or not markup.strip():
            raise ParsingError("Cannot parse empty HTML")

        try:
            if markup.lstrip()[:14].lower().startswith(("<!doctype", "<html")):
                root = lxml_html.document_fromstring(markup)
            else:
                root = lxml_html.fragment_fromstring(markup, create_parent="body")
        except (etree.ParserError, ValueError) as exc:
            raise ParsingError("Failed to parse HTML", str(exc)) from exc

        tree = self._convert(root)
        logger.debug(f"Parsed HTML into <{tree.tag_name}> tree")
        return tree

    def _convert(self, source: Any) -> HtmlElement:
        tag_name = source.tag.lower()
        attributes = {str(key).lower(): value for key, value in source.attrib.items()}

        style = self.user_agent.styles_for(tag_name, attributes)
        style.extend(self.stylesheet.styles_for(tag_name, attributes))
        inline = parse_inline_style(attributes.get("style"))
        if inline:
            style.append(inline)

        element = HtmlElement(tag_name, attributes, style)
        if source.text:
            element.append_child(TextNode(source.text))
        for child in source:
            # Comments and processing instructions have a non-string tag.
            if isinstance(child.tag, str):
                element.append_child(self._convert(child))
            if child.tail:
                element.append_child(TextNode(child.tail))
        return element


def parse_html(
    markup: str,
    stylesheet: Optional[Union[StyleSheet, Mapping[str, Any]]] = None,
    config: Optional[LayoutConfig] = None,
) -> HtmlElement:
    """Parse ``markup`` with an optional author stylesheet."""
    return HtmlTreeParser(stylesheet=stylesheet, config=config).parse(markup)
