"""Parsing layer: markup to element tree."""

from .html_parser import HtmlTreeParser, parse_html

__all__ = [
    "HtmlTreeParser",
    "parse_html",
]
