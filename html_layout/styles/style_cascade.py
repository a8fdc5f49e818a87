"""Style cascade helpers for HTML elements."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)

StyleDict = Dict[str, Any]
Declarations = Union[str, Mapping[str, Any]]

_DASH_RUN = re.compile(r"[-_:]+(.)?")
# One declaration: ';' only terminates it outside parentheses and quotes.
_DECLARATION = re.compile(r"""(?:[^;("']|\([^)]*\)|"[^"]*"|'[^']*'|[("'])+""")


def camelize(name: str) -> str:
    """Convert a CSS or SVG attribute name to camelCase (``stroke-width`` -> ``strokeWidth``)."""
    name = name.strip()
    if not name:
        return name
    converted = _DASH_RUN.sub(lambda m: m.group(1).upper() if m.group(1) else "", name)
    return converted[0].lower() + converted[1:] if converted else converted


def merge_styles(styles: Optional[Iterable[Optional[Mapping[str, Any]]]]) -> StyleDict:
    """Apply style mappings left to right; later entries win."""
    merged: StyleDict = {}
    if not styles:
        return merged
    for style in styles:
        if style:
            merged.update(style)
    return merged


def parse_inline_style(text: Optional[str]) -> StyleDict:
    """Parse ``"list-style-type: lower-alpha; border: 1px solid"`` into camelCase properties."""
    style: StyleDict = {}
    if not text:
        return style
    for declaration in _DECLARATION.findall(text):
        if ":" not in declaration:
            if declaration.strip():
                logger.debug(f"Skipping malformed style declaration '{declaration.strip()}'")
            continue
        name, value = declaration.split(":", 1)
        name = name.strip()
        value = value.strip()
        if not name or not value:
            continue
        style[camelize(name)] = value
    return style


def normalize_declarations(declarations: Declarations) -> StyleDict:
    if isinstance(declarations, str):
        return parse_inline_style(declarations)
    return {camelize(str(key)): value for key, value in declarations.items()}


class StyleSheet:
    """
    Minimal author stylesheet keyed by simple selectors.

    Supported selectors are a tag name (``li``), a class (``.numbered``) and
    an id (``#summary``). Rules for an element are returned in that order,
    which is also their precedence on merge. Tag names are case-insensitive;
    classes and ids match exactly as written.
    """

    def __init__(self, rules: Optional[Mapping[str, Declarations]] = None) -> None:
        self._rules: Dict[str, StyleDict] = {}
        for selector, declarations in (rules or {}).items():
            self.add_rule(selector, declarations)

    @staticmethod
    def _selector_key(selector: str) -> str:
        key = selector.strip()
        if key.startswith((".", "#")):
            return key
        return key.lower()

    def add_rule(self, selector: str, declarations: Declarations) -> None:
        for part in selector.split(","):
            key = self._selector_key(part)
            if not key:
                continue
            existing = self._rules.get(key, {})
            self._rules[key] = {**existing, **normalize_declarations(declarations)}

    def rule(self, selector: str) -> StyleDict:
        return dict(self._rules.get(self._selector_key(selector), {}))

    def styles_for(self, tag_name: str, attributes: Mapping[str, str]) -> List[StyleDict]:
        matched: List[StyleDict] = []
        tag_name = tag_name.lower()
        if tag_name in self._rules:
            matched.append(dict(self._rules[tag_name]))
        for class_name in (attributes.get("class") or "").split():
            selector = f".{class_name}"
            if selector in self._rules:
                matched.append(dict(self._rules[selector]))
        element_id = attributes.get("id")
        if element_id and f"#{element_id}" in self._rules:
            matched.append(dict(self._rules[f"#{element_id}"]))
        return matched

    def __len__(self) -> int:
        return len(self._rules)
