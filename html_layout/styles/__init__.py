"""Style cascade helpers."""

from .style_cascade import (
    StyleDict,
    StyleSheet,
    camelize,
    merge_styles,
    normalize_declarations,
    parse_inline_style,
)

__all__ = [
    "StyleDict",
    "StyleSheet",
    "camelize",
    "merge_styles",
    "normalize_declarations",
    "parse_inline_style",
]
