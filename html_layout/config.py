"""Configuration shared by the list and table resolvers and the layout builder."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """
    Options controlling marker text and cell geometry formatting.

    Attributes:
        bullet_glyph: Text marker drawn in front of unordered list items.
        marker_suffix: Suffix appended to ordered markers (``"3."``).
        width_precision: Decimal places used for cell width percentages.
        default_stylesheet: User-agent rules (selector -> declarations)
            applied before any author stylesheet.
    """

    bullet_glyph: str = "•"
    marker_suffix: str = "."
    width_precision: int = 5
    default_stylesheet: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutConfig":
        known = {f.name for f in fields(cls)}
        options = {}
        for key, value in data.items():
            if key in known:
                options[key] = value
            else:
                logger.warning(f"Ignoring unknown layout option '{key}'")
        return cls(**options)


DEFAULT_CONFIG = LayoutConfig()
