"""Helpers for reading raw markup attributes."""

from __future__ import annotations

import re
from typing import Any, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> Optional[int]:
    """
    Parse the leading integer of an attribute value.

    Mirrors how browsers read ``colspan``/``start``/``value``: leading
    whitespace is skipped and trailing garbage ignored (``"3px"`` -> 3).

    Returns:
        The parsed integer, or ``None`` when the value carries no digits.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))
