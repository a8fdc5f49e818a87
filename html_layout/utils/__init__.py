"""Utility helpers for html_layout."""

from .attr_utils import parse_int
from .logger import configure_logging, get_logger, set_log_level

__all__ = [
    "parse_int",
    "configure_logging",
    "get_logger",
    "set_log_level",
]
