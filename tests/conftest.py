"""
Pytest configuration for html_layout
"""

import logging
import sys

import pytest

from html_layout.models.element import HtmlElement
from html_layout.parser.html_parser import HtmlTreeParser


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()


@pytest.fixture
def parse():
    """Parse markup (optionally with an author stylesheet) into an element tree."""
    def _parse(markup, stylesheet=None, config=None):
        return HtmlTreeParser(stylesheet=stylesheet, config=config).parse(markup)
    return _parse


@pytest.fixture
def find_all():
    """Collect descendant elements with the given tag, document order."""
    def _find_all(root, tag):
        found = []
        stack = [root]
        while stack:
            node = stack.pop()
            if not isinstance(node, HtmlElement):
                continue
            if node.tag_name == tag:
                found.append(node)
            stack.extend(reversed(node.child_nodes))
        return found
    return _find_all


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    logging.raiseExceptions = False
