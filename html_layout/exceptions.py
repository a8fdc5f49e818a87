"""Custom exceptions for HTML layout resolution."""

from typing import Optional


class HtmlLayoutError(Exception):
    """Base exception for html_layout errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class StructuralError(HtmlLayoutError):
    """Raised when an element appears outside the structure it requires."""

    pass


class ParsingError(HtmlLayoutError):
    """Exception raised while building the element tree from markup."""

    pass


class LayoutError(HtmlLayoutError):
    """Exception raised while assembling the layout tree."""

    pass
