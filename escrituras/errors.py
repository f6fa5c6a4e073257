# escrituras/errors.py
"""
Exceptions raised while resolving scripture citations.

All citation failures are deterministic validation errors: retrying the
same input always fails the same way. They subclass ValueError so callers
validating user input can catch them together.

Hierarchy:
- CitationError
    - UnknownBookError
    - InvalidFormatError
        - InvalidRangeError
- CatalogError (fatal, raised while loading the book catalog)
"""

from typing import Optional


class CitationError(ValueError):
    """Base exception for citation resolution errors."""

    code = "invalid_citation"

    def __init__(self, message: str, text: Optional[str] = None):
        super().__init__(message)
        self.text = text

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"error": self.code, "detail": str(self), "text": self.text}


class UnknownBookError(CitationError):
    """Raised when a book fragment matches no canonical name or alias."""

    code = "unknown_book"


class InvalidFormatError(CitationError):
    """Raised when a citation matches no recognized grammar."""

    code = "invalid_format"


class InvalidRangeError(InvalidFormatError):
    """
    Raised when a verse range cannot be honored.

    Either the range end precedes its start, or a bare range appeared
    in a passage with no earlier citation to inherit book and chapter from.
    """

    code = "invalid_range"


class CatalogError(Exception):
    """Raised when the book catalog cannot be loaded. Fatal at startup."""
    pass
