"""
Custom exceptions for PDF Parser.

Every failure raised while parsing derives from :class:`PDFParseError` and
records the byte offset at which the failing production gave up, so callers
can report where a document went wrong.
"""

from typing import Optional


class PDFParseError(Exception):
    """Base exception for all PDF Parser errors."""

    def __init__(self, message: str = "", position: Optional[int] = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.position = position

    @property
    def default_message(self) -> str:
        return "An unknown PDF parse error occurred."

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at byte offset {self.position})"


class MalformedUtf8Error(PDFParseError):
    """Raised when a string, name or comment span is not valid UTF-8."""

    @property
    def default_message(self) -> str:
        return "Text span is not valid UTF-8."


class MalformedNumberError(PDFParseError):
    """Raised when a numeric literal has an invalid shape or does not fit its type."""

    @property
    def default_message(self) -> str:
        return "Malformed numeric literal."


class InvalidFixedWidthFieldError(PDFParseError):
    """Raised when a cross-reference field does not have its required digit count."""

    @property
    def default_message(self) -> str:
        return "Fixed-width field has the wrong number of digits."


class UnbalancedDelimiterError(PDFParseError):
    """Raised when bracket nesting never returns to zero."""

    @property
    def default_message(self) -> str:
        return "Unbalanced delimiter."


class InvalidCrossReferenceTableError(PDFParseError):
    """Raised when a cross-reference subsection does not hold its declared entry count."""

    @property
    def default_message(self) -> str:
        return "Invalid cross-reference table."


class InvalidObjectError(PDFParseError):
    """Raised when no object production matches the input."""

    @property
    def default_message(self) -> str:
        return "Invalid PDF object."


class GrammarMismatchError(PDFParseError):
    """Raised when an expected keyword, tag or byte is not found."""

    @property
    def default_message(self) -> str:
        return "Unexpected input."
