"""Custom exception hierarchy for the courtquote service."""

from __future__ import annotations


class CourtQuoteError(Exception):
    """Base exception for all courtquote errors."""


class ConfigurationError(CourtQuoteError):
    """Raised when the rate table is missing or cannot be resolved."""


class QuotationValidationError(CourtQuoteError):
    """Raised when a quotation submission fails field validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class QuotationNotFoundError(CourtQuoteError):
    """Raised when a quotation id does not exist."""


class QuotationStateError(CourtQuoteError):
    """Raised when a status transition is not allowed."""


class ConcurrentModificationError(CourtQuoteError):
    """Raised when a quotation changed between read and write."""


class DocumentRenderingError(CourtQuoteError):
    """Raised when PDF rendering fails."""
