"""Services around the pricing engine: intake, quotations, documents, email."""

from courtquote.services.notifier import EmailNotifier, NotificationResult
from courtquote.services.quotations import QuotationService
from courtquote.services.renderer import QuotationRenderer

__all__ = [
    "EmailNotifier",
    "NotificationResult",
    "QuotationRenderer",
    "QuotationService",
]
