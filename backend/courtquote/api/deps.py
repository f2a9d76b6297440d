"""Dependency injection for FastAPI endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from courtquote.factory import create_service

if TYPE_CHECKING:
    from courtquote.services.quotations import QuotationService
    from courtquote.settings import Settings

logger = logging.getLogger(__name__)


def create_service_from_settings(settings: Settings) -> QuotationService:
    """Create a QuotationService from environment-derived settings.

    Email delivery is optional: without ``SMTP_HOST`` approvals still
    succeed and report that the PDF was not sent.
    """
    if not settings.smtp_configured:
        logger.warning("SMTP_HOST is not set; approved quotations will not be emailed")
    service = create_service(settings)
    logger.info(
        "Quotation service ready (rate table '%s', numbering prefix '%s')",
        settings.rate_table_name,
        settings.quotation_prefix,
    )
    return service
