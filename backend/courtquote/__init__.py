"""Court construction quotation service.

Usage::

    from courtquote import compute_pricing, DEFAULT_RATE_TABLE

    breakdown = compute_pricing(
        DEFAULT_RATE_TABLE,
        {"area": 420, "perimeter": 86},
        {"subbase": {"type": "concrete"}, "flooring": {"type": "acrylic"}},
    )
    breakdown.grand_total
"""

from courtquote.data.seed import DEFAULT_RATE_TABLE
from courtquote.engine import PricingEngine, compute_pricing
from courtquote.exceptions import (
    ConcurrentModificationError,
    ConfigurationError,
    CourtQuoteError,
    DocumentRenderingError,
    QuotationNotFoundError,
    QuotationStateError,
    QuotationValidationError,
)
from courtquote.factory import create_default_store, create_service
from courtquote.models.enums import QuotationStatus
from courtquote.models.pricing import CourtPricing, PricingBreakdown, PricingIssue
from courtquote.models.quotation import Quotation, QuotationSubmission
from courtquote.models.rate_table import RateTable
from courtquote.models.requirements import CourtRequirement, ProjectInfo, Requirements
from courtquote.settings import Settings

__all__ = [
    "DEFAULT_RATE_TABLE",
    "ConcurrentModificationError",
    "ConfigurationError",
    "CourtPricing",
    "CourtQuoteError",
    "CourtRequirement",
    "DocumentRenderingError",
    "PricingBreakdown",
    "PricingEngine",
    "PricingIssue",
    "ProjectInfo",
    "Quotation",
    "QuotationNotFoundError",
    "QuotationStateError",
    "QuotationStatus",
    "QuotationSubmission",
    "QuotationValidationError",
    "RateTable",
    "Requirements",
    "Settings",
    "compute_pricing",
    "create_default_store",
    "create_service",
]
