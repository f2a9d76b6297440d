"""Domain models for the courtquote service."""

from courtquote.models.enums import (
    ConstructionType,
    DimensionUnit,
    FencingType,
    FlooringType,
    LightType,
    QuotationStatus,
    Sport,
    SubbaseType,
)
from courtquote.models.pricing import (
    BUCKET_FIELDS,
    CourtPricing,
    PricingBreakdown,
    PricingIssue,
    PricingOverride,
)
from courtquote.models.quotation import (
    ApprovalOutcome,
    ClientInfo,
    DashboardStats,
    Quotation,
    QuotationEdit,
    QuotationPage,
    QuotationSubmission,
)
from courtquote.models.rate_table import RateTable
from courtquote.models.requirements import (
    CourtRequirement,
    Drainage,
    EquipmentItem,
    Fencing,
    Flooring,
    Lighting,
    ProjectInfo,
    Requirements,
    SportSelection,
    Subbase,
)

__all__ = [
    "BUCKET_FIELDS",
    "ApprovalOutcome",
    "ClientInfo",
    "ConstructionType",
    "CourtPricing",
    "CourtRequirement",
    "DashboardStats",
    "DimensionUnit",
    "Drainage",
    "EquipmentItem",
    "Fencing",
    "FencingType",
    "Flooring",
    "FlooringType",
    "LightType",
    "Lighting",
    "PricingBreakdown",
    "PricingIssue",
    "PricingOverride",
    "ProjectInfo",
    "Quotation",
    "QuotationEdit",
    "QuotationPage",
    "QuotationStatus",
    "QuotationSubmission",
    "RateTable",
    "Requirements",
    "Sport",
    "SportSelection",
    "Subbase",
    "SubbaseType",
]
