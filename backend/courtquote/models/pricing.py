"""Pricing output models produced by the pricing engine."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from courtquote.models.coercion import coerce_non_negative

# Bucket field names, in the order they appear on a quotation.
BUCKET_FIELDS: tuple[str, ...] = (
    "subbase_cost",
    "edgewall_cost",
    "drainage_cost",
    "fencing_cost",
    "flooring_cost",
    "equipment_cost",
    "lighting_cost",
)


class _PricingModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PricingIssue(_PricingModel):
    """A type key that was supplied but has no rate in the rate table."""

    court_key: str | None = None
    category: str
    type: str
    message: str


class CourtPricing(_PricingModel):
    """Per-court detail for display; totals live on the breakdown."""

    court_key: str | None = None
    label: str
    area: float
    perimeter: float
    drainage_units: int = 0
    lighting_poles: int = 0
    lights_per_pole: float = 0.0
    subbase_cost: int = 0
    edgewall_cost: int = 0
    drainage_cost: int = 0
    fencing_cost: int = 0
    flooring_cost: int = 0
    equipment_cost: int = 0
    lighting_cost: int = 0


class PricingBreakdown(_PricingModel):
    """Itemized cost breakdown in whole rupees.

    ``subtotal`` is the sum of the seven buckets, ``gst_amount`` is 18% of
    the subtotal rounded half-up, and ``grand_total`` is their sum.
    """

    subbase_cost: int = Field(default=0, ge=0)
    edgewall_cost: int = Field(default=0, ge=0)
    drainage_cost: int = Field(default=0, ge=0)
    fencing_cost: int = Field(default=0, ge=0)
    flooring_cost: int = Field(default=0, ge=0)
    equipment_cost: int = Field(default=0, ge=0)
    lighting_cost: int = Field(default=0, ge=0)
    subtotal: int = Field(default=0, ge=0)
    gst_amount: int = Field(default=0, ge=0)
    grand_total: int = Field(default=0, ge=0)
    courts: list[CourtPricing] = Field(default_factory=list)
    issues: list[PricingIssue] = Field(default_factory=list)

    def buckets(self) -> dict[str, int]:
        """The seven bucket amounts keyed by field name."""
        return {name: getattr(self, name) for name in BUCKET_FIELDS}


class PricingOverride(_PricingModel):
    """Admin-submitted bucket amounts for a manual pricing edit.

    Only buckets are accepted; totals are always recomputed. Omitted
    buckets keep their stored value, non-numeric ones become ``0``.
    """

    subbase_cost: float | None = None
    edgewall_cost: float | None = None
    drainage_cost: float | None = None
    fencing_cost: float | None = None
    flooring_cost: float | None = None
    equipment_cost: float | None = None
    lighting_cost: float | None = None

    @field_validator(*BUCKET_FIELDS, mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float | None:
        if v is None:
            return None
        return coerce_non_negative(v)

    def merged_with(self, current: PricingBreakdown | None) -> dict[str, float]:
        base: dict[str, float] = dict(current.buckets()) if current else {}
        for name in BUCKET_FIELDS:
            value = getattr(self, name)
            if value is not None:
                base[name] = value
            base.setdefault(name, 0.0)
        return base
