"""Pricing engine — turns court requirements and a rate table into a quotation price.

The engine is a pure computation:

1. **Dispatch** — a non-empty ``courtRequirements`` mapping prices every
   court entry; otherwise the flattened single-court fields are priced.
2. **Dimension resolution** — a court's own positive area/perimeter win,
   the project's are the fallback.
3. **Bucket pricing** — subbase and flooring by area, edgewall and fencing
   by perimeter, drainage per 4.5 m unit, lighting per fixture on poles
   spaced 9.14 m apart, equipment as the sum of pre-priced lines.
4. **Aggregation** — buckets are accumulated across courts unrounded, then
   rounded half-up once; subtotal, 18% GST and grand total follow.

Inputs are parsed into fresh models, never mutated, so repeated calls with
the same inputs give identical breakdowns.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import BaseModel, ValidationError

from courtquote.exceptions import ConfigurationError
from courtquote.models.coercion import coerce_number
from courtquote.models.pricing import (
    BUCKET_FIELDS,
    CourtPricing,
    PricingBreakdown,
    PricingIssue,
)
from courtquote.models.rate_table import RateTable
from courtquote.models.requirements import CourtRequirement, ProjectInfo, Requirements

logger = logging.getLogger(__name__)

GST_RATE = Decimal("0.18")
DRAINAGE_SPAN_M = Decimal("4.5")
POLE_SPACING_M = Decimal("9.14")
DEFAULT_LIGHTS_PER_POLE = Decimal(2)

_ZERO = Decimal(0)


def _dec(value: float) -> Decimal:
    return Decimal(str(value))


def _round_money(value: Decimal) -> int:
    # to_integral_value is not bounded by the context precision, unlike quantize.
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def _ceil_div(numerator: Decimal, denominator: Decimal) -> int:
    return int((numerator / denominator).to_integral_value(rounding=ROUND_CEILING))


@dataclass
class _CourtResult:
    """Unrounded bucket amounts for one court."""

    key: str | None
    label: str
    area: Decimal
    perimeter: Decimal
    buckets: dict[str, Decimal] = field(
        default_factory=lambda: dict.fromkeys(BUCKET_FIELDS, _ZERO)
    )
    drainage_units: int = 0
    lighting_poles: int = 0
    lights_per_pole: Decimal = _ZERO


class PricingEngine:
    """Stateless pricing engine shared by every quotation flow.

    Example::

        engine = PricingEngine()
        breakdown = engine.compute(rate_table, {"area": 100, "perimeter": 40}, requirements)
        breakdown.grand_total
    """

    def compute(
        self,
        rate_table: RateTable | Mapping[str, Any] | None,
        project: ProjectInfo | Mapping[str, Any] | None,
        requirements: Requirements | Mapping[str, Any] | None,
    ) -> PricingBreakdown:
        """Price *requirements* against *rate_table*.

        Args:
            rate_table: The rate table snapshot to price with.
            project: Project metadata; its area/perimeter are the fallback
                dimensions for every court.
            requirements: Single-court or multi-court requirements.

        Returns:
            A new PricingBreakdown with per-court detail and any unpriced
            type keys listed under ``issues``.

        Raises:
            ConfigurationError: If *rate_table* is missing or invalid.
        """
        rates = self._resolve_rate_table(rate_table)
        project_info = _parse(ProjectInfo, project)
        reqs = _parse(Requirements, requirements)

        if reqs.is_multi_court:
            entries: list[tuple[str | None, str, CourtRequirement]] = [
                (key, court.label(position), court)
                for position, (key, court) in enumerate(reqs.courts(), start=1)
            ]
            logger.debug("Pricing %d court(s)", len(entries))
        else:
            entries = [(None, "Single court", reqs)]

        issues: list[PricingIssue] = []
        results = [
            self._price_court(rates, project_info, key, label, court, issues)
            for key, label, court in entries
        ]

        totals = dict.fromkeys(BUCKET_FIELDS, _ZERO)
        for result in results:
            for name, amount in result.buckets.items():
                totals[name] += amount

        breakdown = self.apply_totals(totals)
        courts = [self._court_detail(result) for result in results]
        logger.info(
            "Priced %d court(s) with rate table '%s': subtotal=%d gst=%d total=%d",
            len(results),
            rates.name,
            breakdown.subtotal,
            breakdown.gst_amount,
            breakdown.grand_total,
        )
        return breakdown.model_copy(update={"courts": courts, "issues": issues})

    def apply_totals(self, buckets: Mapping[str, Any]) -> PricingBreakdown:
        """Build a breakdown from seven bucket amounts.

        Each bucket is rounded half-up to whole rupees; subtotal is the sum
        of the rounded buckets, GST is 18% of it rounded half-up.
        """
        rounded = {
            name: max(_round_money(_dec_any(buckets.get(name))), 0)
            for name in BUCKET_FIELDS
        }
        subtotal = sum(rounded.values())
        gst_amount = _round_money(Decimal(subtotal) * GST_RATE)
        return PricingBreakdown(
            **rounded,
            subtotal=subtotal,
            gst_amount=gst_amount,
            grand_total=subtotal + gst_amount,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_rate_table(rate_table: RateTable | Mapping[str, Any] | None) -> RateTable:
        if rate_table is None:
            msg = "No rate table available; refusing to price without rates"
            raise ConfigurationError(msg)
        if isinstance(rate_table, RateTable):
            return rate_table
        if not isinstance(rate_table, Mapping):
            msg = f"Rate table must be a RateTable or mapping, got {type(rate_table).__name__}"
            raise ConfigurationError(msg)
        try:
            return RateTable.model_validate(rate_table)
        except ValidationError as exc:
            msg = f"Invalid rate table: {exc}"
            raise ConfigurationError(msg) from exc

    def _price_court(
        self,
        rates: RateTable,
        project: ProjectInfo,
        key: str | None,
        label: str,
        court: CourtRequirement,
        issues: list[PricingIssue],
    ) -> _CourtResult:
        area = _dec(court.area if court.area > 0 else project.area)
        perimeter = _dec(court.perimeter if court.perimeter > 0 else project.perimeter)
        result = _CourtResult(key=key, label=label, area=area, perimeter=perimeter)
        buckets = result.buckets

        def unpriced(category: str, type_key: str, note: str = "") -> None:
            message = f"No {category} rate for type '{type_key}'{note}"
            logger.warning("%s (court=%s, rate table=%s)", message, key, rates.name)
            issues.append(
                PricingIssue(court_key=key, category=category, type=type_key, message=message)
            )

        subbase = court.subbase
        if subbase.type is not None:
            rate = rates.subbase_rate(subbase.type)
            if rate is None:
                unpriced("subbase", subbase.type)
            else:
                buckets["subbase_cost"] = area * _dec(rate)

        if subbase.edgewall:
            buckets["edgewall_cost"] = perimeter * _dec(rates.edgewall)

        if subbase.drainage.required:
            result.drainage_units = _ceil_div(perimeter, DRAINAGE_SPAN_M)
            buckets["drainage_cost"] = result.drainage_units * _dec(rates.drainage)

        fencing = court.fencing
        if fencing.required and fencing.type is not None:
            rate = rates.fencing_rate(fencing.type)
            if rate is None:
                unpriced("fencing", fencing.type)
            else:
                buckets["fencing_cost"] = perimeter * _dec(rate)

        flooring = court.flooring
        if flooring.type is not None:
            rate = rates.flooring_rate(flooring.type)
            if rate is None:
                unpriced("flooring", flooring.type)
            else:
                buckets["flooring_cost"] = area * _dec(rate)

        if court.equipment:
            buckets["equipment_cost"] = sum(
                (_dec(item.total_cost or 0.0) for item in court.equipment), _ZERO
            )

        lighting = court.lighting
        if lighting.required:
            unit_rate, exact = rates.lighting_rate(lighting.type)
            if lighting.type is not None and not exact:
                unpriced("lighting", lighting.type, "; used the standard rate")
            per_pole = lighting.lights_per_pole
            lights_per_pole = (
                _dec(per_pole) if per_pole is not None and per_pole > 0
                else DEFAULT_LIGHTS_PER_POLE
            )
            result.lighting_poles = _ceil_div(perimeter, POLE_SPACING_M)
            result.lights_per_pole = lights_per_pole
            buckets["lighting_cost"] = result.lighting_poles * lights_per_pole * _dec(unit_rate)

        for name, amount in buckets.items():
            if amount:
                logger.debug("%s %s: %s", label, name, amount)
        return result

    @staticmethod
    def _court_detail(result: _CourtResult) -> CourtPricing:
        return CourtPricing(
            court_key=result.key,
            label=result.label,
            area=float(result.area),
            perimeter=float(result.perimeter),
            drainage_units=result.drainage_units,
            lighting_poles=result.lighting_poles,
            lights_per_pole=float(result.lights_per_pole),
            **{name: _round_money(amount) for name, amount in result.buckets.items()},
        )


def _dec_any(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value if value.is_finite() else _ZERO
    return _dec(coerce_number(value))


def _parse(model: type[BaseModel], value: Any) -> Any:
    """Build a fresh, validated copy of *value* as *model*."""
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True)
    if not isinstance(value, Mapping):
        value = {}
    return model.model_validate(value)


_default_engine = PricingEngine()


def compute_pricing(
    rate_table: RateTable | Mapping[str, Any] | None,
    project: ProjectInfo | Mapping[str, Any] | None,
    requirements: Requirements | Mapping[str, Any] | None,
) -> PricingBreakdown:
    """Price *requirements* with the shared default engine."""
    return _default_engine.compute(rate_table, project, requirements)
