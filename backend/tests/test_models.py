"""Tests for the intake, rate table and pricing models."""

from __future__ import annotations

import math
from typing import Any

import pytest
from pydantic import ValidationError

from courtquote.models.coercion import (
    coerce_flag,
    coerce_key,
    coerce_mapping,
    coerce_number,
    coerce_optional_number,
)
from courtquote.models.enums import LightType, QuotationStatus
from courtquote.models.pricing import PricingBreakdown, PricingOverride
from courtquote.models.quotation import ClientInfo, QuotationSubmission
from courtquote.models.rate_table import RateTable
from courtquote.models.requirements import (
    CourtRequirement,
    ProjectInfo,
    Requirements,
)

# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


class TestCoercion:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (12, 12.0),
            (3.5, 3.5),
            (" 42 ", 42.0),
            ("abc", 0.0),
            (None, 0.0),
            (True, 0.0),
            (math.nan, 0.0),
            (math.inf, 0.0),
            ([1], 0.0),
        ],
    )
    def test_coerce_number(self, value: Any, expected: float) -> None:
        assert coerce_number(value) == expected

    def test_optional_number_distinguishes_zero_from_garbage(self) -> None:
        assert coerce_optional_number("0") == 0.0
        assert coerce_optional_number(0) == 0.0
        assert coerce_optional_number("x") is None
        assert coerce_optional_number(None) is None
        assert coerce_optional_number(False) is None

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, True), ("true", True), (" TRUE ", True), (1, False), ("yes", False), (None, False)],
    )
    def test_coerce_flag(self, value: Any, expected: bool) -> None:
        assert coerce_flag(value) is expected

    def test_coerce_key(self) -> None:
        assert coerce_key(" acrylic ") == "acrylic"
        assert coerce_key("   ") is None
        assert coerce_key(5) is None

    def test_coerce_mapping_copies(self) -> None:
        source = {"a": 1}
        copied = coerce_mapping(source)
        copied["b"] = 2
        assert source == {"a": 1}
        assert coerce_mapping("nope") == {}


# ---------------------------------------------------------------------------
# Requirements
# ---------------------------------------------------------------------------


class TestRequirements:
    def test_camel_case_payload(self) -> None:
        reqs = Requirements.model_validate(
            {
                "subbase": {"type": "concrete", "edgewall": True, "drainage": {"required": True}},
                "lighting": {"required": True, "type": "led", "lightsPerPole": "4"},
                "courtRequirements": {"basketball-1": {"sport": "basketball", "courtNumber": 1}},
            }
        )
        assert reqs.subbase.drainage.required is True
        assert reqs.lighting.lights_per_pole == 4.0
        assert reqs.is_multi_court
        assert reqs.courts()[0][1].label() == "BASKETBALL - Court 1"

    def test_malformed_sections_become_defaults(self) -> None:
        court = CourtRequirement.model_validate(
            {"subbase": "concrete", "flooring": None, "equipment": "posts", "area": "big"}
        )
        assert court.subbase.type is None
        assert court.flooring.type is None
        assert court.equipment == []
        assert court.area == 0.0

    def test_unknown_keys_are_preserved(self) -> None:
        reqs = Requirements.model_validate({"flooring": {"type": "acrylic", "color": "blue"}})
        dumped = reqs.model_dump(by_alias=True)
        assert dumped["flooring"]["color"] == "blue"

    def test_empty_court_mapping_is_single_court(self) -> None:
        assert not Requirements.model_validate({"courtRequirements": {}}).is_multi_court
        assert not Requirements.model_validate({"courtRequirements": None}).is_multi_court

    def test_null_court_entries_are_skipped(self) -> None:
        reqs = Requirements.model_validate(
            {"courtRequirements": {"a": None, "b": {"sport": "tennis"}}}
        )
        assert reqs.is_multi_court
        assert [key for key, _ in reqs.courts()] == ["b"]

    def test_equipment_amounts_clamped(self) -> None:
        court = CourtRequirement.model_validate(
            {"equipment": [{"id": "net", "quantity": -2, "totalCost": -10}]}
        )
        assert court.equipment[0].quantity == 0.0
        assert court.equipment[0].total_cost == 0.0


class TestProjectInfo:
    def test_negative_dimensions_clamped(self) -> None:
        project = ProjectInfo.model_validate({"area": -5, "perimeter": "12.5"})
        assert project.area == 0.0
        assert project.perimeter == 12.5

    def test_sport_names(self) -> None:
        project = ProjectInfo.model_validate(
            {"sports": [{"sport": "basketball", "quantity": 2}, {"sport": "box-cricket"}]}
        )
        assert project.sport_names == "BASKETBALL, BOX CRICKET"
        assert project.sports[1].quantity == 1
        assert ProjectInfo(sport="tennis").sport_names == "TENNIS"
        assert ProjectInfo().sport_names == "SPORTS COURT"


class TestSubmission:
    def test_client_info_stripped(self) -> None:
        client = ClientInfo.model_validate({"name": "  Asha  ", "email": None, "phone": 98765})
        assert client.name == "Asha"
        assert client.email == ""
        assert client.phone == "98765"

    def test_null_sections_default(self) -> None:
        submission = QuotationSubmission.model_validate(
            {"clientInfo": None, "projectInfo": None, "requirements": None}
        )
        assert submission.requirements.court_requirements == {}


# ---------------------------------------------------------------------------
# Rate table
# ---------------------------------------------------------------------------


class TestRateTable:
    def test_requires_standard_lighting(self) -> None:
        with pytest.raises(ValidationError, match="standard"):
            RateTable(lighting={"led": 9000.0})

    def test_rejects_negative_rates(self) -> None:
        with pytest.raises(ValidationError, match="non-negative"):
            RateTable(lighting={"standard": 1.0}, flooring={"acrylic": -1.0})
        with pytest.raises(ValidationError):
            RateTable(lighting={"standard": 1.0}, edgewall=-5)

    @pytest.mark.parametrize("rate", [math.inf, math.nan, "Infinity"])
    def test_rejects_non_finite_rates(self, rate: Any) -> None:
        with pytest.raises(ValidationError):
            RateTable(lighting={"standard": 1.0}, subbase={"concrete": rate})
        with pytest.raises(ValidationError):
            RateTable(lighting={"standard": 1.0}, drainage=rate)

    def test_lookups(self) -> None:
        table = RateTable(lighting={"standard": 100.0, "led": 150.0}, subbase={"wbm": 10.0})
        assert table.subbase_rate("wbm") == 10.0
        assert table.subbase_rate("concrete") is None
        assert table.lighting_rate("led") == (150.0, True)
        assert table.lighting_rate("halogen") == (100.0, False)
        assert table.lighting_rate(None) == (100.0, False)
        assert table.lighting_rate(LightType.STANDARD) == (100.0, True)

    def test_is_frozen(self) -> None:
        table = RateTable(lighting={"standard": 100.0})
        with pytest.raises(ValidationError):
            table.edgewall = 5.0  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------


class TestPricingModels:
    def test_breakdown_serializes_camel_case(self) -> None:
        dumped = PricingBreakdown(subbase_cost=10, subtotal=10).model_dump(by_alias=True)
        assert dumped["subbaseCost"] == 10
        assert "gstAmount" in dumped
        assert "grandTotal" in dumped

    def test_override_merges_with_current(self) -> None:
        current = PricingBreakdown(subbase_cost=100, flooring_cost=200)
        override = PricingOverride.model_validate({"flooringCost": "350", "drainageCost": "x"})
        merged = override.merged_with(current)
        assert merged["subbase_cost"] == 100
        assert merged["flooring_cost"] == 350.0
        assert merged["drainage_cost"] == 0.0
        assert merged["lighting_cost"] == 0

    def test_override_without_current(self) -> None:
        merged = PricingOverride(edgewall_cost=5).merged_with(None)
        assert merged["edgewall_cost"] == 5
        assert len(merged) == 7

    def test_status_values(self) -> None:
        assert [s.value for s in QuotationStatus] == ["pending", "approved", "rejected"]
