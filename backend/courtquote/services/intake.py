"""Intake validation and normalization for client quotation submissions.

Runs before pricing: rejects submissions with missing required fields
(with a message naming the field), derives project dimensions the wizard
left implicit, and prices equipment lines that arrived without a total.
"""

from __future__ import annotations

import logging
from typing import Any

from courtquote.data.sports import get_sport
from courtquote.exceptions import QuotationValidationError
from courtquote.models.enums import ConstructionType, DimensionUnit
from courtquote.models.quotation import QuotationSubmission
from courtquote.models.rate_table import RateTable
from courtquote.models.requirements import CourtRequirement, ProjectInfo, Requirements

logger = logging.getLogger(__name__)

FEET_TO_METERS = 0.3048


def validate_submission(submission: QuotationSubmission) -> None:
    """Check the fields a quotation cannot be produced without.

    Raises:
        QuotationValidationError: For the first missing field found.
    """
    client = submission.client_info
    if not client.name:
        raise QuotationValidationError("clientInfo.name", "Client name is required")
    if not client.email:
        raise QuotationValidationError("clientInfo.email", "Client email is required")

    requirements = submission.requirements
    if requirements.is_multi_court:
        for position, (key, court) in enumerate(requirements.courts(), start=1):
            court_name = f"{court.sport or 'Unknown'} Court {court.court_number or position}"
            prefix = f"requirements.courtRequirements.{key}"
            if court.subbase.type is None:
                raise QuotationValidationError(
                    f"{prefix}.subbase.type",
                    f"Please select subbase type for {court_name}",
                )
            if court.flooring.type is None:
                raise QuotationValidationError(
                    f"{prefix}.flooring.type",
                    f"Please select flooring type for {court_name}",
                )
        return

    if requirements.subbase.type is None:
        raise QuotationValidationError(
            "requirements.subbase.type",
            "Please select subbase type in the requirements section",
        )
    if requirements.flooring.type is None:
        raise QuotationValidationError(
            "requirements.flooring.type",
            "Please select flooring type in the requirements section",
        )


def normalize_submission(
    submission: QuotationSubmission, rate_table: RateTable
) -> QuotationSubmission:
    """Return a copy of *submission* with derived dimensions and equipment totals."""
    project = derive_project_dimensions(submission.project_info)
    standard = project.construction_type == ConstructionType.STANDARD

    data = submission.requirements.model_dump(by_alias=True)
    _fill_equipment_costs(data, rate_table)
    for court in data.get("courtRequirements", {}).values():
        if court is None:
            continue
        if standard:
            _fill_standard_court_size(court)
        _fill_equipment_costs(court, rate_table)

    return submission.model_copy(
        update={
            "project_info": project,
            "requirements": Requirements.model_validate(data),
        }
    )


def derive_project_dimensions(project: ProjectInfo) -> ProjectInfo:
    """Fill a missing project area/perimeter.

    Explicit positive values always win. Otherwise length × width is used
    (converted from feet when needed), and for standard construction the
    official sizes of the selected sports, multiplied by their quantities.
    """
    if project.area > 0 and project.perimeter > 0:
        return project.model_copy(deep=True)

    area = perimeter = 0.0
    if project.length > 0 and project.width > 0:
        factor = FEET_TO_METERS if project.unit == DimensionUnit.FEET else 1.0
        length = project.length * factor
        width = project.width * factor
        area = length * width
        perimeter = 2 * (length + width)
    elif project.construction_type == ConstructionType.STANDARD:
        selections = [(s.sport, s.quantity) for s in project.sports]
        if not selections and project.sport:
            selections = [(project.sport, 1)]
        for sport_id, quantity in selections:
            spec = get_sport(sport_id)
            if spec is None:
                logger.warning("No standard size for sport '%s'", sport_id)
                continue
            area += spec.area * quantity
            perimeter += spec.perimeter * quantity

    return project.model_copy(
        update={
            "area": project.area if project.area > 0 else round(area, 2),
            "perimeter": project.perimeter if project.perimeter > 0 else round(perimeter, 2),
        },
        deep=True,
    )


def _fill_standard_court_size(court: dict[str, Any]) -> None:
    parsed = CourtRequirement.model_validate(court)
    spec = get_sport(parsed.sport)
    if spec is None:
        return
    if parsed.area <= 0:
        court["area"] = spec.area
    if parsed.perimeter <= 0:
        court["perimeter"] = spec.perimeter


def _fill_equipment_costs(record: dict[str, Any], rate_table: RateTable) -> None:
    items = record.get("equipment")
    if not isinstance(items, list):
        return
    for item in items:
        if item.get("totalCost") is not None or not item.get("id"):
            continue
        unit_cost = item.get("unitCost")
        if unit_cost is None:
            unit_cost = rate_table.equipment_unit_cost(item["id"])
        if unit_cost is None:
            logger.warning("No equipment rate for '%s'; line left unpriced", item["id"])
            continue
        item["unitCost"] = unit_cost
        item["totalCost"] = unit_cost * (item.get("quantity") or 0.0)
