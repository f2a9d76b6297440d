"""Project and court requirement models submitted through the intake wizard.

All models here are lenient: malformed optional data is coerced rather
than rejected (see :mod:`courtquote.models.coercion`), so pricing can run
on whatever partial input a client managed to submit.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from courtquote.models.coercion import (
    coerce_flag,
    coerce_key,
    coerce_list,
    coerce_mapping,
    coerce_non_negative,
    coerce_number,
    coerce_optional_number,
)


class IntakeModel(BaseModel):
    """Base for camelCase intake payloads; unknown keys are preserved."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class Drainage(IntakeModel):
    required: bool = False

    @field_validator("required", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        return coerce_flag(v)


class Subbase(IntakeModel):
    type: str | None = None
    edgewall: bool = False
    drainage: Drainage = Field(default_factory=Drainage)

    @field_validator("type", mode="before")
    @classmethod
    def _key(cls, v: Any) -> str | None:
        return coerce_key(v)

    @field_validator("edgewall", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        return coerce_flag(v)

    @field_validator("drainage", mode="before")
    @classmethod
    def _record(cls, v: Any) -> dict[str, Any]:
        return coerce_mapping(v)


class Flooring(IntakeModel):
    type: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _key(cls, v: Any) -> str | None:
        return coerce_key(v)


class Fencing(IntakeModel):
    required: bool = False
    type: str | None = None

    @field_validator("required", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        return coerce_flag(v)

    @field_validator("type", mode="before")
    @classmethod
    def _key(cls, v: Any) -> str | None:
        return coerce_key(v)


class Lighting(IntakeModel):
    required: bool = False
    type: str | None = None
    lights_per_pole: float | None = None

    @field_validator("required", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        return coerce_flag(v)

    @field_validator("type", mode="before")
    @classmethod
    def _key(cls, v: Any) -> str | None:
        return coerce_key(v)

    @field_validator("lights_per_pole", mode="before")
    @classmethod
    def _number(cls, v: Any) -> float | None:
        return coerce_optional_number(v)


class EquipmentItem(IntakeModel):
    """One equipment line; ``total_cost`` is what gets priced."""

    id: str | None = None
    name: str | None = None
    quantity: float = 0.0
    unit_cost: float | None = None
    total_cost: float | None = None

    @field_validator("id", "name", mode="before")
    @classmethod
    def _key(cls, v: Any) -> str | None:
        return coerce_key(v)

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> float:
        return coerce_non_negative(v)

    @field_validator("unit_cost", "total_cost", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> float | None:
        amount = coerce_optional_number(v)
        if amount is None:
            return None
        return max(amount, 0.0)


class CourtRequirement(IntakeModel):
    """Construction spec for one physical court.

    ``area`` and ``perimeter`` override the project dimensions only when
    they are positive.
    """

    area: float = 0.0
    perimeter: float = 0.0
    sport: str | None = None
    court_number: int | None = None
    subbase: Subbase = Field(default_factory=Subbase)
    flooring: Flooring = Field(default_factory=Flooring)
    fencing: Fencing = Field(default_factory=Fencing)
    lighting: Lighting = Field(default_factory=Lighting)
    equipment: list[EquipmentItem] = Field(default_factory=list)

    @field_validator("area", "perimeter", mode="before")
    @classmethod
    def _dimension(cls, v: Any) -> float:
        return coerce_number(v)

    @field_validator("sport", mode="before")
    @classmethod
    def _key(cls, v: Any) -> str | None:
        return coerce_key(v)

    @field_validator("court_number", mode="before")
    @classmethod
    def _court_number(cls, v: Any) -> int | None:
        number = coerce_optional_number(v)
        return int(number) if number is not None else None

    @field_validator("subbase", "flooring", "fencing", "lighting", mode="before")
    @classmethod
    def _record(cls, v: Any) -> dict[str, Any]:
        return coerce_mapping(v)

    @field_validator("equipment", mode="before")
    @classmethod
    def _items(cls, v: Any) -> list[Any]:
        return [
            item for item in coerce_list(v)
            if isinstance(item, (Mapping, EquipmentItem))
        ]

    def label(self, position: int = 1) -> str:
        """Human-readable court label, e.g. ``BASKETBALL - Court 2``.

        *position* is the 1-based place of the court among the submitted
        courts; it numbers courts that carry no ``court_number``.
        """
        sport = (self.sport or "court").replace("-", " ").upper()
        return f"{sport} - Court {self.court_number or position}"


class Requirements(CourtRequirement):
    """Requirements for a whole quotation.

    Either the flattened single-court fields inherited from
    :class:`CourtRequirement` are used, or, when ``court_requirements``
    is non-empty, every court entry is priced and the flattened fields
    are ignored.
    """

    court_requirements: dict[str, CourtRequirement | None] = Field(default_factory=dict)

    @field_validator("court_requirements", mode="before")
    @classmethod
    def _courts(cls, v: Any) -> dict[str, Any]:
        return {
            str(key): (court if isinstance(court, (Mapping, CourtRequirement)) else None)
            for key, court in coerce_mapping(v).items()
        }

    @property
    def is_multi_court(self) -> bool:
        return bool(self.court_requirements)

    def courts(self) -> list[tuple[str, CourtRequirement]]:
        """Non-null court entries in submission order."""
        return [
            (key, court)
            for key, court in self.court_requirements.items()
            if court is not None
        ]


class SportSelection(IntakeModel):
    sport: str | None = None
    quantity: int = 1

    @field_validator("sport", mode="before")
    @classmethod
    def _key(cls, v: Any) -> str | None:
        return coerce_key(v)

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v: Any) -> int:
        return max(int(coerce_number(v)), 1)


class ProjectInfo(IntakeModel):
    """Project-level metadata; ``area`` (m²) and ``perimeter`` (m) are the
    fallback dimensions for every court."""

    area: float = 0.0
    perimeter: float = 0.0
    sport: str | None = None
    sports: list[SportSelection] = Field(default_factory=list)
    construction_type: str | None = None
    unit: str | None = None
    length: float = 0.0
    width: float = 0.0

    @field_validator("area", "perimeter", "length", "width", mode="before")
    @classmethod
    def _dimension(cls, v: Any) -> float:
        return coerce_non_negative(v)

    @field_validator("sport", "construction_type", "unit", mode="before")
    @classmethod
    def _key(cls, v: Any) -> str | None:
        return coerce_key(v)

    @field_validator("sports", mode="before")
    @classmethod
    def _sports(cls, v: Any) -> list[Any]:
        return [
            item for item in coerce_list(v)
            if isinstance(item, (Mapping, SportSelection))
        ]

    @property
    def sport_names(self) -> str:
        """Comma-separated display names of the selected sports."""
        names = [
            s.sport.replace("-", " ").upper() for s in self.sports if s.sport
        ]
        if names:
            return ", ".join(names)
        if self.sport:
            return self.sport.replace("-", " ").upper()
        return "SPORTS COURT"
