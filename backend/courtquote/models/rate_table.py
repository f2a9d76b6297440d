"""Rate table model: the unit prices every quotation is priced from."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from courtquote.models.enums import LightType


class RateTable(BaseModel):
    """A named bundle of unit rates, in whole rupees.

    ``subbase`` and ``flooring`` are per square metre, ``edgewall`` and
    ``fencing`` per running metre, ``drainage`` per drainage unit (one per
    4.5 m of perimeter), ``lighting`` per fixture and ``equipment`` per
    piece. ``lighting`` must always carry a ``standard`` entry, which is
    the fallback for unlisted fixture types.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str = "default"
    subbase: dict[str, float] = Field(default_factory=dict)
    edgewall: float = Field(default=0.0, ge=0)
    drainage: float = Field(default=0.0, ge=0)
    fencing: dict[str, float] = Field(default_factory=dict)
    flooring: dict[str, float] = Field(default_factory=dict)
    lighting: dict[str, float] = Field(default_factory=dict)
    equipment: dict[str, float] = Field(default_factory=dict)

    @field_validator("subbase", "fencing", "flooring", "lighting", "equipment")
    @classmethod
    def rates_must_be_finite_and_non_negative(cls, v: dict[str, float]) -> dict[str, float]:
        invalid = sorted(key for key, rate in v.items() if not math.isfinite(rate) or rate < 0)
        if invalid:
            msg = f"Rates must be finite and non-negative, got invalid rates for {invalid}"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def lighting_has_standard_rate(self) -> RateTable:
        if LightType.STANDARD not in self.lighting:
            msg = "Lighting rates must include a 'standard' entry"
            raise ValueError(msg)
        return self

    def subbase_rate(self, subbase_type: str) -> float | None:
        return self.subbase.get(subbase_type)

    def fencing_rate(self, fencing_type: str) -> float | None:
        return self.fencing.get(fencing_type)

    def flooring_rate(self, flooring_type: str) -> float | None:
        return self.flooring.get(flooring_type)

    def lighting_rate(self, light_type: str | None) -> tuple[float, bool]:
        """Return ``(rate, exact)`` for a fixture type.

        Unlisted or omitted types resolve to the ``standard`` rate with
        ``exact=False``.
        """
        if light_type is not None and light_type in self.lighting:
            return self.lighting[light_type], True
        return self.lighting[LightType.STANDARD], False

    def equipment_unit_cost(self, equipment_id: str) -> float | None:
        return self.equipment.get(equipment_id)
