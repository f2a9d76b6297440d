"""Standard court dimensions for the sports offered in the intake wizard."""

from __future__ import annotations

from pydantic import BaseModel

from courtquote.models.enums import Sport


class SportSpec(BaseModel):
    """Official playing dimensions of one court, in metres."""

    id: Sport
    name: str
    length_m: float
    width_m: float

    @property
    def area(self) -> float:
        return round(self.length_m * self.width_m, 2)

    @property
    def perimeter(self) -> float:
        return round(2 * (self.length_m + self.width_m), 2)

    @property
    def standard_size(self) -> str:
        return f"{self.length_m:g}m × {self.width_m:g}m"


SPORTS: list[SportSpec] = [
    SportSpec(id=Sport.BASKETBALL, name="Basketball", length_m=28.0, width_m=15.0),
    SportSpec(id=Sport.BADMINTON, name="Badminton", length_m=13.4, width_m=6.1),
    SportSpec(id=Sport.BOX_CRICKET, name="Box Cricket", length_m=30.0, width_m=25.0),
    SportSpec(id=Sport.FOOTBALL, name="Football", length_m=105.0, width_m=68.0),
    SportSpec(id=Sport.TENNIS, name="Tennis", length_m=23.77, width_m=8.23),
    SportSpec(id=Sport.VOLLEYBALL, name="Volleyball", length_m=18.0, width_m=9.0),
    SportSpec(id=Sport.PICKLEBALL, name="Pickleball", length_m=13.4, width_m=6.1),
]

_SPORTS_BY_ID: dict[str, SportSpec] = {spec.id.value: spec for spec in SPORTS}


def get_sport(sport_id: str | None) -> SportSpec | None:
    """Look up a sport by id (case-insensitive); ``None`` if unknown."""
    if not sport_id:
        return None
    return _SPORTS_BY_ID.get(sport_id.strip().lower())


def sports_config() -> list[dict[str, object]]:
    """Sports catalog as served to the intake wizard."""
    return [
        {
            "id": spec.id.value,
            "name": spec.name,
            "standardSize": spec.standard_size,
            "area": spec.area,
            "perimeter": spec.perimeter,
        }
        for spec in SPORTS
    ]
