"""Enums for the courtquote domain models.

Catalog enums (subbase, flooring, fencing, lighting) name the keys of the
default rate table. Requirement models keep type fields as plain strings so
that a key missing from the rate table can still be reported.
"""

from enum import StrEnum


class QuotationStatus(StrEnum):
    """Lifecycle status of a quotation."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ConstructionType(StrEnum):
    """Whether courts are built to official or custom dimensions."""

    STANDARD = "standard"
    NON_STANDARD = "non-standard"


class DimensionUnit(StrEnum):
    METERS = "meters"
    FEET = "feet"


class Sport(StrEnum):
    """Sports offered in the intake wizard."""

    BASKETBALL = "basketball"
    BADMINTON = "badminton"
    BOX_CRICKET = "boxcricket"
    FOOTBALL = "football"
    TENNIS = "tennis"
    VOLLEYBALL = "volleyball"
    PICKLEBALL = "pickleball"


class SubbaseType(StrEnum):
    """Subbase constructions priced per square metre."""

    CONCRETE = "concrete"
    BITUMINOUS = "bituminous"
    WBM = "wbm"


class FlooringType(StrEnum):
    """Playing surfaces priced per square metre."""

    SYNTHETIC = "synthetic"
    ACRYLIC = "acrylic"
    PVC = "pvc"
    WOODEN = "wooden"
    ARTIFICIAL_GRASS = "artificial_grass"
    RUBBER = "rubber"


class FencingType(StrEnum):
    """Perimeter fencing priced per running metre."""

    CHAINLINK = "chainlink"
    WELD_MESH = "weld_mesh"
    GARRISON = "garrison"


class LightType(StrEnum):
    """Floodlight fixtures priced per fixture."""

    STANDARD = "standard"
    LED = "led"
    PREMIUM_LED = "premium_led"
