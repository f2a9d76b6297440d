"""Lenient coercion helpers shared by the requirement models.

Client input arrives from a multi-step form and is frequently partial.
Every numeric field goes through :func:`coerce_number` so that missing or
non-numeric values become ``0`` instead of validation errors.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def coerce_number(value: Any) -> float:
    """Return *value* as a finite float, or ``0.0`` when it is not numeric.

    Booleans are not numbers here, and strings are parsed after stripping.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_non_negative(value: Any) -> float:
    """Like :func:`coerce_number` but clamps negatives to ``0.0``."""
    return max(coerce_number(value), 0.0)


def coerce_optional_number(value: Any) -> float | None:
    """Return a float, or ``None`` when *value* is missing or non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    number = coerce_number(value)
    if number == 0.0 and not _looks_like_zero(value):
        return None
    return number


def coerce_flag(value: Any) -> bool:
    """Only a literal ``True`` (or the string ``"true"``) switches a flag on."""
    if value is True:
        return True
    return isinstance(value, str) and value.strip().lower() == "true"


def coerce_key(value: Any) -> str | None:
    """Normalize a catalog key; blank or non-string values mean "omitted"."""
    if not isinstance(value, str):
        return None
    key = value.strip()
    return key or None


def coerce_mapping(value: Any) -> dict[str, Any]:
    """Return a shallow dict copy of *value*, or an empty dict."""
    if isinstance(value, Mapping):
        return dict(value)
    if hasattr(value, "model_dump"):
        return value.model_dump(by_alias=True)
    return {}


def coerce_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _looks_like_zero(value: Any) -> bool:
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, str):
        try:
            return float(value.strip()) == 0.0
        except ValueError:
            return False
    return False
