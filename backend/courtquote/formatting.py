"""Formatting helpers for quotation output.

Amounts are shown the way Indian clients read them: lakh/crore digit
grouping (e.g. '2,33,286' rather than '233,286').
"""

from __future__ import annotations


def format_indian_number(amount: float) -> str:
    """Group the integer part of *amount* in the Indian style.

    >>> format_indian_number(23328600)
    '2,33,28,600'
    """
    value = round(amount)
    sign = "-" if value < 0 else ""
    digits = str(abs(value))
    if len(digits) <= 3:
        return f"{sign}{digits}"
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return f"{sign}{','.join(groups)},{tail}"


def format_inr(amount: float) -> str:
    """Format a whole-rupee amount, e.g. '₹2,33,286'."""
    return f"₹{format_indian_number(amount)}"


def format_label(key: str | None, default: str = "Not specified") -> str:
    """Turn a catalog key like 'artificial_grass' into 'Artificial Grass'."""
    if not key:
        return default
    return key.replace("_", " ").replace("-", " ").title()
