"""Data layer for the courtquote service: rate tables, sports and quotations."""

from courtquote.data.rate_store import RateTableStore
from courtquote.data.repository import QuotationRepository
from courtquote.data.seed import DEFAULT_RATE_TABLE, DEFAULT_RATE_TABLE_NAME
from courtquote.data.sports import SPORTS, SportSpec, get_sport

__all__ = [
    "DEFAULT_RATE_TABLE",
    "DEFAULT_RATE_TABLE_NAME",
    "SPORTS",
    "QuotationRepository",
    "RateTableStore",
    "SportSpec",
    "get_sport",
]
