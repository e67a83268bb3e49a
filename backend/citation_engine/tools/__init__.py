"""Statute retrieval operations built on the citation engine."""

from citation_engine.tools.currency import CurrencyResult, check_currency, normalize_as_of_date
from citation_engine.tools.provisions import ProvisionLookup, get_provision
from citation_engine.tools.search import search_legislation

__all__ = [
    "CurrencyResult",
    "ProvisionLookup",
    "check_currency",
    "get_provision",
    "normalize_as_of_date",
    "search_legislation",
]
