"""Citation and text normalization engine for Austrian (RIS) statutes."""

from citation_engine.citation.formatter import format_citation
from citation_engine.citation.parser import parse_citation
from citation_engine.citation.types import CitationKind, CitationStyle, ParsedCitation
from citation_engine.provisions.candidates import (
    ProvisionCandidateSet,
    build_provision_candidates,
)
from citation_engine.text.content_cleaner import clean_provision_content
from citation_engine.text.fts_query import FtsQueryVariants, build_fts_query_variants

__all__ = [
    # Citations
    "CitationKind",
    "CitationStyle",
    "ParsedCitation",
    "parse_citation",
    "format_citation",
    # Provisions and text
    "ProvisionCandidateSet",
    "build_provision_candidates",
    "clean_provision_content",
    "FtsQueryVariants",
    "build_fts_query_variants",
    # Validation and retrieval (lazy)
    "ValidationResult",
    "validate_citation",
    "get_provision",
    "check_currency",
    "search_legislation",
]


# Lazy imports for modules that pull in settings and storage types
def __getattr__(name: str):
    if name in ("ValidationResult", "validate_citation"):
        from citation_engine.citation import validator

        return getattr(validator, name)
    elif name == "get_provision":
        from citation_engine.tools.provisions import get_provision

        return get_provision
    elif name == "check_currency":
        from citation_engine.tools.currency import check_currency

        return check_currency
    elif name == "search_legislation":
        from citation_engine.tools.search import search_legislation

        return search_legislation
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
