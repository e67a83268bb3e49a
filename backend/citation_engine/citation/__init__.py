"""Citation parsing, formatting and validation."""

from citation_engine.citation.formatter import format_citation
from citation_engine.citation.parser import parse_citation
from citation_engine.citation.types import CitationKind, CitationStyle, ParsedCitation

__all__ = [
    "CitationKind",
    "CitationStyle",
    "ParsedCitation",
    "format_citation",
    "parse_citation",
]
