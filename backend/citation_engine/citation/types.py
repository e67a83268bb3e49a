"""Value types shared by the citation parser, formatter and validator."""

import enum
from dataclasses import dataclass


class CitationKind(enum.StrEnum):
    """Kind of legal document a citation points at."""

    STATUTE = "statute"
    STATUTORY_INSTRUMENT = "statutory_instrument"
    UNKNOWN = "unknown"


class CitationStyle(enum.StrEnum):
    """Display style for a formatted citation."""

    FULL = "full"  # § 3(1)(a), Datenschutzgesetz 2018
    SHORT = "short"  # § 3(1)(a) DSG
    PINPOINT = "pinpoint"  # § 3(1)(a)


@dataclass(frozen=True)
class ParsedCitation:
    """Structured form of a free-text citation.

    A valid citation always carries ``section``; an invalid one carries only
    ``error`` and ``kind=UNKNOWN``. Use :meth:`success` and :meth:`failure`
    rather than the constructor so that invariant holds.

    Attributes:
        valid: Whether the input matched one of the citation forms.
        kind: Kind of document cited.
        title: Statute title or short name (e.g. "ABGB"), year removed.
        year: Year split off the end of the title (e.g. 2018).
        section: Section number including an optional letter (e.g. "4a").
        subsection: Numeric subsection, the "1" in "3(1)(a)".
        paragraph: Lettered paragraph, the "a" in "3(1)(a)".
        error: Why parsing failed.
    """

    valid: bool
    kind: CitationKind
    title: str | None = None
    year: int | None = None
    section: str | None = None
    subsection: str | None = None
    paragraph: str | None = None
    error: str | None = None

    @classmethod
    def success(
        cls,
        section: str,
        title: str | None = None,
        year: int | None = None,
        subsection: str | None = None,
        paragraph: str | None = None,
        kind: CitationKind = CitationKind.STATUTE,
    ) -> "ParsedCitation":
        """Build a valid citation."""
        return cls(
            valid=True,
            kind=kind,
            title=title or None,
            year=year,
            section=section,
            subsection=subsection,
            paragraph=paragraph,
        )

    @classmethod
    def failure(cls, error: str) -> "ParsedCitation":
        """Build an invalid citation carrying only an error."""
        return cls(valid=False, kind=CitationKind.UNKNOWN, error=error)
