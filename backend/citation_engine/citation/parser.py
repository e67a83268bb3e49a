"""Austrian legal citation parser.

Parses citations like:
    "§ 1, Allgemeines bürgerliches Gesetzbuch"
    "§ 5 DSG"
    "Allgemeines bürgerliches Gesetzbuch § 1"
    "Section 3, Data Protection Act 2018"

Parsing never raises; unparseable input yields an invalid ParsedCitation
whose ``error`` explains the failure.
"""

from citation_engine.citation.patterns import (
    CITATION_PATTERNS,
    MACHINE_PREFIX,
    SECTION_REF,
    TRAILING_YEAR,
    CitationPattern,
)
from citation_engine.citation.types import ParsedCitation


def split_year(title: str) -> tuple[str, int | None]:
    """Split a trailing four-digit year off a title.

    "Data Protection Act 2018" -> ("Data Protection Act", 2018)
    """
    trimmed = title.strip()
    match = TRAILING_YEAR.search(trimmed)
    if not match:
        return trimmed, None
    return trimmed[: match.start()].strip(), int(match.group(1))


def parse_citation(citation: str, patterns: list[CitationPattern] | None = None) -> ParsedCitation:
    """Parse a free-text citation into a ParsedCitation.

    Args:
        citation: Raw citation string.
        patterns: Citation forms to try, in order. Defaults to CITATION_PATTERNS.

    Returns:
        A valid ParsedCitation for the first matching form, otherwise an
        invalid one with ``error`` set.
    """
    trimmed = citation.strip()
    if not trimmed:
        return ParsedCitation.failure("Empty citation")

    for pattern in patterns or CITATION_PATTERNS:
        match = pattern.match(trimmed)
        if not match:
            continue

        groups = match.groupdict()
        title = groups.get("title")
        year = int(groups["year"]) if groups.get("year") else None
        if title is not None and pattern.split_year:
            title, year = split_year(title)
        return _build_citation(match.group("section"), title, year)

    return ParsedCitation.failure(f'Could not parse citation: "{trimmed}"')


def _build_citation(section_token: str, title: str | None, year: int | None) -> ParsedCitation:
    """Decompose a section token and assemble the parsed citation."""
    normalized = MACHINE_PREFIX.sub("", section_token).strip()
    section_match = SECTION_REF.match(normalized)

    if section_match is None:
        # e.g. "3(1)(2)": more subsections than the decomposition supports
        return ParsedCitation.success(
            section=normalized,
            title=title.strip() if title else None,
            year=year,
        )

    section, subsection, paragraph = section_match.groups()
    return ParsedCitation.success(
        section=section,
        title=title.strip() if title else None,
        year=year,
        subsection=subsection,
        paragraph=paragraph,
    )
