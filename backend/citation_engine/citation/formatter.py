"""Austrian legal citation formatter.

Formats:
    full:     "§ 3, Datenschutzgesetz 2018"
    short:    "§ 3 DSG"
    pinpoint: "§ 3(1)(a)"
"""

from citation_engine.citation.types import CitationStyle, ParsedCitation


def build_pinpoint(citation: ParsedCitation) -> str:
    """Return the section with subsection and paragraph, e.g. "3(1)(a)"."""
    ref = citation.section or ""
    if citation.subsection:
        ref += f"({citation.subsection})"
    if citation.paragraph:
        ref += f"({citation.paragraph})"
    return ref


def format_citation(
    citation: ParsedCitation,
    style: CitationStyle | str = CitationStyle.FULL,
) -> str:
    """Render a parsed citation as a display string.

    Formatting a citation that failed to parse returns an empty string.
    Unknown styles are rendered as ``full``.
    """
    if not citation.valid or not citation.section:
        return ""

    pinpoint = f"§ {build_pinpoint(citation)}"

    if style == CitationStyle.PINPOINT:
        return pinpoint

    if style == CitationStyle.SHORT:
        return f"{pinpoint} {citation.title}" if citation.title else pinpoint

    title_and_year = " ".join(
        part for part in (citation.title, str(citation.year) if citation.year else None) if part
    )
    return f"{pinpoint}, {title_and_year}" if title_and_year else pinpoint
