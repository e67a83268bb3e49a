"""Provision content cleaner.

The RIS OGD API returns provision content with embedded metadata (BGBl
references, NOR numbers, Gesetzesnummern, classification indexes, dates,
index keywords) interleaved with the legal text and no delimiter between
them. Cleaning is therefore line-level classification:

1. Drop lines that match a metadata shape from METADATA_LINE_RULES.
2. Drop trailing index-keyword lines (Schlagwörter).
3. Strip a dangling section marker from the last line, tidy whitespace.

Applied at query time; stored content is never modified.
"""

import re
from dataclasses import dataclass, field


@dataclass
class CleaningRule:
    """A whole-line metadata shape."""

    name: str
    regex: str
    description: str
    flags: int = 0
    compiled: re.Pattern = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.compiled = re.compile(self.regex, self.flags)

    def matches(self, line: str) -> bool:
        """True when the entire (trimmed) line has this shape."""
        return self.compiled.fullmatch(line) is not None


METADATA_LINE_RULES: list[CleaningRule] = [
    CleaningRule(
        name="publication_reference",
        regex=r"(?:BGBl\.?\s*(?:[IVX]+\s+)?Nr\.\s*.+|JGS\s+Nr\.\s*.+|StGBl\.?\s*(?:Nr\.)?\s*.+)",
        description="BGBl. Nr. 1/1930, BGBl. I Nr. 165/1999, JGS Nr. 946/1811",
    ),
    CleaningRule(
        name="document_type",
        regex=r"(?:BG|BVG|V|StF|GZ|Vertrag\s+–\s+.+)",
        description="BG, BVG, V, StF",
    ),
    CleaningRule(
        name="bare_section_marker",
        regex=r"(?:§\s*\d+\w*|Art\.?\s*\d+\w*|Anl\.?\s*\d+\w*)",
        description="§ 1, Art. 1, Anl. 2 (duplicates the section column)",
    ),
    CleaningRule(
        name="classification_index",
        regex=r"\d{2}/\d{2}\s+[A-ZÄÖÜ].+",
        description="32/01 Finanzverfahren, allgemeines Abgabenrecht",
    ),
    CleaningRule(
        name="short_name",
        regex=r"[A-ZÄÖÜ][A-ZÄÖÜa-zäöü\-]{0,8}",
        description="BAO, ASVG, B-VG on a line of their own",
    ),
    CleaningRule(
        name="nor_number",
        regex=r"NOR\d+",
        description="NOR40217471",
    ),
    CleaningRule(
        name="internal_id",
        regex=r"N\d{5,}[A-Z]",
        description="N1193018808R",
    ),
    CleaningRule(
        name="gesetzesnummer",
        regex=r"\d{7,8}",
        description="10001622",
    ),
    CleaningRule(
        name="date",
        regex=r"\d{2}\.\d{2}\.\d{4}",
        description="01.01.1812",
    ),
    CleaningRule(
        name="amendment_reference",
        regex=r".{0,60},\s*BGBl\.?\s*(?:Nr\.|I\s+Nr\.)\s*\d+.*",
        description="Novelle, BGBl. I Nr. 52/2009",
    ),
    CleaningRule(
        name="structural_heading",
        regex=(
            r"(?:Erst|Zweit|Dritt|Viert|Fünft|Sechst|Siebent|Acht|Neunt|Zehnt)"
            r"(?:e[sr]?)\s+(?:Haupt(?:stück|teil)|Abschnitt|Teil|Buch)\.?"
        ),
        description="Erstes Hauptstück., Zweiter Teil",
        flags=re.IGNORECASE,
    ),
]

# Comma-separated run of at least three short terms; a trailing comma marks a
# continuation line of a multi-line keyword block
KEYWORD_LINE = re.compile(
    r"(?:[A-ZÄÖÜa-zäöüß][A-ZÄÖÜa-zäöüß\s\-]*,\s*){2,}[A-ZÄÖÜa-zäöüß][A-ZÄÖÜa-zäöüß\s\-]*,?"
)

# Calibrated for German RIS text; other jurisdictions need their own values.
KEYWORD_TERM_MAX_LENGTH = 40
FUNCTION_WORDS = frozenset({
    # auxiliary and modal verbs
    "ist", "sind", "wird", "werden", "hat", "haben",
    "kann", "können", "soll", "sollen", "darf", "dürfen", "muss", "müssen",
    # prepositions that open clauses
    "gemäß", "nach", "durch", "auf", "über", "bei", "unter",
})
FUNCTION_WORD = re.compile(
    r"\b(?:" + "|".join(sorted(FUNCTION_WORDS)) + r")\b",
    re.IGNORECASE,
)

# "...in demselben aus. § 1." / "...vom Volk aus. Artikel 1."
TRAILING_SECTION_REF = re.compile(r"\s+(?:§\s*\d+\w*|Artikel\s*\d+\w*)\.?\s*$")

EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


def is_metadata_line(line: str, rules: list[CleaningRule] | None = None) -> bool:
    """True when a trimmed line is blank or entirely registry metadata."""
    if not line:
        return True
    return any(rule.matches(line) for rule in rules or METADATA_LINE_RULES)


def is_keyword_line(line: str) -> bool:
    """Heuristic: is this line a RIS index-keyword (Schlagwörter) line?

    Keyword lines are verb-free comma lists of short terms. Legal sentences
    may contain commas but carry verbs or prepositions, which is what keeps
    them from being stripped.
    """
    if not KEYWORD_LINE.fullmatch(line):
        return False

    terms = [term.strip() for term in line.split(",")]
    if any(len(term) > KEYWORD_TERM_MAX_LENGTH for term in terms):
        return False

    return FUNCTION_WORD.search(line) is None


def _clean_once(content: str) -> str:
    lines = [line.rstrip() for line in content.splitlines()]
    lines = [line for line in lines if not is_metadata_line(line.strip())]

    while lines and is_keyword_line(lines[-1].strip()):
        lines.pop()

    cleaned = "\n".join(lines).strip()
    cleaned = TRAILING_SECTION_REF.sub("", cleaned)
    cleaned = EXCESS_BLANK_LINES.sub("\n\n", cleaned)
    return cleaned.strip()


def clean_provision_content(content: str) -> str:
    """Remove embedded RIS metadata from provision content.

    Cleaning is repeated until the text is stable, so cleaning already
    cleaned text is a no-op.

    Returns:
        The legal text alone; an empty string if every line was metadata.
    """
    # Each pass strips one trailing "§ N", so a run of trailing references is
    # removed entirely ("Verweis auf § 3. § 4." -> "Verweis auf"), and a line
    # left as a lone short word is then dropped as a short name
    # ("Inhalt § 1" -> ""). Idempotence requires it.
    cleaned = _clean_once(content)
    while True:
        again = _clean_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again
