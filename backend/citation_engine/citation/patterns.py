"""Citation grammar for Austrian statute references.

Each supported citation form is a named regex with ``section`` and
optional ``title``/``year`` groups. The forms are tried in list order and the
first match wins; the order settles the two ambiguities in the grammar:

- section-first ("§ 1 ABGB") before title-first ("ABGB § 1")
- native keywords (§, Paragraph, Paragraf, para) before legacy English
  ("Section 3, Data Protection Act 2018")

Real-world examples:
1. § 1, Allgemeines bürgerliches Gesetzbuch
2. Datenschutzgesetz § 4
3. para1, ABGB
4. s. 3 Data Protection Act 2018
"""

import re
from dataclasses import dataclass, field

# Germanic section keyword
SECTION_KEYWORD = r"(?:§|Paragraph|Paragraf)"

# Section token with optional subsection/paragraph: "4a", "3(1)(a)"
SECTION_TOKEN = r"\d+[a-z]?(?:\(\d+\))*(?:\([a-z]\))?"

# Decomposition of a single section token
SECTION_REF = re.compile(r"^(\d+[a-z]?)(?:\((\d+)\))?(?:\(([a-z])\))?$", re.IGNORECASE)

# Machine-style prefix ("para4a")
MACHINE_PREFIX = re.compile(r"^para", re.IGNORECASE)

# Bare year at the end of a title ("Data Protection Act 2018")
TRAILING_YEAR = re.compile(r"\s+(\d{4})$")


@dataclass
class CitationPattern:
    """Definition of a citation form with its regex and metadata."""

    name: str
    regex: str
    description: str
    split_year: bool = True
    compiled: re.Pattern = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.compiled = re.compile(self.regex, re.IGNORECASE)

    def match(self, text: str) -> re.Match | None:
        """Match the whole (already trimmed) citation text."""
        return self.compiled.match(text)


CITATION_PATTERNS: list[CitationPattern] = [
    CitationPattern(
        name="section_then_title",
        regex=(
            r"^" + SECTION_KEYWORD + r"\s*(?P<section>" + SECTION_TOKEN + r")"
            r"\s*,?\s+(?P<title>.+)$"
        ),
        description="§ 1, Allgemeines bürgerliches Gesetzbuch",
    ),
    CitationPattern(
        name="title_then_section",
        regex=(
            r"^(?P<title>.+?)\s+" + SECTION_KEYWORD + r"\s*"
            r"(?P<section>" + SECTION_TOKEN + r")$"
        ),
        description="Allgemeines bürgerliches Gesetzbuch § 1",
    ),
    CitationPattern(
        name="machine_ref_then_title",
        regex=r"^para(?P<section>\d+[a-z]?)\s*,?\s+(?P<title>.+)$",
        description="para1, ABGB",
    ),
    CitationPattern(
        name="legacy_english",
        regex=(
            r"^(?:Section|s\.?)\s+(?P<section>" + SECTION_TOKEN + r")"
            r"\s*,?\s+(?P<title>.+?)(?:\s+(?P<year>\d{4}))?$"
        ),
        description="Section 3, Data Protection Act 2018",
        split_year=False,
    ),
    CitationPattern(
        name="bare_machine_ref",
        regex=r"^para(?P<section>\d+[a-z]?)$",
        description="para4a",
    ),
    CitationPattern(
        name="bare_section",
        regex=r"^" + SECTION_KEYWORD + r"\s*(?P<section>" + SECTION_TOKEN + r")$",
        description="§ 1",
    ),
]
