"""Provision lookup candidates.

RIS stores each provision under two independent keys: a machine reference
(``provision_ref``, e.g. "para4a") and a human section label (``section``,
e.g. "4a" or "§ 4a"). Callers may pass either encoding, decorated or bare,
so every equivalent key is enumerated and the lookup matches any of them.
"""

import re
from dataclasses import dataclass, field

# Leading "§", "Paragraph", "Paragraf" or "para" marker, only when a section
# number (or nothing) follows, so "Paragraphen 4" is left alone
PROVISION_MARKER = re.compile(r"^\s*(?:§|Paragraph|Paragraf|para)\s*(?=\d|$)", re.IGNORECASE)


@dataclass(frozen=True)
class ProvisionCandidateSet:
    """Equivalent lookup keys for one provision reference.

    Attributes:
        canonical_section: The bare section, e.g. "4a".
        provision_refs: Machine keys to match against ``provision_ref``.
        sections: Human labels to match against ``section``.
    """

    canonical_section: str = ""
    provision_refs: list[str] = field(default_factory=list)
    sections: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when no key can match anything."""
        return not self.provision_refs and not self.sections


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def build_provision_candidates(ref: str) -> ProvisionCandidateSet:
    """Build every lookup key equivalent to a provision reference.

    "§ 4a", "Paragraph 4a", "para4a" and "4a" all yield
    provision_refs ["para4a"] and sections ["§ 4a", "4a"].
    """
    canonical = PROVISION_MARKER.sub("", ref).strip()
    if not canonical:
        return ProvisionCandidateSet()

    return ProvisionCandidateSet(
        canonical_section=canonical,
        provision_refs=_unique([f"para{canonical}", f"para{canonical.lower()}"]),
        sections=_unique([f"§ {canonical}", canonical]),
    )
