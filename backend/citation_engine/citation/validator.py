"""Austrian legal citation validator.

Checks a citation string against a document store to confirm that the cited
statute and provision actually exist. Every outcome is returned as a
ValidationResult; problems are reported as warnings, never raised.
"""

import logging
import re
from dataclasses import dataclass, field

from app.config import settings
from app.models.enums import DocumentStatus
from citation_engine.citation.parser import parse_citation
from citation_engine.citation.types import ParsedCitation
from citation_engine.provisions.candidates import build_provision_candidates
from citation_engine.store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of validating a citation against the store.

    Attributes:
        citation: The parsed citation.
        document_exists: Whether the cited statute was found.
        provision_exists: Whether the cited section was found. Citations
            without a section only need the document to exist.
        document_title: Title of the resolved statute.
        status: Status of the resolved statute (e.g. "in_force").
        warnings: Human-readable problems, in the order found.
    """

    citation: ParsedCitation
    document_exists: bool = False
    provision_exists: bool = False
    document_title: str | None = None
    status: str | None = None
    warnings: list[str] = field(default_factory=list)


def find_canonical_id(citation: str, prefix: str | None = None) -> str | None:
    """Find an explicit canonical ID (e.g. "gesetz-10001622") in raw text."""
    prefix = prefix or settings.canonical_id_prefix
    match = re.search(rf"\b{re.escape(prefix)}-\d+\b", citation, re.IGNORECASE)
    return match.group(0) if match else None


def validate_citation(
    citation: str,
    store: DocumentStore,
    id_prefix: str | None = None,
) -> ValidationResult:
    """Validate that a citation refers to an existing statute and provision.

    Args:
        citation: Raw citation string, e.g. "§ 1, ABGB".
        store: Store used to resolve the statute and check the provision.
        id_prefix: Canonical ID prefix; defaults to settings.canonical_id_prefix.

    Returns:
        ValidationResult with existence flags and warnings.
    """
    parsed = parse_citation(citation)

    if not parsed.valid:
        return ValidationResult(
            citation=parsed,
            warnings=[parsed.error or "Invalid citation format"],
        )

    lookup_term = parsed.title or find_canonical_id(citation, id_prefix)
    if not lookup_term:
        return ValidationResult(
            citation=parsed,
            warnings=[
                "Citation must include either a statute title or statute ID "
                "(e.g. gesetz-10001622)."
            ],
        )

    resolved_id = store.resolve_id(lookup_term)
    doc = store.get_document(resolved_id) if resolved_id else None
    logger.debug(f"Resolved {lookup_term!r} -> {resolved_id}")

    if doc is None:
        return ValidationResult(
            citation=parsed,
            warnings=[f'Document "{lookup_term}" not found in database'],
        )

    warnings = []
    if doc.status == DocumentStatus.REPEALED.value:
        warnings.append("This statute has been repealed")

    provision_exists = True
    if parsed.section:
        candidates = build_provision_candidates(parsed.section)
        provision_exists = store.provision_exists(doc.id, candidates)
        if not provision_exists:
            warnings.append(f"Section § {parsed.section} not found in {doc.title}")

    return ValidationResult(
        citation=parsed,
        document_exists=True,
        provision_exists=provision_exists,
        document_title=doc.title,
        status=doc.status,
        warnings=warnings,
    )
