"""get_provision: retrieve provisions of a statute with cleaned content."""

import dataclasses
import logging
from dataclasses import dataclass

from app.config import settings
from app.core.logging_setup import log_operation
from citation_engine.provisions.candidates import build_provision_candidates
from citation_engine.store import ProvisionRecord, ProvisionStore
from citation_engine.text.content_cleaner import clean_provision_content

logger = logging.getLogger(__name__)


@dataclass
class ProvisionLookup:
    """Result of a provision lookup.

    Attributes:
        results: One provision when a section was requested (None if it was
            not found), otherwise the document's provisions in order.
        truncated: Whether the provision list was capped.
        total_hint: Advice for narrowing a truncated request.
    """

    results: ProvisionRecord | list[ProvisionRecord] | None
    truncated: bool = False
    total_hint: str | None = None


def _cleaned(provision: ProvisionRecord) -> ProvisionRecord:
    return dataclasses.replace(provision, content=clean_provision_content(provision.content))


@log_operation("get_provision")
def get_provision(
    store: ProvisionStore,
    document_id: str,
    section: str | None = None,
    provision_ref: str | None = None,
    max_provisions: int | None = None,
) -> ProvisionLookup:
    """Retrieve one provision, or all provisions of a statute.

    Args:
        store: Store holding the statute.
        document_id: Canonical ID, title or short name of the statute.
        section: Section to retrieve, e.g. "4a" or "§ 4a".
        provision_ref: Machine reference, e.g. "para4a". Takes precedence
            over ``section``.
        max_provisions: Cap for whole-statute requests; defaults to
            settings.max_provisions.

    Raises:
        ValueError: If document_id is empty.
    """
    if not document_id or not document_id.strip():
        raise ValueError("document_id is required")

    resolved_id = store.resolve_id(document_id) or document_id
    requested = provision_ref or section

    if not requested:
        cap = max_provisions or settings.max_provisions
        rows = store.list_provisions(resolved_id, cap + 1)
        truncated = len(rows) > cap
        if truncated:
            logger.info(f"Provision list for {resolved_id} truncated at {cap}")
        return ProvisionLookup(
            results=[_cleaned(row) for row in rows[:cap]],
            truncated=truncated,
            total_hint=(
                f"More than {cap} provisions exist. Use section or provision_ref "
                "to retrieve specific provisions."
                if truncated
                else None
            ),
        )

    candidates = build_provision_candidates(requested)
    row = store.find_provision(resolved_id, candidates)
    return ProvisionLookup(results=_cleaned(row) if row else None)
