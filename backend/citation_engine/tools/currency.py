"""check_currency: is a statute (and optionally a provision) in force."""

import re
from dataclasses import dataclass, field
from datetime import date

from app.core.logging_setup import log_operation
from app.models.enums import DocumentStatus
from citation_engine.provisions.candidates import build_provision_candidates
from citation_engine.store import DocumentStore

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class CurrencyResult:
    """Currency of a statute.

    Attributes:
        document_id: Canonical ID of the statute.
        title: Statute title.
        status: Stored status, e.g. "in_force" or "repealed".
        document_type: Stored document type, e.g. "statute".
        issued_date: Date of publication, if known.
        in_force_date: Date the statute came into force, if known.
        is_current: Whether the statute is in force (as of ``as_of_date``
            when one was given).
        provision_exists: Whether the requested provision exists; None when
            no provision was requested.
        warnings: Human-readable caveats.
    """

    document_id: str
    title: str
    status: str
    document_type: str
    issued_date: date | None = None
    in_force_date: date | None = None
    is_current: bool = False
    provision_exists: bool | None = None
    warnings: list[str] = field(default_factory=list)


def normalize_as_of_date(value: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date.

    Raises:
        ValueError: If the value is not a valid ISO calendar date.
    """
    trimmed = value.strip()
    if not ISO_DATE.match(trimmed):
        raise ValueError(f"as_of_date must be in ISO format (YYYY-MM-DD), got {value!r}")
    try:
        return date.fromisoformat(trimmed)
    except ValueError as e:
        raise ValueError(f"as_of_date is not a valid date: {value!r}") from e


@log_operation("check_currency")
def check_currency(
    store: DocumentStore,
    document_id: str,
    provision_ref: str | None = None,
    as_of_date: str | None = None,
) -> CurrencyResult | None:
    """Check whether a statute is current.

    Args:
        store: Store holding the statute.
        document_id: Canonical ID, title or short name.
        provision_ref: Optional provision to check for existence.
        as_of_date: Optional ISO date to evaluate currency at.

    Returns:
        CurrencyResult, or None if the statute cannot be resolved.

    Raises:
        ValueError: If document_id is empty or as_of_date is malformed.
    """
    if not document_id or not document_id.strip():
        raise ValueError("document_id is required")

    as_of = normalize_as_of_date(as_of_date) if as_of_date else None

    resolved_id = store.resolve_id(document_id)
    doc = store.get_document(resolved_id) if resolved_id else None
    if doc is None:
        return None

    warnings = []
    is_current = doc.status == DocumentStatus.IN_FORCE.value

    if doc.status == DocumentStatus.REPEALED.value:
        warnings.append("This statute has been repealed")

    if as_of and doc.in_force_date and doc.in_force_date > as_of:
        is_current = False
        warnings.append(
            f"This statute entered into force on {doc.in_force_date.isoformat()}, "
            f"after {as_of.isoformat()}"
        )

    provision_exists = None
    if provision_ref:
        candidates = build_provision_candidates(provision_ref)
        provision_exists = store.provision_exists(doc.id, candidates)
        if not provision_exists:
            warnings.append(f'Provision "{provision_ref}" not found in this document')

    return CurrencyResult(
        document_id=doc.id,
        title=doc.title,
        status=doc.status,
        document_type=doc.document_type,
        issued_date=doc.issued_date,
        in_force_date=doc.in_force_date,
        is_current=is_current,
        provision_exists=provision_exists,
        warnings=warnings,
    )
