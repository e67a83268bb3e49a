"""SQLAlchemy-backed document store for statutes and provisions.

Implements the ProvisionStore operations over ``legal_documents``,
``legal_provisions`` and the ``provisions_fts`` FTS5 index. Storage faults
are logged and reported as "not found" so callers never see them.
"""

import logging

from sqlalchemy import func, or_, select, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.legal import FTS_TABLE, LegalDocument, LegalProvision
from citation_engine.provisions.candidates import ProvisionCandidateSet
from citation_engine.store import (
    DocumentRecord,
    ProvisionRecord,
    QuerySyntaxError,
    SearchHit,
    resolve_document_id,
)

logger = logging.getLogger(__name__)

# SQLite messages that mean the MATCH expression itself is malformed
FTS_SYNTAX_MARKERS = ("fts5: syntax error", "unterminated string", "no such column", "unknown special query")

SEARCH_SQL = f"""
    SELECT
        lp.document_id,
        ld.title AS document_title,
        lp.provision_ref,
        lp.section,
        snippet({FTS_TABLE}, 0, '>>>', '<<<', '...', 32) AS snippet,
        bm25({FTS_TABLE}) AS rank
    FROM {FTS_TABLE}
    JOIN legal_provisions lp ON lp.id = {FTS_TABLE}.rowid
    JOIN legal_documents ld ON ld.id = lp.document_id
    WHERE {FTS_TABLE} MATCH :expression
      AND (:document_id IS NULL OR lp.document_id = :document_id)
      AND (:status IS NULL OR ld.status = :status)
    ORDER BY rank
    LIMIT :limit
"""


def _to_document(doc: LegalDocument) -> DocumentRecord:
    return DocumentRecord(
        id=doc.id,
        title=doc.title,
        status=doc.status.value,
        short_name=doc.short_name,
        document_type=doc.type.value,
        issued_date=doc.issued_date,
        in_force_date=doc.in_force_date,
    )


def _to_provision(provision: LegalProvision) -> ProvisionRecord:
    return ProvisionRecord(
        document_id=provision.document_id,
        provision_ref=provision.provision_ref,
        section=provision.section,
        content=provision.content,
        chapter=provision.chapter,
        title=provision.title,
        order_index=provision.order_index,
    )


class SqlDocumentStore:
    """Document store over a synchronous SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    def resolve_id(self, term: str) -> str | None:
        """Resolve a canonical ID, title or short name to a canonical ID.

        Canonical IDs are ASCII, so an exact ID is looked up in SQL first.
        Titles and short names are matched in Python with
        ``resolve_document_id``; SQLite's ``lower()`` and ``LIKE`` fold
        ASCII only and would miss "Ärztegesetz" for "ärztegesetz".
        """
        needle = term.strip()
        if not needle:
            return None

        try:
            doc_id = self.session.execute(
                select(LegalDocument.id).where(func.lower(LegalDocument.id) == needle.lower()).limit(1)
            ).scalar_one_or_none()
            if doc_id is not None:
                return doc_id
            rows = self.session.execute(
                select(LegalDocument.id, LegalDocument.title, LegalDocument.short_name)
            ).all()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning(f"Statute lookup failed for {term!r}: {e}")
            return None
        return resolve_document_id(needle, [tuple(row) for row in rows])

    def get_document(self, document_id: str) -> DocumentRecord | None:
        try:
            doc = self.session.get(LegalDocument, document_id)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning(f"Document fetch failed for {document_id}: {e}")
            return None
        return _to_document(doc) if doc else None

    def provision_exists(self, document_id: str, candidates: ProvisionCandidateSet) -> bool:
        return self.find_provision(document_id, candidates) is not None

    def find_provision(
        self, document_id: str, candidates: ProvisionCandidateSet
    ) -> ProvisionRecord | None:
        if candidates.is_empty:
            return None

        query = (
            select(LegalProvision)
            .where(
                LegalProvision.document_id == document_id,
                or_(
                    LegalProvision.provision_ref.in_(candidates.provision_refs),
                    LegalProvision.section.in_(candidates.sections),
                ),
            )
            .order_by(LegalProvision.order_index)
            .limit(1)
        )
        try:
            provision = self.session.execute(query).scalar_one_or_none()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning(f"Provision lookup failed for {document_id}: {e}")
            return None
        return _to_provision(provision) if provision else None

    def list_provisions(self, document_id: str, limit: int) -> list[ProvisionRecord]:
        query = (
            select(LegalProvision)
            .where(LegalProvision.document_id == document_id)
            .order_by(LegalProvision.order_index)
            .limit(limit)
        )
        try:
            provisions = self.session.execute(query).scalars().all()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning(f"Provision listing failed for {document_id}: {e}")
            return []
        return [_to_provision(p) for p in provisions]

    def search_provisions(
        self,
        expression: str,
        document_id: str | None = None,
        status: str | None = None,
        limit: int = 10,
    ) -> list[SearchHit]:
        """Run an FTS5 MATCH expression.

        Raises:
            QuerySyntaxError: If SQLite rejects the expression.
        """
        params = {
            "expression": expression,
            "document_id": document_id,
            "status": status,
            "limit": limit,
        }
        try:
            rows = self.session.execute(text(SEARCH_SQL), params).mappings().all()
        except OperationalError as e:
            self.session.rollback()
            message = str(e.orig).lower()
            if any(marker in message for marker in FTS_SYNTAX_MARKERS):
                raise QuerySyntaxError(str(e.orig)) from e
            logger.warning(f"Full-text search failed: {e}")
            return []
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning(f"Full-text search failed: {e}")
            return []

        return [
            SearchHit(
                document_id=row["document_id"],
                document_title=row["document_title"],
                provision_ref=row["provision_ref"],
                section=row["section"],
                snippet=row["snippet"],
                relevance=-float(row["rank"]),
            )
            for row in rows
        ]
