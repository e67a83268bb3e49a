"""Document store interface and an in-memory implementation.

The engine never queries storage directly; it talks to a store through the
typed operations below. ``SqlDocumentStore`` (app.crud.legal) backs them
with SQLAlchemy, ``InMemoryDocumentStore`` with plain lists.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Protocol, runtime_checkable

from citation_engine.provisions.candidates import ProvisionCandidateSet

logger = logging.getLogger(__name__)


class QuerySyntaxError(ValueError):
    """Raised by a store when a full-text expression does not parse."""


@dataclass(frozen=True)
class DocumentRecord:
    """A statute as seen by the engine."""

    id: str
    title: str
    status: str
    short_name: str | None = None
    document_type: str = "statute"
    issued_date: date | None = None
    in_force_date: date | None = None


@dataclass(frozen=True)
class ProvisionRecord:
    """A single provision with its raw registry content."""

    document_id: str
    provision_ref: str
    section: str
    content: str
    chapter: str | None = None
    title: str | None = None
    order_index: int = 0

    def matches(self, candidates: ProvisionCandidateSet) -> bool:
        """True when either key of this provision is in the candidate set."""
        return self.provision_ref in candidates.provision_refs or self.section in candidates.sections


@dataclass(frozen=True)
class SearchHit:
    """A provision matching a full-text query."""

    document_id: str
    document_title: str
    provision_ref: str
    section: str
    snippet: str
    relevance: float = 0.0


@runtime_checkable
class DocumentStore(Protocol):
    """Lookups the citation validator needs."""

    def resolve_id(self, term: str) -> str | None:
        """Resolve a canonical ID, title or short name to a canonical ID."""
        ...

    def get_document(self, document_id: str) -> DocumentRecord | None:
        """Fetch a document by canonical ID."""
        ...

    def provision_exists(self, document_id: str, candidates: ProvisionCandidateSet) -> bool:
        """True when the document has a provision matching any candidate key."""
        ...


@runtime_checkable
class ProvisionStore(DocumentStore, Protocol):
    """Lookups used by provision retrieval and search."""

    def find_provision(
        self, document_id: str, candidates: ProvisionCandidateSet
    ) -> ProvisionRecord | None:
        """Return the first provision matching any candidate key."""
        ...

    def list_provisions(self, document_id: str, limit: int) -> list[ProvisionRecord]:
        """Return up to ``limit`` provisions of a document in document order."""
        ...

    def search_provisions(
        self,
        expression: str,
        document_id: str | None = None,
        status: str | None = None,
        limit: int = 10,
    ) -> list[SearchHit]:
        """Run an FTS5 expression; raise QuerySyntaxError if it does not parse."""
        ...


def resolve_document_id(
    term: str, documents: Iterable[tuple[str, str, str | None]]
) -> str | None:
    """Resolve a canonical ID, title or short name against (id, title, short_name) rows.

    Tries an exact ID, then an exact title or short name, then a substring
    of either (shortest title wins). Case is folded with ``str.casefold``,
    so "ärztegesetz" finds "Ärztegesetz".
    """
    needle = term.strip().casefold()
    if not needle:
        return None
    rows = [
        (doc_id, title.casefold(), (short_name or "").casefold(), len(title))
        for doc_id, title, short_name in documents
    ]

    for doc_id, _, _, _ in rows:
        if doc_id.casefold() == needle:
            return doc_id

    for doc_id, title, short_name, _ in rows:
        if needle in (title, short_name):
            return doc_id

    matches = [row for row in rows if needle in row[1] or needle in row[2]]
    if not matches:
        return None
    return min(matches, key=lambda row: row[3])[0]


# Term of an FTS5 expression: optional quotes, optional prefix wildcard
_FTS_TERM = re.compile(r'^"?(?P<text>[^"*]+)"?(?P<prefix>\*)?$')
_WORD = re.compile(r"[\w-]+")


class InMemoryDocumentStore:
    """Store backed by in-memory lists.

    Its full-text search understands the subset of FTS5 syntax that
    build_fts_query_variants emits (quoted terms, prefix wildcards, implicit
    AND, OR, NOT) and rejects unbalanced quotes the way FTS5 does.
    """

    def __init__(
        self,
        documents: list[DocumentRecord] | None = None,
        provisions: list[ProvisionRecord] | None = None,
    ):
        self.documents: dict[str, DocumentRecord] = {d.id: d for d in documents or []}
        self.provisions: list[ProvisionRecord] = sorted(
            provisions or [], key=lambda p: (p.document_id, p.order_index)
        )

    def resolve_id(self, term: str) -> str | None:
        return resolve_document_id(
            term, [(doc.id, doc.title, doc.short_name) for doc in self.documents.values()]
        )

    def get_document(self, document_id: str) -> DocumentRecord | None:
        return self.documents.get(document_id)

    def provision_exists(self, document_id: str, candidates: ProvisionCandidateSet) -> bool:
        return self.find_provision(document_id, candidates) is not None

    def find_provision(
        self, document_id: str, candidates: ProvisionCandidateSet
    ) -> ProvisionRecord | None:
        if candidates.is_empty:
            return None
        for provision in self.provisions:
            if provision.document_id == document_id and provision.matches(candidates):
                return provision
        return None

    def list_provisions(self, document_id: str, limit: int) -> list[ProvisionRecord]:
        return [p for p in self.provisions if p.document_id == document_id][:limit]

    def search_provisions(
        self,
        expression: str,
        document_id: str | None = None,
        status: str | None = None,
        limit: int = 10,
    ) -> list[SearchHit]:
        clauses = self._parse_expression(expression)
        logger.debug(f"In-memory search {expression!r} -> {len(clauses)} clause(s)")

        hits = []
        for provision in self.provisions:
            doc = self.documents.get(provision.document_id)
            if doc is None:
                continue
            if document_id is not None and provision.document_id != document_id:
                continue
            if status is not None and doc.status != status:
                continue

            words = _WORD.findall(f"{provision.title or ''} {provision.content}".casefold())
            score = max((self._score(clause, words) for clause in clauses), default=0)
            if score:
                hits.append(
                    SearchHit(
                        document_id=doc.id,
                        document_title=doc.title,
                        provision_ref=provision.provision_ref,
                        section=provision.section,
                        snippet=provision.content[:200],
                        relevance=float(score),
                    )
                )

        hits.sort(key=lambda hit: -hit.relevance)
        return hits[:limit]

    @staticmethod
    def _parse_expression(expression: str) -> list[tuple[list[tuple[str, bool]], list[str]]]:
        """Split an expression into OR-clauses of (required terms, excluded terms)."""
        if expression.count('"') % 2:
            raise QuerySyntaxError(f"unterminated string in {expression!r}")

        clauses = []
        for alternative in re.split(r"\s+OR\s+", expression.strip()):
            required: list[tuple[str, bool]] = []
            excluded: list[str] = []
            negate = False
            for token in alternative.split():
                if token == "AND":
                    continue
                if token == "NOT":
                    negate = True
                    continue
                match = _FTS_TERM.match(token)
                if match is None:
                    raise QuerySyntaxError(f"syntax error near {token!r}")
                text = match.group("text").casefold()
                if negate:
                    excluded.append(text)
                    negate = False
                else:
                    required.append((text, match.group("prefix") is not None))
            if negate or not required:
                raise QuerySyntaxError(f"syntax error in {alternative!r}")
            clauses.append((required, excluded))
        return clauses

    @staticmethod
    def _score(clause: tuple[list[tuple[str, bool]], list[str]], words: list[str]) -> int:
        required, excluded = clause
        if any(term in words for term in excluded):
            return 0

        score = 0
        for term, is_prefix in required:
            count = sum(1 for w in words if (w.startswith(term) if is_prefix else w == term))
            if not count:
                return 0
            score += count
        return score
