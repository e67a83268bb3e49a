"""search_legislation: full-text search over provisions with a safe fallback."""

import logging

from app.config import settings
from app.core.logging_setup import log_operation
from citation_engine.store import ProvisionStore, QuerySyntaxError, SearchHit
from citation_engine.text.fts_query import build_fts_query_variants

logger = logging.getLogger(__name__)


def clamp_limit(limit: int | None) -> int:
    """Clamp a requested result count to [1, settings.search_max_limit]."""
    if limit is None:
        limit = settings.search_default_limit
    return max(1, min(limit, settings.search_max_limit))


@log_operation("search_legislation")
def search_legislation(
    store: ProvisionStore,
    query: str,
    document_id: str | None = None,
    status: str | None = None,
    limit: int | None = None,
) -> list[SearchHit]:
    """Search provision text.

    The primary expression runs first. The fallback runs when the primary
    does not parse or finds nothing.

    Args:
        store: Store to search.
        query: Raw user query; FTS5 syntax is honored when present.
        document_id: Restrict to one statute (ID, title or short name).
        status: Restrict to statutes with this status.
        limit: Maximum hits; clamped to the configured range.
    """
    if not query or not query.strip():
        return []

    resolved_id = None
    if document_id:
        resolved_id = store.resolve_id(document_id)
        if resolved_id is None:
            logger.debug(f"Search filter {document_id!r} matches no statute")
            return []

    variants = build_fts_query_variants(query)
    limit = clamp_limit(limit)

    try:
        hits = store.search_provisions(variants.primary, resolved_id, status, limit)
    except QuerySyntaxError as e:
        if variants.fallback is None:
            logger.info(f"Unparseable query {query!r} with no fallback: {e}")
            return []
        logger.debug(f"Primary query failed ({e}), using fallback {variants.fallback!r}")
        hits = []

    if hits or variants.fallback is None:
        return hits

    try:
        return store.search_provisions(variants.fallback, resolved_id, status, limit)
    except QuerySyntaxError as e:
        logger.warning(f"Fallback query {variants.fallback!r} failed: {e}")
        return []
