"""SQLAlchemy models for the RIS statute database."""

from app.models.base import Base, make_session_factory
from app.models.enums import DocumentStatus, DocumentType
from app.models.legal import LegalDocument, LegalProvision, create_fts_index

__all__ = [
    # Base
    "Base",
    "make_session_factory",
    # Enums
    "DocumentStatus",
    "DocumentType",
    # Statutes
    "LegalDocument",
    "LegalProvision",
    "create_fts_index",
]
