"""Store implementations backed by the statute database."""

from app.crud.legal import SqlDocumentStore

__all__ = ["SqlDocumentStore"]
