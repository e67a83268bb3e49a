"""Statute models: LegalDocument, LegalProvision."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, enum_column
from app.models.enums import DocumentStatus, DocumentType

FTS_TABLE = "provisions_fts"


class LegalDocument(Base):
    """A statute as published in the RIS registry.

    ``id`` is the canonical ID (e.g. ``gesetz-10001622``); ``short_name``
    holds the common abbreviation (e.g. ``ABGB``) when one exists.
    """

    __tablename__ = "legal_documents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    short_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[DocumentStatus] = mapped_column(
        enum_column(DocumentStatus, "document_status"),
        default=DocumentStatus.IN_FORCE,
        nullable=False,
    )
    type: Mapped[DocumentType] = mapped_column(
        enum_column(DocumentType, "document_type"),
        default=DocumentType.STATUTE,
        nullable=False,
    )
    issued_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    in_force_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    provisions: Mapped[list["LegalProvision"]] = relationship(
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="LegalProvision.order_index",
    )

    def __repr__(self) -> str:
        return f"<LegalDocument({self.id}: {self.title})>"


class LegalProvision(Base):
    """A single provision of a statute.

    A provision is addressed redundantly: ``provision_ref`` is the machine
    key (``para4a``) and ``section`` the human label (``4a`` or ``§ 4a``).
    ``content`` is stored raw, including registry metadata lines.
    """

    __tablename__ = "legal_provisions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    document_id: Mapped[str] = mapped_column(
        ForeignKey("legal_documents.id", ondelete="CASCADE"), nullable=False
    )
    provision_ref: Mapped[str] = mapped_column(String(50), nullable=False)
    chapter: Mapped[str | None] = mapped_column(String(200), nullable=True)
    section: Mapped[str] = mapped_column(String(50), nullable=False)
    title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    document: Mapped[LegalDocument] = relationship(back_populates="provisions")

    __table_args__ = (
        Index("idx_legal_provisions_document", "document_id"),
        Index("idx_legal_provisions_ref", "document_id", "provision_ref"),
    )

    def __repr__(self) -> str:
        return f"<LegalProvision({self.document_id} {self.provision_ref})>"


def create_fts_index(connection: Connection) -> None:
    """Create (or rebuild) the FTS5 index over provision content.

    The index is an external-content table keyed by ``legal_provisions.id``,
    so it must be rebuilt after provisions are written.
    """
    connection.execute(
        text(
            f"CREATE VIRTUAL TABLE IF NOT EXISTS {FTS_TABLE} USING fts5("
            "content, title, content='legal_provisions', content_rowid='id')"
        )
    )
    connection.execute(text(f"INSERT INTO {FTS_TABLE}({FTS_TABLE}) VALUES ('rebuild')"))
