"""Pydantic schemas for citation engine results.

Enclosing systems serialize engine results through these schemas; they are
built directly from the engine dataclasses with ``from_attributes``.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from citation_engine.citation.types import CitationKind

# =============================================================================
# Citation Schemas
# =============================================================================


class ParsedCitationSchema(BaseModel):
    """A parsed citation."""

    model_config = ConfigDict(from_attributes=True)

    valid: bool
    kind: CitationKind
    title: str | None = None
    year: int | None = None
    section: str | None = None
    subsection: str | None = None
    paragraph: str | None = None
    error: str | None = None


class ValidationResultSchema(BaseModel):
    """Outcome of validating a citation against the statute database."""

    model_config = ConfigDict(from_attributes=True)

    citation: ParsedCitationSchema
    document_exists: bool
    provision_exists: bool
    document_title: str | None = None
    status: str | None = None
    warnings: list[str] = Field(default_factory=list)


class FtsQueryVariantsSchema(BaseModel):
    """Primary and fallback full-text expressions."""

    model_config = ConfigDict(from_attributes=True)

    primary: str
    fallback: str | None = None


# =============================================================================
# Provision Schemas
# =============================================================================


class ProvisionSchema(BaseModel):
    """A provision with cleaned content."""

    model_config = ConfigDict(from_attributes=True)

    document_id: str
    provision_ref: str
    section: str
    chapter: str | None = None
    title: str | None = None
    content: str


class CurrencySchema(BaseModel):
    """Currency of a statute."""

    model_config = ConfigDict(from_attributes=True)

    document_id: str
    title: str
    status: str
    document_type: str
    issued_date: date | None = None
    in_force_date: date | None = None
    is_current: bool
    provision_exists: bool | None = None
    warnings: list[str] = Field(default_factory=list)


class SearchHitSchema(BaseModel):
    """A full-text search hit."""

    model_config = ConfigDict(from_attributes=True)

    document_id: str
    document_title: str
    provision_ref: str
    section: str
    snippet: str
    relevance: float = 0.0
