"""Pydantic schemas module.

This module contains Pydantic models used to serialize engine results for
whatever transport the enclosing system uses.

Naming convention:
- Schema suffix to distinguish from engine dataclasses and SQLAlchemy models
"""

from app.schemas.citation import (
    CurrencySchema,
    FtsQueryVariantsSchema,
    ParsedCitationSchema,
    ProvisionSchema,
    SearchHitSchema,
    ValidationResultSchema,
)

__all__ = [
    "CurrencySchema",
    "FtsQueryVariantsSchema",
    "ParsedCitationSchema",
    "ProvisionSchema",
    "SearchHitSchema",
    "ValidationResultSchema",
]
