"""SQLAlchemy ENUM types for the statute database."""

import enum


class DocumentStatus(str, enum.Enum):
    """Lifecycle status of a statute in the RIS corpus."""

    IN_FORCE = "in_force"
    AMENDED = "amended"
    REPEALED = "repealed"
    NOT_YET_IN_FORCE = "not_yet_in_force"


class DocumentType(str, enum.Enum):
    """Type of legal document."""

    STATUTE = "statute"  # Bundesgesetz, Bundesverfassungsgesetz
    STATUTORY_INSTRUMENT = "statutory_instrument"  # Verordnung
    TREATY = "treaty"  # Staatsvertrag
