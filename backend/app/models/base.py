"""Base model class and database session configuration."""

from sqlalchemy import Enum as SAEnum
from sqlalchemy import MetaData, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import settings

# Naming convention for constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)


def enum_column(enum_class: type, name: str, **kwargs: object) -> SAEnum:
    """Create an Enum column that uses Python enum .value (not .name) for DB storage."""
    return SAEnum(
        enum_class,
        name=name,
        values_callable=lambda x: [e.value for e in x],
        native_enum=False,
        **kwargs,
    )


class Base(DeclarativeBase):
    """Base class for all models."""

    metadata = metadata


def make_session_factory(database_url: str | None = None) -> sessionmaker[Session]:
    """Create a synchronous session factory.

    Lookups are short point/prefix queries, so a synchronous engine is used.

    Args:
        database_url: SQLAlchemy URL; defaults to ``settings.database_url``.
    """
    engine = create_engine(database_url or settings.database_url, echo=settings.debug)
    return sessionmaker(engine, expire_on_commit=False)

