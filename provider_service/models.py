"""
Database models for provider service.

This module defines the SQLAlchemy ORM model backing the provider table.
"""

from typing import Any

from sqlalchemy import Column, DateTime, Index, Integer, String, text
from sqlalchemy.orm import declarative_base

Base: Any = declarative_base()


class ProviderRecord(Base):
    """
    Storage representation of a provider.

    Adds identity and bookkeeping columns to the domain entity. A non-null
    deleted_at marks the row as logically deleted.

    Attributes:
        id: Primary key identifier
        uuid: Globally unique provider identifier, immutable after creation
        short_name: Short name, unique among active rows
        long_name: Descriptive name
        created_at: Timestamp of row creation
        updated_at: Timestamp of last row update
        deleted_at: Soft-delete marker
    """

    __tablename__ = "provider"

    id = Column(Integer, primary_key=True, autoincrement=True)

    uuid = Column(String(36), unique=True, index=True, nullable=False)
    short_name = Column(String(100), index=True, nullable=False)
    long_name = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # Short names only have to be unique among active rows
    __table_args__ = (
        Index(
            "uq_provider_short_name_active",
            "short_name",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    def is_deleted(self) -> bool:
        """
        Check if the row has been soft-deleted.

        Returns:
            True if deleted_at is set, False otherwise
        """
        return self.deleted_at is not None

    def __repr__(self) -> str:
        return (
            f"<ProviderRecord id={self.id} uuid={self.uuid!r} "
            f"short_name={self.short_name!r}>"
        )
