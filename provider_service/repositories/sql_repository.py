"""
SQL implementation of the provider repository.

Translates between the Provider entity and ProviderRecord rows and maps
storage failures onto domain exceptions.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import structlog
from sqlalchemy import Select, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from ..database import create_session_factory, init_db, session_scope
from ..domain.entities import Provider
from ..domain.exceptions import (
    ProviderAlreadyExistsException,
    ProviderNotFoundException,
)
from ..models import ProviderRecord
from .provider_repository import IProviderRepository

logger = structlog.get_logger(__name__)

# PostgreSQL unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"
SQLITE_UNIQUE_VIOLATION = "SQLITE_CONSTRAINT_UNIQUE"

KEY_TYPES = {"uuid": "uuid", "short_name": "short name"}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _active() -> Select:
    return select(ProviderRecord).where(ProviderRecord.deleted_at.is_(None))


def _unique_index_columns() -> Dict[str, str]:
    """Map each unique index on the provider table to its column."""
    return {
        index.name: list(index.columns)[0].name
        for index in ProviderRecord.__table__.indexes
        if index.unique
    }


def _violated_unique_column(error: IntegrityError) -> Optional[str]:
    """
    Find the provider column whose unique index a write violated.

    PostgreSQL (asyncpg) reports the SQLSTATE and the violated index name;
    SQLite reports an extended error name and the table.column list.

    Returns:
        Column name, or None if error is not a unique violation on provider
    """
    orig = error.orig
    cause = getattr(orig, "__cause__", None)

    sqlstate = getattr(orig, "sqlstate", None) or getattr(cause, "sqlstate", None)
    if sqlstate is not None:
        if sqlstate != UNIQUE_VIOLATION_SQLSTATE:
            return None
        constraint = getattr(cause, "constraint_name", None) or getattr(
            getattr(orig, "diag", None), "constraint_name", None
        )
        return _unique_index_columns().get(constraint)

    sqlite_error = orig if hasattr(orig, "sqlite_errorname") else cause
    if getattr(sqlite_error, "sqlite_errorname", None) == SQLITE_UNIQUE_VIOLATION:
        _, _, columns = str(sqlite_error).partition("failed:")
        table, _, column = columns.strip().split(",")[0].partition(".")
        if table == ProviderRecord.__tablename__ and column in KEY_TYPES:
            return column

    return None


class SQLProviderRepository(IProviderRepository):
    """SQL implementation for provider persistence with soft deletion."""

    def __init__(self, engine: AsyncEngine):
        """
        Initialize repository.

        Args:
            engine: Async engine; every operation checks out its own session
        """
        self.engine = engine
        self._session_factory = create_session_factory(engine)

    @classmethod
    async def create(
        cls, engine: AsyncEngine, automigrate: bool = False
    ) -> "SQLProviderRepository":
        """
        Build a repository, creating the schema first when automigrate is set.

        Args:
            engine: Async engine
            automigrate: Create missing tables before returning

        Returns:
            Ready-to-use repository
        """
        if automigrate:
            await init_db(engine)
        return cls(engine)

    async def create_provider(self, provider: Provider) -> None:
        """Insert a new active provider row."""
        record = self._to_record(provider, _utcnow())
        try:
            async with session_scope(self._session_factory) as session:
                async with session.begin():
                    session.add(record)
        except IntegrityError as e:
            conflict = self._conflict(e, provider)
            logger.error(
                "Failed creating new provider",
                uuid=provider.uuid,
                short_name=provider.short_name,
                error=str(e.orig),
            )
            if conflict is None:
                raise
            raise conflict from e
        except SQLAlchemyError as e:
            logger.error("Failed creating new provider", uuid=provider.uuid, error=str(e))
            raise

        logger.info("Created provider", uuid=provider.uuid, short_name=provider.short_name)

    async def update_provider(self, provider: Provider) -> None:
        """Update the names of the active provider with provider.uuid."""
        stmt = (
            update(ProviderRecord)
            .where(
                ProviderRecord.uuid == provider.uuid,
                ProviderRecord.deleted_at.is_(None),
            )
            .values(
                short_name=provider.short_name,
                long_name=provider.long_name,
                updated_at=_utcnow(),
            )
            .execution_options(synchronize_session=False)
        )

        try:
            async with session_scope(self._session_factory) as session:
                async with session.begin():
                    result = await session.execute(stmt)
                    updated = result.rowcount
        except IntegrityError as e:
            conflict = self._conflict(e, provider)
            logger.error(
                "Failed updating provider",
                uuid=provider.uuid,
                short_name=provider.short_name,
                error=str(e.orig),
            )
            if conflict is None:
                raise
            raise conflict from e
        except SQLAlchemyError as e:
            logger.error("Failed updating provider", uuid=provider.uuid, error=str(e))
            raise

        if updated == 0:
            logger.warning("Provider doesn't exist", key=provider.uuid, key_type="uuid")
            raise ProviderNotFoundException(provider.uuid, "uuid")

    async def delete_provider_by_uuid(self, uuid: str) -> None:
        """Soft-delete the active provider with uuid, if any."""
        now = _utcnow()
        stmt = (
            update(ProviderRecord)
            .where(ProviderRecord.uuid == uuid, ProviderRecord.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )

        try:
            async with session_scope(self._session_factory) as session:
                async with session.begin():
                    result = await session.execute(stmt)
                    deleted = result.rowcount
        except SQLAlchemyError as e:
            logger.error("Failed deleting provider", uuid=uuid, error=str(e))
            raise

        if deleted:
            logger.info("Deleted provider", uuid=uuid)

    async def get_provider_by_uuid(self, uuid: str) -> Provider:
        """Get the active provider with uuid."""
        stmt = _active().where(ProviderRecord.uuid == uuid).limit(1)
        return await self._get_one(stmt, uuid, "uuid")

    async def get_provider_by_short_name(self, short_name: str) -> Provider:
        """Get the active provider with short_name."""
        stmt = _active().where(ProviderRecord.short_name == short_name).limit(1)
        return await self._get_one(stmt, short_name, "short name")

    async def get_providers(self, limit: int = 0) -> List[Provider]:
        """List active providers ordered by insertion, capped at limit if positive."""
        stmt = _active().order_by(ProviderRecord.id)
        if limit > 0:
            stmt = stmt.limit(limit)

        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(stmt)
                records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Failed getting providers", limit=limit, error=str(e))
            raise

        return [self._to_entity(record) for record in records]

    async def _get_one(self, stmt: Select, key: str, key_type: str) -> Provider:
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(stmt)
                record = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Failed getting provider", key=key, key_type=key_type, error=str(e))
            raise

        if record is None:
            logger.warning("Provider doesn't exist", key=key, key_type=key_type)
            raise ProviderNotFoundException(key, key_type)

        return self._to_entity(record)

    @staticmethod
    def _conflict(
        error: IntegrityError, provider: Provider
    ) -> Optional[ProviderAlreadyExistsException]:
        """Translate a unique violation into a domain error, None for anything else."""
        column = _violated_unique_column(error)
        if column is None:
            return None
        return ProviderAlreadyExistsException(
            getattr(provider, column), KEY_TYPES[column], "unique constraint violated"
        )

    @staticmethod
    def _to_record(provider: Provider, now: datetime) -> ProviderRecord:
        """Map domain entity to a new database row."""
        return ProviderRecord(
            uuid=provider.uuid,
            short_name=provider.short_name,
            long_name=provider.long_name,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )

    @staticmethod
    def _to_entity(record: ProviderRecord) -> Provider:
        """Map database row to domain entity."""
        return Provider(
            uuid=record.uuid,
            short_name=record.short_name,
            long_name=record.long_name,
        )
