"""
Database configuration and connection management.

Builds the async engine and session factory shared by all repositories.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .config import Settings, get_settings
from .models import Base

logger = structlog.get_logger(__name__)


def get_database_url(settings: Optional[Settings] = None) -> str:
    """
    Get database URL from settings.

    Args:
        settings: Settings to read from, defaults to the process settings

    Returns:
        Database connection URL
    """
    settings = settings or get_settings()
    db_url = settings.DATABASE_URL

    # Sanitize for logging
    if "@" in db_url:
        safe_url = db_url.split("@")[0].rsplit(":", 1)[0] + ":***@..."
    else:
        safe_url = db_url

    logger.info("Using database", url=safe_url)
    return db_url


def get_engine_options(settings: Settings) -> dict:
    """
    Get database-specific engine arguments.

    SQLite does not take queue pool settings; an in-memory SQLite database
    needs a single shared connection to be visible across sessions.

    Args:
        settings: Service settings

    Returns:
        Keyword arguments for create_async_engine
    """
    if settings.is_sqlite:
        options: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in settings.DATABASE_URL:
            options["poolclass"] = StaticPool
        return options

    return {
        "pool_pre_ping": settings.DB_POOL_PRE_PING,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
    }


def register_query_timing(engine: AsyncEngine, threshold_ms: int) -> None:
    """
    Log statements slower than threshold_ms.

    Args:
        engine: Engine to instrument
        threshold_ms: Slow query threshold in milliseconds
    """
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        """Track query start time."""
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(sync_engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        """Log slow queries."""
        total_time_ms = (time.perf_counter() - conn.info["query_start_time"].pop()) * 1000

        if total_time_ms > threshold_ms:
            logger.warning(
                "Slow query detected",
                query_time_ms=round(total_time_ms, 2),
                statement=statement[:200],
            )

    @event.listens_for(sync_engine, "handle_error")
    def handle_error(context):
        """Drop the start time of a statement that raised."""
        conn = context.connection
        if conn is not None and conn.info.get("query_start_time"):
            conn.info["query_start_time"].pop()


def create_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    Args:
        settings: Settings to read from, defaults to the process settings

    Returns:
        Configured AsyncEngine
    """
    settings = settings or get_settings()
    engine = create_async_engine(
        get_database_url(settings),
        echo=settings.DB_ECHO,
        **get_engine_options(settings),
    )
    register_query_timing(engine, settings.QUERY_LOG_THRESHOLD_MS)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create a session factory bound to engine.

    Args:
        engine: Async engine

    Returns:
        Session factory producing AsyncSession instances
    """
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database tables.

    Uses checkfirst semantics so existing tables are left untouched.
    """
    try:
        logger.info("Initializing database tables")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session that is closed on exit.

    Yields:
        SQLAlchemy async session

    Example:
        async with session_scope(factory) as session:
            result = await session.execute(select(ProviderRecord))
    """
    session = session_factory()
    try:
        yield session
    finally:
        await session.close()
