"""
Test configuration and fixtures
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from provider_service.database import create_session_factory, init_db
from provider_service.domain.entities import Provider
from provider_service.models import Base
from provider_service.repositories.sql_repository import SQLProviderRepository
from provider_service.services.provider_service import ProviderService

# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def engine():
    """Create a fresh in-memory database for each test"""
    test_engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(test_engine)
    try:
        yield test_engine
    finally:
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test engine"""
    return create_session_factory(engine)


@pytest.fixture
def repository(engine):
    """SQL provider repository over the test database"""
    return SQLProviderRepository(engine)


@pytest.fixture
def service(repository):
    """Provider service over the SQL repository"""
    return ProviderService(repository)


@pytest.fixture
def sample_provider():
    """Sample provider for testing"""
    return Provider(uuid="u1", short_name="acme", long_name="Acme Corp")
