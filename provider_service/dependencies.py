"""
Shared dependencies for the application.

Wires settings, engine, repository and service together and holds the
process-wide service instance.
"""

from typing import Optional

import structlog

from .config import Settings, get_settings
from .database import create_engine
from .logging_config import setup_logging
from .repositories.sql_repository import SQLProviderRepository
from .services.provider_service import ProviderService

logger = structlog.get_logger(__name__)

# Global service instance (set during startup)
_provider_service: Optional[ProviderService] = None


async def build_provider_service(settings: Optional[Settings] = None) -> ProviderService:
    """
    Build a provider service backed by the configured database.

    Args:
        settings: Settings to read from, defaults to the process settings

    Returns:
        Provider service ready for use
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.SERVICE_NAME, settings.LOG_JSON)

    engine = create_engine(settings)
    repository = await SQLProviderRepository.create(
        engine, automigrate=settings.DB_AUTOMIGRATE
    )
    logger.info(
        "Provider service initialized",
        automigrate=settings.DB_AUTOMIGRATE,
    )
    return ProviderService(repository)


def set_provider_service(service: Optional[ProviderService]) -> None:
    """
    Set the global provider service instance.

    Called during startup, and with None on shutdown.
    """
    global _provider_service
    _provider_service = service


def get_provider_service() -> ProviderService:
    """
    Get provider service instance for dependency injection.

    Raises:
        RuntimeError: If the service has not been set
    """
    if _provider_service is None:
        raise RuntimeError("Provider service not initialized")
    return _provider_service
