"""
Business logic service layer.

Exposes provider operations to callers (HTTP handlers, workers) on top of
the repository contract.
"""

from abc import ABC, abstractmethod
from typing import List
from uuid import uuid4

import structlog

from ..domain.entities import Provider
from ..domain.exceptions import ValidationException
from ..repositories.provider_repository import IProviderRepository

logger = structlog.get_logger(__name__)


class IProviderService(ABC):
    """Business-facing provider operations."""

    @abstractmethod
    async def create_provider(self, short_name: str, long_name: str) -> Provider:
        """Create a provider with a freshly generated UUID."""
        pass

    @abstractmethod
    async def update_provider(
        self, uuid: str, short_name: str, long_name: str
    ) -> Provider:
        """Rename an existing provider."""
        pass

    @abstractmethod
    async def get_provider_by_uuid(self, uuid: str) -> Provider:
        """Get a provider by UUID."""
        pass

    @abstractmethod
    async def get_providers(self, limit: int = 0) -> List[Provider]:
        """List providers, at most limit when positive."""
        pass

    @abstractmethod
    async def delete_provider_by_uuid(self, uuid: str) -> None:
        """Delete a provider by UUID."""
        pass


class ProviderService(IProviderService):
    """
    Provider service backed by a provider repository.

    Generates identifiers and guards names; persistence and not-found
    detection are left to the repository.
    """

    def __init__(self, repository: IProviderRepository):
        """
        Initialize provider service.

        Args:
            repository: Storage for providers
        """
        self.repository = repository

    async def create_provider(self, short_name: str, long_name: str) -> Provider:
        """
        Create a provider.

        Args:
            short_name: Unique short name
            long_name: Descriptive name

        Returns:
            The created provider

        Raises:
            ValidationException: If a name is blank
            ProviderAlreadyExistsException: If the short name is taken
        """
        provider = Provider(
            uuid=str(uuid4()),
            short_name=self._clean("short_name", short_name),
            long_name=self._clean("long_name", long_name),
        )
        await self.repository.create_provider(provider)
        return provider

    async def update_provider(
        self, uuid: str, short_name: str, long_name: str
    ) -> Provider:
        """
        Update a provider's names.

        Raises:
            ValidationException: If a name is blank
            ProviderNotFoundException: If the provider doesn't exist
        """
        provider = Provider(
            uuid=uuid,
            short_name=self._clean("short_name", short_name),
            long_name=self._clean("long_name", long_name),
        )
        await self.repository.update_provider(provider)
        return await self.repository.get_provider_by_uuid(uuid)

    async def get_provider_by_uuid(self, uuid: str) -> Provider:
        return await self.repository.get_provider_by_uuid(uuid)

    async def get_providers(self, limit: int = 0) -> List[Provider]:
        return await self.repository.get_providers(max(limit, 0))

    async def delete_provider_by_uuid(self, uuid: str) -> None:
        await self.repository.delete_provider_by_uuid(uuid)

    @staticmethod
    def _clean(field: str, value: str) -> str:
        value = (value or "").strip()
        if not value:
            logger.warning("Rejected blank provider name", field=field)
            raise ValidationException(field, value, "must not be blank")
        return value
