"""
Provider repository interface (Abstract Base Class).

Defines the contract for provider persistence and retrieval
independent of the underlying storage mechanism.
"""

from abc import ABC, abstractmethod
from typing import List

from ..domain.entities import Provider


class IProviderRepository(ABC):
    """
    Abstract repository interface for provider storage operations.

    Lookups only ever see active (not soft-deleted) providers.
    """

    @abstractmethod
    async def create_provider(self, provider: Provider) -> None:
        """
        Persist a new provider.

        Args:
            provider: Provider entity to store

        Raises:
            ProviderAlreadyExistsException: If the UUID or active short name is taken
            IntegrityError: For any other constraint violation, unchanged
        """
        pass

    @abstractmethod
    async def update_provider(self, provider: Provider) -> None:
        """
        Update short and long name of the active provider with provider.uuid.

        Args:
            provider: Provider entity carrying the new names

        Raises:
            ProviderNotFoundException: If no active provider has that UUID
            ProviderAlreadyExistsException: If the new short name is taken
        """
        pass

    @abstractmethod
    async def delete_provider_by_uuid(self, uuid: str) -> None:
        """
        Delete the provider with the given UUID.

        Deleting an unknown UUID is not an error.

        Args:
            uuid: Provider UUID
        """
        pass

    @abstractmethod
    async def get_provider_by_uuid(self, uuid: str) -> Provider:
        """
        Get an active provider by UUID.

        Raises:
            ProviderNotFoundException: If no active provider has that UUID
        """
        pass

    @abstractmethod
    async def get_provider_by_short_name(self, short_name: str) -> Provider:
        """
        Get an active provider by short name.

        Raises:
            ProviderNotFoundException: If no active provider has that short name
        """
        pass

    @abstractmethod
    async def get_providers(self, limit: int = 0) -> List[Provider]:
        """
        List active providers.

        Args:
            limit: Maximum number of results, 0 or less for no limit

        Returns:
            List of providers, empty if there are none
        """
        pass
