"""
Repository layer - Data access abstractions.

This layer provides interfaces for data persistence and retrieval,
hiding implementation details from the business logic.
"""

from .provider_repository import IProviderRepository
from .sql_repository import SQLProviderRepository

__all__ = ["IProviderRepository", "SQLProviderRepository"]
