"""Service layer - business operations on providers."""

from .provider_service import IProviderService, ProviderService

__all__ = ["IProviderService", "ProviderService"]
