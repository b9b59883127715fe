"""
Domain layer - Core business entities and domain errors.

This layer contains the Provider entity and the exceptions raised across
the service, independent of any storage or framework concerns.
"""

from .entities import Provider
from .exceptions import (
    ProviderAlreadyExistsException,
    ProviderNotFoundException,
    ProviderServiceException,
    ValidationException,
)

__all__ = [
    "Provider",
    "ProviderAlreadyExistsException",
    "ProviderNotFoundException",
    "ProviderServiceException",
    "ValidationException",
]
