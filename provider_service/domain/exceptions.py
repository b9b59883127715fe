"""
Custom exceptions for the provider service domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, database, etc.).
"""

from typing import Any, Optional


class ProviderServiceException(Exception):
    """Base exception for all provider service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ProviderNotFoundException(ProviderServiceException):
    """Raised when no active provider matches the lookup key."""

    def __init__(self, key: str, key_type: str = "uuid"):
        message = f"Provider with '{key}' {key_type} doesn't exist"
        super().__init__(message=message, details={"key": key, "key_type": key_type})


class ProviderAlreadyExistsException(ProviderServiceException):
    """Raised when a write violates a provider uniqueness constraint."""

    def __init__(
        self, key: str, key_type: str = "short name", reason: Optional[str] = None
    ):
        message = f"Provider with '{key}' {key_type} already exists"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message,
            details={"key": key, "key_type": key_type, "reason": reason},
        )


class ValidationException(ProviderServiceException):
    """Raised when input validation fails."""

    def __init__(self, field: str, value: Any, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(
            message=message,
            details={"field": field, "value": str(value), "reason": reason},
        )
