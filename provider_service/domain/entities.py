"""
Domain entities for providers.

Framework-agnostic business objects; storage bookkeeping lives in the
persistence model, not here.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Provider:
    """
    A provider identified by a globally unique UUID.

    Immutable so that a value handed to the repository cannot change
    underneath it.
    """

    uuid: str
    short_name: str
    long_name: str

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "uuid": self.uuid,
            "shortName": self.short_name,
            "longName": self.long_name,
        }
