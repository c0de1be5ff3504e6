"""Domain errors for the entity resolution engine."""

from typing import Any


class EntityResolutionError(Exception):
    """Base class for entity resolution errors."""


class InvalidRecordError(EntityResolutionError, ValueError):
    """Raised when a record (or raw payload) cannot take part in matching.

    The engine is total over well-formed records; this is only raised at the
    boundary, e.g. for a record with neither an external id nor a usable title,
    which would otherwise corrupt batch grouping.
    """

    def __init__(self, reason: str, record: Any = None) -> None:
        """Initialize invalid record error.

        Args:
            reason: Human readable explanation of the contract violation.
            record: Offending record or payload, if available.
        """
        super().__init__(reason)
        self.reason = reason
        self.record = record
