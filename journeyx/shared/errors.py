"""
Exception taxonomy for the itinerary pipeline.

Parser and validator errors describe bad model output, precondition
errors describe calls made in the wrong session state, and transport
errors describe failures of the outbound generation or sync calls.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class JourneyXError(Exception):
    """Base exception for all JourneyX errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """
        Initialize exception with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class MalformedResponseError(JourneyXError):
    """Raised when model output cannot be interpreted as JSON at all."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message, context={"raw_text": raw_text[:500]})
        self.raw_text = raw_text


class SchemaValidationError(JourneyXError):
    """
    Raised when parsed data does not match the TripPlan shape.

    The message aggregates every violation; ``violations`` keeps them
    as ``(path, reason)`` pairs for programmatic use.
    """

    def __init__(self, message: str, violations: Optional[List[tuple]] = None):
        super().__init__(message)
        self.violations = violations or []


class PreconditionError(JourneyXError):
    """Raised when an operation is requested without its required state."""

    pass


class ConfigurationError(JourneyXError):
    """Raised when a required credential or endpoint is missing."""

    pass


class TransportError(JourneyXError):
    """Raised when an outbound network call fails."""

    pass


class SyncErrorCategory(str, Enum):
    """Buckets used to pick a user-facing sync failure message."""

    PERMISSION = "permission"
    NETWORK = "network"
    CONFIG = "config"
    TIMEOUT = "timeout"
    GENERIC = "generic"


class SyncError(TransportError):
    """Raised when writing a travel book to the document sink fails."""

    def __init__(
        self,
        message: str,
        category: SyncErrorCategory = SyncErrorCategory.GENERIC,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.category = category


class SyncTimeoutError(SyncError):
    """Raised when the document write does not settle within the budget."""

    def __init__(self, message: str, timeout_seconds: float):
        super().__init__(
            message,
            category=SyncErrorCategory.TIMEOUT,
            context={"timeout_seconds": timeout_seconds},
        )
        self.timeout_seconds = timeout_seconds
