"""Custom Exception Hierarchy for the activity rings engine
This module defines a typed exception hierarchy that lets callers tell the
engine's degraded states apart without inspecting messages.

Exception Handling Flow:
    1. Provider, persistence or validation layer raises a typed exception
    2. The owning component (aggregator or goal store) catches it
    3. The failure is logged and folded into degraded data (zero totals,
       default goals, ``persisted=False``)
    4. Only ``ValidationError`` and ``ConfigurationError`` reach the caller
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all engine errors."""


class ValidationError(ServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class ProviderError(ServiceError):
    """Raised when the health data provider fails."""

    def __init__(self, message: str, provider: str | None = None, original_error: Exception | None = None):
        self.message = message
        self.provider = provider
        self.original_error = original_error
        super().__init__(self.message)


class ProviderUnavailableError(ProviderError):
    """Raised when health data is not present on the platform or not authorised."""


class QueryFailureError(ProviderError):
    """Raised when a single category query fails."""

    def __init__(
        self,
        message: str,
        category: str | None = None,
        provider: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, provider=provider, original_error=original_error)
        self.category = category


class PersistenceError(ServiceError):
    """Raised when goal values cannot be loaded or saved."""

    def __init__(self, message: str, operation: str | None = None, key: str | None = None):
        self.message = message
        self.operation = operation
        self.key = key
        super().__init__(self.message)


class ConfigurationError(ServiceError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(self.message)


__all__ = [
    "ConfigurationError",
    "PersistenceError",
    "ProviderError",
    "ProviderUnavailableError",
    "QueryFailureError",
    "ServiceError",
    "ValidationError",
]
