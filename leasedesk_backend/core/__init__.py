"""Core infrastructure for LeaseDesk backend."""

from .database_types import UUID
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    ExternalServiceError,
    LeaseDeskException,
    NotFoundError,
    PermissionError,
    ValidationError,
)

__all__ = [
    "UUID",
    "LeaseDeskException",
    "NotFoundError",
    "ValidationError",
    "PermissionError",
    "AuthenticationError",
    "ExternalServiceError",
    "ConfigurationError",
]
