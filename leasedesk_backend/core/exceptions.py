"""
Custom exception classes for consistent error handling across all modules.

Each exception carries the HTTP status code the API layer renders it with.
"""

from typing import Any


class LeaseDeskException(Exception):
    """Base exception for all LeaseDesk related errors."""

    status_code: int = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(LeaseDeskException):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(
        self, message: str = "Resource not found", details: dict[str, Any] | None = None
    ):
        super().__init__(message, details)


class ValidationError(LeaseDeskException):
    """Raised when data validation fails."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        if field:
            full_message = f"Validation error for field '{field}': {message}"
        else:
            full_message = message
        super().__init__(full_message, details)
        self.field = field
        self.value = value


class PermissionError(LeaseDeskException):
    """Raised when user lacks permission to perform an action."""

    status_code = 403

    def __init__(
        self,
        message: str = "Permission denied",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class AuthenticationError(LeaseDeskException):
    """Raised when authentication fails."""

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class ExternalServiceError(LeaseDeskException):
    """Raised when external service integration fails."""

    status_code = 500

    def __init__(
        self,
        service_name: str,
        operation: str,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        message = message or (
            f"External service '{service_name}' failed during '{operation}'"
        )
        super().__init__(message, details)
        self.service_name = service_name
        self.operation = operation


class ConfigurationError(LeaseDeskException):
    """Raised when required configuration is missing at startup."""

    status_code = 500
