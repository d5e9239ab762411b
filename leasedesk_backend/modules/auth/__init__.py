"""Authentication module for LeaseDesk."""

from .dependencies import CurrentUser, get_current_user
from .models import User, UserRole
from .schemas import AuthenticatedUser, UserSummary

__all__ = [
    # Models
    "User",
    "UserRole",
    # Dependencies
    "get_current_user",
    "CurrentUser",
    # Schemas
    "AuthenticatedUser",
    "UserSummary",
]
