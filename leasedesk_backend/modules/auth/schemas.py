"""Authentication schemas for LeaseDesk."""

from uuid import UUID

from pydantic import BaseModel, EmailStr

from .models import UserRole


class UserSummary(BaseModel):
    """Minimal user info embedded in other responses."""

    id: UUID
    email: str
    full_name: str

    class Config:
        from_attributes = True


class AuthenticatedUser(BaseModel):
    """Authenticated user context for request handling."""

    id: UUID
    email: EmailStr
    full_name: str = ""
    role: UserRole = UserRole.PROPERTY_MANAGER
    is_email_verified: bool = False
    is_active: bool = True
