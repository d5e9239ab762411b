"""Authentication models for LeaseDesk."""

import enum

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from ...database import Base, TimestampMixin, UUIDPrimaryKey


class UserRole(str, enum.Enum):
    """Platform roles."""

    PROPERTY_MANAGER = "PROPERTY_MANAGER"
    TENANT = "TENANT"
    SERVICE_PRO = "SERVICE_PRO"


class User(UUIDPrimaryKey, TimestampMixin, Base):
    """A platform user. Property managers own properties, listings and tasks."""

    __tablename__ = "users"

    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole), nullable=False, default=UserRole.PROPERTY_MANAGER
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    is_email_verified: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
