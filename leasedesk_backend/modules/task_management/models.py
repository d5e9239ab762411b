"""Task models for LeaseDesk.

Tasks are owned by the user who created them and may reference a property.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ...core.database_types import UUID as UUID_DB
from ...database import Base, TimestampMixin, UUIDPrimaryKey
from ..auth.models import User


class TaskStatus(str, enum.Enum):
    OPEN = "OPEN"
    RESOLVED = "RESOLVED"


class TaskFrequency(str, enum.Enum):
    """Repeat interval of a recurring task."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    EVERY_TWO_WEEKS = "EVERY_TWO_WEEKS"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    EVERY_SIX_MONTHS = "EVERY_SIX_MONTHS"
    YEARLY = "YEARLY"


class Task(UUIDPrimaryKey, TimestampMixin, Base):
    """A to-do item of a user, optionally tied to a property."""

    __tablename__ = "tasks"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID_DB(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus), nullable=False, default=TaskStatus.OPEN
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    time: Mapped[str | None] = mapped_column(String(20), nullable=True)
    assignee: Mapped[str | None] = mapped_column(String(255), nullable=True)
    property_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID_DB(), ForeignKey("properties.id", ondelete="SET NULL"), nullable=True
    )
    recurring: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    frequency: Mapped[TaskFrequency | None] = mapped_column(
        Enum(TaskFrequency), nullable=True
    )
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    user: Mapped[User] = relationship(User)

    __table_args__ = (
        Index("ix_tasks_user", "user_id"),
        Index("ix_tasks_property", "property_id"),
        Index("ix_tasks_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title}, status={self.status})>"
