"""Task management schemas for LeaseDesk."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ..auth.schemas import UserSummary
from .models import TaskFrequency, TaskStatus


class TaskBase(BaseModel):
    description: str | None = None
    date: datetime | None = None
    time: str | None = Field(None, max_length=20)
    assignee: str | None = Field(None, max_length=255)
    property_id: UUID | None = None
    frequency: TaskFrequency | None = None
    end_date: datetime | None = None


class TaskCreate(TaskBase):
    """Schema for creating a task."""

    title: str = Field(..., min_length=1, max_length=255)
    status: TaskStatus | None = None
    recurring: bool | None = None


class TaskUpdate(TaskBase):
    """Schema for updating a task. Only fields sent are applied."""

    title: str | None = Field(None, min_length=1, max_length=255)
    status: TaskStatus | None = None
    recurring: bool | None = None


class TaskResponse(TaskBase):
    id: UUID
    user_id: UUID
    title: str
    status: TaskStatus
    recurring: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: UserSummary

    class Config:
        from_attributes = True
