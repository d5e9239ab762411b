"""Task management module for LeaseDesk."""

from .models import Task, TaskFrequency, TaskStatus
from .routers import router

__all__ = [
    "router",
    "Task",
    "TaskStatus",
    "TaskFrequency",
]
