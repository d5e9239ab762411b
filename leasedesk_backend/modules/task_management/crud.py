"""CRUD operations for task management module."""

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .models import Task, TaskStatus


async def create_task(db: AsyncSession, **kwargs: Any) -> Task:
    """Insert a task row (flushed, not committed)."""
    task = Task(**kwargs)
    db.add(task)
    await db.flush()
    return task


async def get_task_by_id(db: AsyncSession, task_id: UUID) -> Task | None:
    """Get a task with its owner loaded."""
    result = await db.execute(
        select(Task)
        .options(selectinload(Task.user))
        .where(Task.id == task_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_tasks(
    db: AsyncSession,
    user_id: UUID | None = None,
    status: TaskStatus | None = None,
    property_id: UUID | None = None,
) -> list[Task]:
    """Get tasks matching the given filters, newest first."""
    query = select(Task).options(selectinload(Task.user))

    if user_id is not None:
        query = query.where(Task.user_id == user_id)
    if status is not None:
        query = query.where(Task.status == status)
    if property_id is not None:
        query = query.where(Task.property_id == property_id)

    query = query.order_by(Task.created_at.desc())
    result = await db.execute(query)
    return list(result.scalars().all())


async def update_task(db: AsyncSession, task: Task, **kwargs: Any) -> Task:
    """Apply the given columns to a task (flushed, not committed)."""
    for key, value in kwargs.items():
        if hasattr(task, key):
            setattr(task, key, value)
    await db.flush()
    return task


async def delete_task(db: AsyncSession, task: Task) -> None:
    await db.delete(task)
    await db.flush()
