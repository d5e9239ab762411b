"""Task management business logic services."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, PermissionError
from . import crud
from .models import Task, TaskStatus
from .schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


async def _get_owned_task(
    db: AsyncSession, task_id: UUID, user_id: UUID | None, action: str
) -> Task:
    task = await crud.get_task_by_id(db, task_id)
    if not task:
        raise NotFoundError(f"Task with ID {task_id} not found")
    if user_id is not None and task.user_id != user_id:
        raise PermissionError(f"You do not have permission to {action} this task")
    return task


async def create_task(db: AsyncSession, data: TaskCreate, user_id: UUID) -> Task:
    """Create a task owned by ``user_id``.

    Status defaults to OPEN and ``recurring`` to False.
    """
    values = data.model_dump()
    values["status"] = data.status or TaskStatus.OPEN
    values["recurring"] = bool(data.recurring)

    task = await crud.create_task(db, user_id=user_id, **values)
    await db.commit()

    logger.info("Task created", extra={"task_id": str(task.id)})
    return await crud.get_task_by_id(db, task.id)


async def get_tasks(
    db: AsyncSession,
    user_id: UUID | None = None,
    status: TaskStatus | None = None,
    property_id: UUID | None = None,
) -> list[Task]:
    """Get tasks, optionally filtered by owner, status and property."""
    return await crud.get_tasks(
        db, user_id=user_id, status=status, property_id=property_id
    )


async def get_tasks_by_property(
    db: AsyncSession, property_id: UUID, user_id: UUID | None = None
) -> list[Task]:
    return await crud.get_tasks(db, user_id=user_id, property_id=property_id)


async def get_task(db: AsyncSession, task_id: UUID, user_id: UUID | None = None) -> Task:
    """Get a single task.

    Raises:
        NotFoundError: If the task does not exist
        PermissionError: If the caller does not own the task
    """
    return await _get_owned_task(db, task_id, user_id, "view")


async def update_task(
    db: AsyncSession,
    task_id: UUID,
    data: TaskUpdate,
    user_id: UUID | None = None,
) -> Task:
    """Update a task with the fields present in the request.

    Args:
        db: Database session
        task_id: Task to update
        data: Update data; unset fields are left alone
        user_id: Caller; must own the task when given

    Returns:
        Updated task

    Raises:
        NotFoundError: If the task does not exist
        PermissionError: If the caller does not own the task
    """
    task = await _get_owned_task(db, task_id, user_id, "update")

    changes = data.model_dump(exclude_unset=True)
    # title, status and recurring are required columns
    for field in ("title", "status", "recurring"):
        if field in changes and changes[field] is None:
            del changes[field]

    await crud.update_task(db, task, **changes)
    await db.commit()
    return await crud.get_task_by_id(db, task_id)


async def remove_task(
    db: AsyncSession, task_id: UUID, user_id: UUID | None = None
) -> dict[str, Any]:
    """Delete a task.

    Raises:
        NotFoundError: If the task does not exist
        PermissionError: If the caller does not own the task
    """
    task = await _get_owned_task(db, task_id, user_id, "delete")
    await crud.delete_task(db, task)
    await db.commit()

    logger.info("Task deleted", extra={"task_id": str(task_id)})
    return {"message": "Task deleted successfully"}
