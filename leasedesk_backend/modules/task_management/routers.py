"""Task management API routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, MessageResponse
from . import services
from .models import TaskStatus
from .schemas import TaskCreate, TaskResponse, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.post("", response_model=BaseResponse[TaskResponse], status_code=201)
async def create_task(
    data: TaskCreate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a new task."""
    task = await services.create_task(db, data, user_id=current_user.id)
    return BaseResponse(
        success=True,
        message="Task created successfully",
        data=TaskResponse.model_validate(task),
    )


@router.get("", response_model=BaseResponse[list[TaskResponse]])
async def list_tasks(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    status: TaskStatus | None = Query(None),
    property_id: UUID | None = Query(None),
):
    """Get the caller's tasks with optional filtering."""
    tasks = await services.get_tasks(
        db, user_id=current_user.id, status=status, property_id=property_id
    )
    return BaseResponse(
        success=True,
        data=[TaskResponse.model_validate(t) for t in tasks],
    )


@router.get("/property/{property_id}", response_model=BaseResponse[list[TaskResponse]])
async def list_property_tasks(
    property_id: UUID,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the caller's tasks for one property."""
    tasks = await services.get_tasks_by_property(
        db, property_id, user_id=current_user.id
    )
    return BaseResponse(
        success=True,
        data=[TaskResponse.model_validate(t) for t in tasks],
    )


@router.get("/{task_id}", response_model=BaseResponse[TaskResponse])
async def get_task(
    task_id: UUID,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get a task by ID."""
    task = await services.get_task(db, task_id, user_id=current_user.id)
    return BaseResponse(success=True, data=TaskResponse.model_validate(task))


@router.patch("/{task_id}", response_model=BaseResponse[TaskResponse])
async def update_task(
    task_id: UUID,
    data: TaskUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a task."""
    task = await services.update_task(db, task_id, data, user_id=current_user.id)
    return BaseResponse(
        success=True,
        message="Task updated successfully",
        data=TaskResponse.model_validate(task),
    )


@router.delete("/{task_id}", response_model=BaseResponse[MessageResponse])
async def delete_task(
    task_id: UUID,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a task."""
    result = await services.remove_task(db, task_id, user_id=current_user.id)
    return BaseResponse(
        success=True,
        message=result["message"],
        data=MessageResponse(**result),
    )
