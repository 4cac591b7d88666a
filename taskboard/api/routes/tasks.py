"""Task routes. All of them require a valid x-auth-token."""
import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ...schemas.common import SuccessResponse
from ...schemas.task import (
    TaskDetailResponse,
    TaskListResponse,
    TaskMutationResponse,
    TaskResponse,
    TaskStatsResponse,
)
from ...core.security import get_current_user_id
from ...services.task import task_service

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """List the current user's tasks, newest first."""
    tasks = await task_service.list_tasks(db, user_id)
    return TaskListResponse(
        tasks=[TaskResponse.model_validate(task) for task in tasks],
        count=len(tasks),
    )


@router.get("/stats/summary", response_model=TaskStatsResponse)
async def get_task_stats(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Counts by status and high priority."""
    stats = await task_service.get_stats(db, user_id)
    return TaskStatsResponse(stats=stats)


@router.get("/{task_id}", response_model=TaskDetailResponse)
async def get_task(
    task_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Get a single task."""
    task = await task_service.get_task(db, user_id, task_id)
    return TaskDetailResponse(task=TaskResponse.model_validate(task))


# Bodies are taken raw, even when missing or not an object, so that existence
# and ownership are checked before field validation
@router.post("", response_model=TaskMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    fields: Any = Body(None),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Create a task owned by the current user."""
    task = await task_service.create_task(db, user_id, fields)
    return TaskMutationResponse(
        task=TaskResponse.model_validate(task),
        msg="Task created successfully",
    )


@router.put("/{task_id}", response_model=TaskMutationResponse)
async def update_task(
    task_id: str,
    fields: Any = Body(None),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Partially update a task."""
    task = await task_service.update_task(db, user_id, task_id, fields)
    return TaskMutationResponse(
        task=TaskResponse.model_validate(task),
        msg="Task updated successfully",
    )


@router.delete("/{task_id}", response_model=SuccessResponse)
async def delete_task(
    task_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Delete a task permanently."""
    await task_service.delete_task(db, user_id, task_id)
    return SuccessResponse(msg="Task deleted successfully")
