"""Task service: validated CRUD scoped to the task owner."""
import uuid
from datetime import datetime, timezone
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ForbiddenError, NotFoundError, ValidationError
from ..core.logging import BusinessLogger
from ..models.task import Task, TaskPriority, TaskStatus
from ..schemas.task import TaskCreate, TaskStats, TaskUpdate

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Messages for type and enum errors that carry no message of their own
FIELD_ERROR_MESSAGES = {
    "title": "Task title must be a string",
    "description": "Task description must be a string",
    "priority": "Invalid priority level",
    "status": "Invalid status",
    "dueDate": "Invalid due date",
}


def _error_message(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    # Messages raised by our own validators
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    field = error["loc"][0] if error["loc"] else None
    return FIELD_ERROR_MESSAGES.get(field, f"Invalid value for {field}")


def validate_fields(schema: Type[SchemaT], fields: Any) -> SchemaT:
    """Validate a request body against a schema, raising the API ValidationError."""
    if fields is None:
        fields = {}
    if not isinstance(fields, dict):
        raise ValidationError("Invalid request body")
    try:
        return schema.model_validate(fields)
    except PydanticValidationError as e:
        raise ValidationError(
            _error_message(e),
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


def _completed_at_for(task: Task, new_status: str):
    if new_status != TaskStatus.DONE.value:
        return None
    if task.status == TaskStatus.DONE.value and task.completed_at is not None:
        return task.completed_at
    return datetime.now(timezone.utc)


class TaskService:
    """Task operations. Every method takes the owner id resolved by the access guard."""

    async def list_tasks(self, db: AsyncSession, owner_id: uuid.UUID) -> List[Task]:
        """All of the owner's tasks, newest first."""
        stmt = (
            select(Task)
            .where(Task.owner_id == owner_id)
            .order_by(Task.created_at.desc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def get_task(
        self,
        db: AsyncSession,
        owner_id: uuid.UUID,
        task_id: Any
    ) -> Task:
        """Fetch one task.

        Existence is checked before ownership, so a missing task is reported as
        NotFoundError to every caller.
        """
        try:
            task_uuid = task_id if isinstance(task_id, uuid.UUID) else uuid.UUID(str(task_id))
        except ValueError:
            raise NotFoundError("Task not found") from None

        task = await db.get(Task, task_uuid)
        if task is None:
            raise NotFoundError("Task not found")

        if task.owner_id != owner_id:
            raise ForbiddenError()

        return task

    async def create_task(
        self,
        db: AsyncSession,
        owner_id: uuid.UUID,
        fields: Any
    ) -> Task:
        """Validate and persist a new task for the owner."""
        data = validate_fields(TaskCreate, fields)

        task = Task(owner_id=owner_id, **data.model_dump())
        if task.status == TaskStatus.DONE.value:
            task.completed_at = datetime.now(timezone.utc)

        db.add(task)
        await db.commit()
        await db.refresh(task)

        BusinessLogger.log_task_created(
            task_id=str(task.id),
            user_id=str(owner_id),
            priority=task.priority,
            status=task.status
        )
        return task

    async def update_task(
        self,
        db: AsyncSession,
        owner_id: uuid.UUID,
        task_id: Any,
        fields: Any
    ) -> Task:
        """Apply the fields present in the request; absent fields keep their values."""
        task = await self.get_task(db, owner_id, task_id)
        changes = validate_fields(TaskUpdate, fields).model_dump(exclude_unset=True)

        if "status" in changes:
            task.completed_at = _completed_at_for(task, changes["status"])

        for name, value in changes.items():
            setattr(task, name, value)

        await db.commit()
        await db.refresh(task)

        BusinessLogger.log_task_updated(
            task_id=str(task.id),
            user_id=str(owner_id),
            fields=sorted(changes)
        )
        return task

    async def delete_task(
        self,
        db: AsyncSession,
        owner_id: uuid.UUID,
        task_id: Any
    ) -> None:
        """Permanently remove the task."""
        task = await self.get_task(db, owner_id, task_id)

        await db.delete(task)
        await db.commit()

        BusinessLogger.log_task_deleted(task_id=str(task.id), user_id=str(owner_id))

    async def get_stats(self, db: AsyncSession, owner_id: uuid.UUID) -> TaskStats:
        """Counts by status plus the number of high priority tasks."""
        tasks = await self.list_tasks(db, owner_id)
        return TaskStats(
            total=len(tasks),
            todo=sum(1 for t in tasks if t.status == TaskStatus.TODO.value),
            in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS.value),
            done=sum(1 for t in tasks if t.status == TaskStatus.DONE.value),
            high_priority=sum(1 for t in tasks if t.priority == TaskPriority.HIGH.value),
        )


# Global task service instance
task_service = TaskService()
