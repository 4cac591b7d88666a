"""Task schemas."""
import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from ..models.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TaskPriority,
    TaskStatus,
)
from .common import BaseSchema


def _clean_title(value: Optional[str], missing_message: str) -> str:
    if value is None or not value.strip():
        raise ValueError(missing_message)
    value = value.strip()
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"Task title cannot exceed {TITLE_MAX_LENGTH} characters")
    return value


def _coerce_due_date(value):
    # An empty string means no due date
    if value == "":
        return None
    # Full ISO timestamps keep only their calendar date
    if isinstance(value, str) and "T" in value:
        try:
            return datetime.fromisoformat(value).date()
        except ValueError:
            return value
    return value


def _clean_description(value: Optional[str]) -> str:
    if value is None:
        return ""
    value = value.strip()
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(
            f"Task description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
        )
    return value


class TaskCreate(BaseSchema):
    """Fields accepted when creating a task. Null optional fields take defaults."""

    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = Field(None, validate_default=True, description="Task title")
    description: Optional[str] = Field("", description="Task description")
    priority: Optional[TaskPriority] = Field(TaskPriority.MEDIUM.value, description="Priority level")
    status: Optional[TaskStatus] = Field(TaskStatus.TODO.value, description="Workflow status")
    due_date: Optional[date] = Field(None, description="Due date")

    @field_validator("title")
    @classmethod
    def validate_title(cls, value):
        return _clean_title(value, "Task title is required")

    @field_validator("description")
    @classmethod
    def validate_description(cls, value):
        return _clean_description(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value):
        return _coerce_due_date(value)

    @field_validator("priority")
    @classmethod
    def default_priority(cls, value):
        return TaskPriority.MEDIUM.value if value is None else value

    @field_validator("status")
    @classmethod
    def default_status(cls, value):
        return TaskStatus.TODO.value if value is None else value


class TaskUpdate(BaseSchema):
    """Partial update. Only keys present in the request are validated and applied."""

    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = Field(None, description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    priority: Optional[TaskPriority] = Field(None, description="Priority level")
    status: Optional[TaskStatus] = Field(None, description="Workflow status")
    due_date: Optional[date] = Field(None, description="Due date, null clears it")

    @field_validator("title")
    @classmethod
    def validate_title(cls, value):
        return _clean_title(value, "Task title cannot be empty")

    @field_validator("description")
    @classmethod
    def validate_description(cls, value):
        return _clean_description(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value):
        return _coerce_due_date(value)

    @field_validator("priority")
    @classmethod
    def require_priority(cls, value):
        if value is None:
            raise ValueError("Invalid priority level")
        return value

    @field_validator("status")
    @classmethod
    def require_status(cls, value):
        if value is None:
            raise ValueError("Invalid status")
        return value


class TaskResponse(BaseSchema):
    """Task as returned to clients."""

    id: uuid.UUID = Field(..., description="Task ID")
    owner_id: uuid.UUID = Field(..., description="Owning user ID")
    title: str = Field(..., description="Task title")
    description: str = Field(..., description="Task description")
    priority: str = Field(..., description="Priority level")
    status: str = Field(..., description="Workflow status")
    due_date: Optional[date] = Field(None, description="Due date")
    completed_at: Optional[datetime] = Field(None, description="When the task entered done")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")


class TaskListResponse(BaseSchema):
    success: bool = True
    tasks: List[TaskResponse]
    count: int


class TaskDetailResponse(BaseSchema):
    success: bool = True
    task: TaskResponse


class TaskMutationResponse(BaseSchema):
    success: bool = True
    task: TaskResponse
    msg: str


class TaskStats(BaseSchema):
    """Counts derived from the owner's current tasks."""

    total: int = 0
    todo: int = 0
    in_progress: int = 0
    done: int = 0
    high_priority: int = 0


class TaskStatsResponse(BaseSchema):
    success: bool = True
    stats: TaskStats
