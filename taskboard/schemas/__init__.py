"""Pydantic schemas module."""
from .auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
)
from .task import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    TaskListResponse,
    TaskDetailResponse,
    TaskMutationResponse,
    TaskStats,
    TaskStatsResponse,
)
from .common import (
    ErrorResponse,
    HealthResponse,
    SuccessResponse,
)

__all__ = [
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    # Task
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskListResponse",
    "TaskDetailResponse",
    "TaskMutationResponse",
    "TaskStats",
    "TaskStatsResponse",
    # Common
    "ErrorResponse",
    "HealthResponse",
    "SuccessResponse",
]
