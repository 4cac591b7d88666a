"""Python client for the Taskboard API."""
from .api import ApiError, TaskboardClient
from .state import (
    Action,
    AuthState,
    TasksState,
    TaskboardStore,
    auth_reducer,
    select_visible_tasks,
    tasks_reducer,
)

__all__ = [
    "ApiError",
    "TaskboardClient",
    "Action",
    "AuthState",
    "TasksState",
    "TaskboardStore",
    "auth_reducer",
    "select_visible_tasks",
    "tasks_reducer",
]
