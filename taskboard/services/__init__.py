"""Services module."""
from .task import task_service
from .projection import project_tasks

__all__ = [
    "task_service",
    "project_tasks",
]
