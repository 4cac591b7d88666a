"""Database models module."""
from .base import Base
from .user import User
from .task import Task, TaskPriority, TaskStatus

__all__ = [
    "Base",
    "User",
    "Task",
    "TaskPriority",
    "TaskStatus",
]
