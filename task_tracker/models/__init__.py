"""Models package."""

from .task import UPDATABLE_FIELDS, TaskCreate, TaskResponse, TaskStatus, TaskUpdate

__all__ = [
    "UPDATABLE_FIELDS",
    "TaskStatus",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
]
