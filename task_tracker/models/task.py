"""Pydantic models for task API."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class TaskStatus(str, Enum):
    """Task status enumeration."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


UPDATABLE_FIELDS = frozenset({"title", "description", "status"})


def _require_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Task title cannot be empty")
    return value


class TaskCreate(BaseModel):
    """Request model for creating a task."""

    model_config = ConfigDict(extra="ignore")

    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _require_title(value)


class TaskUpdate(BaseModel):
    """Request model for updating a task.

    Only the listed fields may be sent; any other key fails validation,
    so a request is either applied whole or rejected.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None

    @field_validator("title", "description", "status", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        return _require_title(value)

    def changes(self) -> dict[str, str]:
        """Return the fields that were sent, with enum values unwrapped."""
        fields = self.model_dump(exclude_unset=True)
        if "status" in fields:
            fields["status"] = fields["status"].value
        return fields


class TaskResponse(BaseModel):
    """Response model for a task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime
