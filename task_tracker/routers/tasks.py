"""Task API router."""

from fastapi import APIRouter, Depends, Request, status

from ..db import TaskStore
from ..errors import TaskNotFoundError
from ..logging_config import get_logger
from ..models import TaskCreate, TaskResponse, TaskUpdate

logger = get_logger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_store(request: Request) -> TaskStore:
    """Return the store the application was started with."""
    return request.app.state.store


# =============================================================================
# REST API Endpoints (JSON)
# =============================================================================


@router.get("", response_model=list[TaskResponse])
def list_tasks(
    status: str | None = None,
    store: TaskStore = Depends(get_store),
):
    """Get all tasks, newest first.

    ``status`` is an exact-match filter; an empty value means no filter and
    a value no task has yields an empty list.
    """
    return [TaskResponse(**task) for task in store.find_all(status=status or None)]


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, store: TaskStore = Depends(get_store)):
    """Get a task by ID."""
    task = store.find_by_id(task_id)
    if not task:
        raise TaskNotFoundError(task_id)
    return TaskResponse(**task)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task_endpoint(
    task_data: TaskCreate,
    store: TaskStore = Depends(get_store),
):
    """Create a new task."""
    task = store.insert(task_data.title, task_data.description, task_data.status.value)
    logger.info("task created", task_id=task["id"])
    return TaskResponse(**task)


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task_endpoint(
    task_id: str,
    task_data: TaskUpdate,
    store: TaskStore = Depends(get_store),
):
    """Update a task's title, description and/or status."""
    task = store.update_by_id(task_id, task_data.changes())
    if not task:
        raise TaskNotFoundError(task_id)
    logger.info("task updated", task_id=task_id, fields=sorted(task_data.changes()))
    return TaskResponse(**task)


@router.delete("/{task_id}", response_model=TaskResponse)
def delete_task_endpoint(task_id: str, store: TaskStore = Depends(get_store)):
    """Delete a task and return it."""
    task = store.delete_by_id(task_id)
    if not task:
        raise TaskNotFoundError(task_id)
    logger.info("task deleted", task_id=task_id)
    return TaskResponse(**task)
