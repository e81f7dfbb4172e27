"""Error types shared by the store, the API and the client."""


class TaskTrackerError(Exception):
    """Base class for task tracker errors."""


class TaskValidationError(TaskTrackerError):
    """Raised when task fields fail validation."""


class TaskNotFoundError(TaskTrackerError):
    """Raised when no task exists for an identifier."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class StoreUnavailableError(TaskTrackerError):
    """Raised when the task store cannot complete an operation."""
