"""Terminal client for the task API."""

from .api import TaskApiClient, TaskApiError
from .board import TaskBoard
from .state import Draft, Message, Severity, TaskFilter, UiState, reduce

__all__ = [
    "TaskApiClient",
    "TaskApiError",
    "TaskBoard",
    "Draft",
    "Message",
    "Severity",
    "TaskFilter",
    "UiState",
    "reduce",
]
