"""Client view state and the reducer that evolves it.

Everything here is pure: ``reduce`` takes the current ``UiState`` and an
action and returns a new ``UiState``. Side effects (HTTP calls) live in
``TaskBoard``, which dispatches actions describing their outcome.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from ..models import TaskResponse, TaskStatus


class TaskFilter(str, Enum):
    """Status filter shown in the view."""

    ALL = "all"
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @property
    def status(self) -> TaskStatus | None:
        """Status to send to the API, or None for every task."""
        return None if self is TaskFilter.ALL else TaskStatus(self.value)


class Severity(str, Enum):
    ERROR = "error"
    SUCCESS = "success"


DRAFT_FIELDS = ("title", "description", "status")


@dataclass(frozen=True)
class Draft:
    """Task fields being typed in, not yet submitted."""

    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING

    @classmethod
    def from_task(cls, task: TaskResponse) -> "Draft":
        return cls(title=task.title, description=task.description, status=task.status)

    def payload(self) -> dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class Message:
    text: str
    severity: Severity


@dataclass(frozen=True)
class UiState:
    tasks: tuple[TaskResponse, ...] = ()
    draft: Draft = field(default_factory=Draft)
    filter: TaskFilter = TaskFilter.ALL
    editing: TaskResponse | None = None
    message: Message | None = None


# =============================================================================
# Actions
# =============================================================================


@dataclass(frozen=True)
class TasksLoaded:
    tasks: tuple[TaskResponse, ...]


@dataclass(frozen=True)
class FilterChanged:
    filter: TaskFilter


@dataclass(frozen=True)
class DraftChanged:
    field: str
    value: str


@dataclass(frozen=True)
class EditStarted:
    task: TaskResponse


@dataclass(frozen=True)
class EditCancelled:
    pass


@dataclass(frozen=True)
class Submitted:
    """A create or update went through; the draft is spent."""

    message: str


@dataclass(frozen=True)
class Succeeded:
    message: str


@dataclass(frozen=True)
class Failed:
    message: str


@dataclass(frozen=True)
class MessageDismissed:
    pass


Action = (
    TasksLoaded
    | FilterChanged
    | DraftChanged
    | EditStarted
    | EditCancelled
    | Submitted
    | Succeeded
    | Failed
    | MessageDismissed
)


# =============================================================================
# Reducer
# =============================================================================


def toggled_status(status: TaskStatus) -> TaskStatus:
    """Status after toggling completion; anything not completed becomes completed."""
    if status is TaskStatus.COMPLETED:
        return TaskStatus.PENDING
    return TaskStatus.COMPLETED


def draft_error(draft: Draft) -> str | None:
    """Client-side check run on submit."""
    if not draft.title.strip():
        return "Task title cannot be empty"
    return None


def _change_draft(draft: Draft, name: str, value: str) -> Draft:
    if name not in DRAFT_FIELDS:
        raise ValueError(f"Unknown draft field: {name}")
    if name == "status":
        return replace(draft, status=TaskStatus(value))
    return replace(draft, **{name: value})


def reduce(state: UiState, action: Action) -> UiState:
    """Return the state that results from applying ``action``."""
    if isinstance(action, TasksLoaded):
        return replace(state, tasks=tuple(action.tasks))
    if isinstance(action, FilterChanged):
        return replace(state, filter=action.filter)
    if isinstance(action, DraftChanged):
        return replace(state, draft=_change_draft(state.draft, action.field, action.value))
    if isinstance(action, EditStarted):
        return replace(state, editing=action.task, draft=Draft.from_task(action.task))
    if isinstance(action, EditCancelled):
        return replace(state, editing=None, draft=Draft())
    if isinstance(action, Submitted):
        return replace(
            state,
            editing=None,
            draft=Draft(),
            message=Message(action.message, Severity.SUCCESS),
        )
    if isinstance(action, Succeeded):
        return replace(state, message=Message(action.message, Severity.SUCCESS))
    if isinstance(action, Failed):
        return replace(state, message=Message(action.message, Severity.ERROR))
    if isinstance(action, MessageDismissed):
        return replace(state, message=None)
    raise TypeError(f"Unknown action: {action!r}")
