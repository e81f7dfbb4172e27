"""Task board controller: runs user actions against the API."""

from ..models import TaskResponse
from .api import TaskApiClient, TaskApiError
from .state import (
    Action,
    DraftChanged,
    EditCancelled,
    EditStarted,
    Failed,
    FilterChanged,
    MessageDismissed,
    Submitted,
    Succeeded,
    TaskFilter,
    TasksLoaded,
    UiState,
    draft_error,
    reduce,
    toggled_status,
)


class TaskBoard:
    """Holds the view state and performs one API call per user action.

    After every successful mutation the full list is fetched again for the
    active filter. Failures become error messages; nothing is rolled back
    or retried.
    """

    def __init__(self, api: TaskApiClient, state: UiState | None = None):
        self.api = api
        self.state = state or UiState()

    def dispatch(self, action: Action) -> UiState:
        self.state = reduce(self.state, action)
        return self.state

    def refresh(self) -> bool:
        """Reload the task list for the active filter."""
        try:
            tasks = self.api.list_tasks(self.state.filter.status)
        except TaskApiError as e:
            self.dispatch(Failed(f"Failed to fetch tasks: {e}"))
            return False
        self.dispatch(TasksLoaded(tuple(tasks)))
        return True

    def mount(self) -> None:
        self.refresh()

    def set_filter(self, task_filter: TaskFilter | str) -> None:
        self.dispatch(FilterChanged(TaskFilter(task_filter)))
        self.refresh()

    def edit_draft(self, field: str, value: str) -> None:
        self.dispatch(DraftChanged(field, value))

    def start_edit(self, task: TaskResponse) -> None:
        self.dispatch(EditStarted(task))

    def cancel_edit(self) -> None:
        self.dispatch(EditCancelled())

    def submit(self) -> None:
        """Create a task from the draft, or update the task being edited."""
        error = draft_error(self.state.draft)
        if error:
            self.dispatch(Failed(error))
            return

        editing = self.state.editing
        payload = self.state.draft.payload()
        try:
            if editing is None:
                self.api.create_task(payload)
            else:
                self.api.update_task(editing.id, payload)
        except TaskApiError as e:
            verb = "add" if editing is None else "update"
            self.dispatch(Failed(f"Failed to {verb} task: {e}"))
            return

        self.dispatch(
            Submitted("Task added successfully" if editing is None else "Task updated successfully")
        )
        self.refresh()

    def toggle(self, task: TaskResponse) -> None:
        try:
            self.api.update_task(task.id, {"status": toggled_status(task.status).value})
        except TaskApiError as e:
            self.dispatch(Failed(f"Failed to update status: {e}"))
            return
        if self.refresh():
            self.dispatch(Succeeded("Task status updated"))

    def delete(self, task: TaskResponse) -> None:
        try:
            self.api.delete_task(task.id)
        except TaskApiError as e:
            self.dispatch(Failed(f"Failed to delete task: {e}"))
            return
        if self.refresh():
            self.dispatch(Succeeded("Task deleted successfully"))

    def dismiss(self) -> None:
        self.dispatch(MessageDismissed())
