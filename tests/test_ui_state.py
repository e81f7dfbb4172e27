# tests/test_ui_state.py

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from task_tracker.client.state import (
    Draft,
    DraftChanged,
    EditCancelled,
    EditStarted,
    Failed,
    FilterChanged,
    Message,
    MessageDismissed,
    Severity,
    Submitted,
    Succeeded,
    TaskFilter,
    TasksLoaded,
    UiState,
    draft_error,
    reduce,
    toggled_status,
)
from task_tracker.models import TaskResponse, TaskStatus


def make_task(task_id: str = "01J0", **fields) -> TaskResponse:
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    values = {
        "id": task_id,
        "title": "Buy milk",
        "description": "2 litres",
        "status": TaskStatus.IN_PROGRESS,
        "created_at": now,
        "updated_at": now,
        **fields,
    }
    return TaskResponse(**values)


def test_initial_state() -> None:
    state = UiState()
    assert state.tasks == ()
    assert state.draft == Draft("", "", TaskStatus.PENDING)
    assert state.filter is TaskFilter.ALL
    assert state.editing is None
    assert state.message is None


def test_reduce_does_not_mutate_input() -> None:
    state = UiState()
    new_state = reduce(state, DraftChanged("title", "Walk dog"))
    assert state.draft.title == ""
    assert new_state.draft.title == "Walk dog"


def test_tasks_loaded_replaces_list() -> None:
    first, second = make_task("a"), make_task("b")
    state = reduce(UiState(tasks=(first,)), TasksLoaded((second,)))
    assert state.tasks == (second,)


def test_filter_changed() -> None:
    state = reduce(UiState(), FilterChanged(TaskFilter.COMPLETED))
    assert state.filter is TaskFilter.COMPLETED
    assert state.filter.status is TaskStatus.COMPLETED
    assert TaskFilter.ALL.status is None


def test_draft_changes_each_field() -> None:
    state = UiState()
    state = reduce(state, DraftChanged("title", "  "))
    state = reduce(state, DraftChanged("description", "notes"))
    state = reduce(state, DraftChanged("status", "in-progress"))
    assert state.draft == Draft("  ", "notes", TaskStatus.IN_PROGRESS)


def test_draft_rejects_unknown_field() -> None:
    with pytest.raises(ValueError):
        reduce(UiState(), DraftChanged("id", "x"))


def test_edit_copies_task_into_draft() -> None:
    task = make_task()
    state = reduce(UiState(), EditStarted(task))
    assert state.editing == task
    assert state.draft == Draft("Buy milk", "2 litres", TaskStatus.IN_PROGRESS)

    cancelled = reduce(state, EditCancelled())
    assert cancelled.editing is None
    assert cancelled.draft == Draft()


def test_submitted_clears_draft_and_editing() -> None:
    state = reduce(UiState(), EditStarted(make_task()))
    state = reduce(state, Submitted("Task updated successfully"))
    assert state.editing is None
    assert state.draft == Draft()
    assert state.message == Message("Task updated successfully", Severity.SUCCESS)


def test_only_one_message_at_a_time() -> None:
    state = reduce(UiState(), Succeeded("Task deleted successfully"))
    state = reduce(state, Failed("Failed to fetch tasks: boom"))
    assert state.message == Message("Failed to fetch tasks: boom", Severity.ERROR)

    state = reduce(state, MessageDismissed())
    assert state.message is None


def test_failure_keeps_tasks_and_draft() -> None:
    task = make_task()
    state = UiState(tasks=(task,), draft=Draft(title="half typed"))
    state = reduce(state, Failed("Failed to add task: timeout"))
    assert state.tasks == (task,)
    assert state.draft.title == "half typed"


@pytest.mark.parametrize(
    ("current", "expected"),
    [
        (TaskStatus.COMPLETED, TaskStatus.PENDING),
        (TaskStatus.PENDING, TaskStatus.COMPLETED),
        (TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED),
    ],
)
def test_toggled_status(current: TaskStatus, expected: TaskStatus) -> None:
    assert toggled_status(current) is expected


def test_draft_error() -> None:
    assert draft_error(Draft(title=" \t")) == "Task title cannot be empty"
    assert draft_error(Draft(title="ok")) is None


def test_unknown_action_raises() -> None:
    with pytest.raises(TypeError):
        reduce(UiState(), object())
