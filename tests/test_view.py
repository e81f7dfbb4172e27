# tests/test_view.py

from __future__ import annotations

from rich.console import Console

from task_tracker.client import TaskBoard
from task_tracker.client.state import Failed, TaskFilter
from task_tracker.client.view import handle_command, parse_command, render_board


def render_text(board: TaskBoard) -> str:
    console = Console(record=True, width=120)
    console.print(render_board(board.state))
    return console.export_text()


def test_parse_command() -> None:
    assert parse_command("  Toggle 2 ") == ("toggle", "2")
    assert parse_command("filter in-progress") == ("filter", "in-progress")
    assert parse_command("quit") == ("quit", "")


def test_render_empty_board() -> None:
    text = render_text(TaskBoard(api=None))
    assert "All Tasks" in text
    assert "No tasks" in text


def test_render_tasks_and_message(board: TaskBoard) -> None:
    board.edit_draft("title", "Buy milk")
    board.submit()
    board.dispatch(Failed("Failed to fetch tasks: offline"))

    text = render_text(board)

    assert "Buy milk" in text
    assert "Pending" in text
    assert "Failed to fetch tasks: offline" in text


def test_commands_drive_board(board: TaskBoard) -> None:
    board.edit_draft("title", "Water plants")
    board.submit()

    assert handle_command(board, "toggle 1")
    assert board.state.tasks[0].status.value == "completed"

    assert handle_command(board, "filter pending")
    assert board.state.filter is TaskFilter.PENDING
    assert board.state.tasks == ()

    assert handle_command(board, "filter")
    assert board.state.filter is TaskFilter.ALL

    assert handle_command(board, "delete 1")
    assert board.state.tasks == ()

    assert handle_command(board, "dismiss")
    assert board.state.message is None


def test_bad_task_number_leaves_state_alone(board: TaskBoard) -> None:
    board.mount()
    before = board.state

    assert handle_command(board, "toggle 7")
    assert handle_command(board, "delete x")
    assert handle_command(board, "filter someday")

    assert board.state == before


def test_quit_stops_loop(board: TaskBoard) -> None:
    assert not handle_command(board, "quit")
    assert not handle_command(board, "q")


def test_bracketed_user_text_renders_literally(board: TaskBoard) -> None:
    board.edit_draft("title", "fix [/] parser")
    board.edit_draft("description", "see [/x] and [bold]")

    text = render_text(board)

    assert "fix [/] parser" in text
    assert "see [/x] and [bold]" in text


def test_bracketed_task_description_renders_literally(board: TaskBoard) -> None:
    board.edit_draft("title", "Parse [/] tokens")
    board.edit_draft("description", "[/red] closing tag")
    board.submit()

    text = render_text(board)

    assert "Parse [/] tokens" in text
    assert "[/red] closing tag" in text


def test_bracketed_command_arguments_do_not_crash(board: TaskBoard) -> None:
    board.mount()
    before = board.state

    assert handle_command(board, "filter [/]")
    assert handle_command(board, "toggle [/]")
    assert handle_command(board, "delete [/x]")

    assert board.state == before
