"""Terminal task board built on rich."""

import sys

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from ..config import get_settings
from ..logging_config import configure_logging
from ..models import TaskStatus
from .api import TaskApiClient
from .board import TaskBoard
from .state import Severity, TaskFilter, UiState

console = Console()

STATUS_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.COMPLETED: "Completed",
}
STATUS_ICONS = {
    TaskStatus.PENDING: "⭕",
    TaskStatus.IN_PROGRESS: "🔄",
    TaskStatus.COMPLETED: "✅",
}
FILTER_TITLES = {
    TaskFilter.ALL: "All Tasks",
    TaskFilter.PENDING: "Pending Tasks",
    TaskFilter.IN_PROGRESS: "In Progress Tasks",
    TaskFilter.COMPLETED: "Completed Tasks",
}

HELP = (
    "add | edit N | toggle N | delete N | filter all|pending|in-progress|completed\n"
    "refresh | cancel | dismiss | quit"
)

# =============================================================================
# Rendering
# =============================================================================


def render_task_table(state: UiState) -> Table:
    table = Table(title=FILTER_TITLES[state.filter], show_header=True, header_style="bold blue")
    table.add_column("#", justify="right", width=3)
    table.add_column("Task", style="bold", min_width=20)
    table.add_column("Description", style="dim")
    table.add_column("Status", justify="center", width=14)

    if not state.tasks:
        table.add_row("", "No tasks", "", "")
        return table

    for number, task in enumerate(state.tasks, start=1):
        done = task.status is TaskStatus.COMPLETED
        title = Text(task.title, style="strike dim" if done else "")
        label = f"{STATUS_ICONS[task.status]} {STATUS_LABELS[task.status]}"
        table.add_row(str(number), title, Text(task.description), label)
    return table


def render_draft(state: UiState) -> Panel:
    draft = state.draft
    heading = "Editing task" if state.editing else "New task"
    body = (
        f"[bold]Title:[/bold] {escape(draft.title) or '[dim]-[/dim]'}\n"
        f"[bold]Description:[/bold] {escape(draft.description) or '[dim]-[/dim]'}\n"
        f"[bold]Status:[/bold] {STATUS_LABELS[draft.status]}"
    )
    return Panel(body, title=heading, title_align="left", border_style="cyan", padding=(0, 1))


def render_board(state: UiState) -> Group:
    parts = []
    if state.message:
        error = state.message.severity is Severity.ERROR
        parts.append(
            Panel(
                Text(state.message.text),
                title="Error" if error else "Done",
                title_align="left",
                border_style="red" if error else "green",
                padding=(0, 1),
            )
        )
    parts.append(render_task_table(state))
    if state.editing or state.draft.title or state.draft.description:
        parts.append(render_draft(state))
    return Group(*parts)


# =============================================================================
# Commands
# =============================================================================


def parse_command(line: str) -> tuple[str, str]:
    """Split input into a lower-cased command and its argument."""
    command, _, argument = line.strip().partition(" ")
    return command.lower(), argument.strip()


def _pick_task(board: TaskBoard, argument: str):
    try:
        index = int(argument) - 1
    except ValueError:
        console.print(f"[red]Not a task number: {escape(repr(argument))}[/red]")
        return None
    if not 0 <= index < len(board.state.tasks):
        console.print(f"[red]No task #{escape(argument)}[/red]")
        return None
    return board.state.tasks[index]


def _prompt_draft(board: TaskBoard) -> None:
    draft = board.state.draft
    board.edit_draft("title", Prompt.ask("Title", default=draft.title))
    board.edit_draft("description", Prompt.ask("Description", default=draft.description))
    board.edit_draft(
        "status",
        Prompt.ask(
            "Status",
            choices=[status.value for status in TaskStatus],
            default=draft.status.value,
        ),
    )


def handle_command(board: TaskBoard, line: str) -> bool:
    """Run one command; return False when the user wants to leave."""
    command, argument = parse_command(line)

    if command in ("quit", "exit", "q"):
        return False
    if command == "add":
        _prompt_draft(board)
        board.submit()
    elif command == "edit":
        task = _pick_task(board, argument)
        if task:
            board.start_edit(task)
            _prompt_draft(board)
            board.submit()
    elif command == "toggle":
        task = _pick_task(board, argument)
        if task:
            board.toggle(task)
    elif command == "delete":
        task = _pick_task(board, argument)
        if task:
            board.delete(task)
    elif command == "filter":
        try:
            board.set_filter(TaskFilter(argument.lower() or "all"))
        except ValueError:
            console.print(f"[red]Unknown filter: {escape(argument)}[/red]")
    elif command == "refresh":
        board.refresh()
    elif command == "cancel":
        board.cancel_edit()
    elif command == "dismiss":
        board.dismiss()
    else:
        console.print(f"[dim]{HELP}[/dim]")
    return True


# =============================================================================
# Main
# =============================================================================


def interactive_mode(board: TaskBoard) -> None:
    console.print(
        Panel(
            f"Task Tracker\n[dim]{HELP}[/dim]",
            border_style="cyan",
            padding=(0, 2),
        )
    )
    board.mount()

    while True:
        console.print()
        console.print(render_board(board.state))
        user_input = Prompt.ask("[bold cyan]tasks[/bold cyan]").strip()
        if not user_input:
            continue
        if not handle_command(board, user_input):
            console.print("[green]Bye.[/green]")
            break


def main() -> None:
    settings = get_settings()
    configure_logging("WARNING", settings.log_format)
    try:
        with TaskApiClient(settings.api_base_url, timeout=settings.request_timeout) as api:
            interactive_mode(TaskBoard(api))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
    except Exception as e:
        Console(stderr=True).print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
