"""Interactive console for the task store."""

import shlex
import sys
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from .analysis import generate_report, report_filename, report_to_pdf
from .config import load_settings
from .logging_config import setup_logging
from .models import (
    PRIORITY_LABELS,
    STATUS_ICONS,
    STATUS_LABELS,
    Priority,
    Task,
    TaskCreate,
    TaskStatus,
)
from .state import AppState

console = Console()

HELP = """\
Commands:
  add              create a task (prompts for title, description, priority)
  list [status]    list tasks, optionally filtered by todo/in-progress/completed
  search <text>    search titles, descriptions and tags
  done <query>     complete a task by id or partial title
  stats            task statistics
  suggest <query>  attach rule-based suggestions to a task
  report           print the analysis report
  export [path]    write the analysis report as PDF
  quit             leave the console"""

# =============================================================================
# Helpers
# =============================================================================


def task_table(tasks: list[Task]) -> Table:
    table = Table(show_header=True, header_style="bold blue")
    table.add_column("ID", style="dim", width=10)
    table.add_column("Task", style="bold", min_width=20)
    table.add_column("Priority", width=8)
    table.add_column("Status", justify="center", width=16)
    table.add_column("Due", width=10)

    for task in tasks:
        icon = STATUS_ICONS[task.status]
        table.add_row(
            task.id[-10:],
            task.title,
            PRIORITY_LABELS[task.priority],
            f"{icon} {STATUS_LABELS[task.status]}",
            task.due_date.isoformat() if task.due_date else "",
        )
    return table


def resolve_task(state: AppState, query: str, out: Console) -> Task | None:
    """Find one task by id, id suffix or partial title; report ambiguity."""
    matches = state.task_service.find(query)
    if not matches:
        out.print(f"[yellow]No task matches '{query}'[/yellow]")
        return None
    if len(matches) > 1:
        names = "\n".join(f"- {m.title} (ID: {m.id[-10:]})" for m in matches)
        out.print(f"Several tasks match, be more specific:\n{names}")
        return None
    return matches[0]


# =============================================================================
# Commands
# =============================================================================


def cmd_add(state: AppState, args: list[str], out: Console) -> None:
    title = " ".join(args) or Prompt.ask("Title", console=out)
    description = Prompt.ask("Description", console=out)
    priority = Prompt.ask(
        "Priority",
        choices=[p.value for p in Priority],
        default=Priority.MEDIUM.value,
        console=out,
    )
    data = TaskCreate(title=title, description=description, priority=Priority(priority))
    task = state.task_service.create(data)
    if task is None:
        out.print("[red]Task not created: title needs 3-200 and description 10-2000 characters[/red]")
        return
    out.print(f"Task added: {task.title} (ID: {task.id[-10:]})")


def cmd_list(state: AppState, args: list[str], out: Console) -> None:
    if args:
        try:
            status = TaskStatus(args[0])
        except ValueError:
            choices = ", ".join(s.value for s in TaskStatus)
            out.print(f"[red]Status must be one of {choices}[/red]")
            return
        tasks = state.tasks.get_by_status(status)
    else:
        tasks = state.tasks.get_all()

    if not tasks:
        out.print("No tasks")
        return
    out.print(task_table(tasks))


def cmd_search(state: AppState, args: list[str], out: Console) -> None:
    query = " ".join(args)
    if not query:
        out.print("[red]Give something to search for[/red]")
        return
    tasks = state.tasks.search(query)
    if not tasks:
        out.print(f"Nothing matches '{query}'")
        return
    out.print(task_table(tasks))


def cmd_done(state: AppState, args: list[str], out: Console) -> None:
    query = " ".join(args)
    if not query:
        out.print("[red]Say which task to complete[/red]")
        return
    task = resolve_task(state, query, out)
    if task is None:
        return
    if state.task_service.set_status(task.id, TaskStatus.COMPLETED):
        out.print(f"Completed: {task.title}")
    else:
        out.print(f"[red]Could not update {task.title}[/red]")


def cmd_stats(state: AppState, args: list[str], out: Console) -> None:
    stats = state.tasks.get_stats()
    table = Table(show_header=False)
    table.add_row("Total", str(stats.total))
    table.add_row(STATUS_LABELS[TaskStatus.TODO], str(stats.todo))
    table.add_row(STATUS_LABELS[TaskStatus.IN_PROGRESS], str(stats.in_progress))
    table.add_row(STATUS_LABELS[TaskStatus.COMPLETED], str(stats.completed))
    table.add_row("Overdue", str(stats.overdue))
    out.print(table)


def cmd_suggest(state: AppState, args: list[str], out: Console) -> None:
    if not args:
        out.print("[red]Say which task to analyze[/red]")
        return
    task = resolve_task(state, " ".join(args), out)
    if task is None:
        return
    suggestions = state.task_service.suggest(task.id)
    if suggestions is None:
        out.print(f"[red]Could not analyze {task.title}[/red]")
        return
    deadline = suggestions.deadline.isoformat() if suggestions.deadline else "-"
    out.print(
        Panel(
            f"Priority: {PRIORITY_LABELS[suggestions.suggested_priority]}\n"
            f"Estimated time: {suggestions.estimated_time}\n"
            f"Tags: {', '.join(suggestions.tags) or '-'}\n"
            f"Deadline: {deadline}",
            title=task.title,
            title_align="left",
            border_style="green",
            padding=(0, 1),
        )
    )


def cmd_report(state: AppState, args: list[str], out: Console) -> None:
    tasks = state.tasks.get_all()
    if not tasks:
        out.print("Add some tasks first to generate analysis")
        return
    out.print(Markdown(generate_report(tasks)))


def cmd_export(state: AppState, args: list[str], out: Console) -> None:
    tasks = state.tasks.get_all()
    if not tasks:
        out.print("Add some tasks first to generate analysis")
        return
    path = Path(args[0]) if args else Path(report_filename(datetime.now(UTC).date()))
    path.write_bytes(report_to_pdf(generate_report(tasks)))
    out.print(f"Report written to {path}")


COMMANDS: dict[str, Callable[[AppState, list[str], Console], None]] = {
    "add": cmd_add,
    "list": cmd_list,
    "search": cmd_search,
    "done": cmd_done,
    "stats": cmd_stats,
    "suggest": cmd_suggest,
    "report": cmd_report,
    "export": cmd_export,
}


def dispatch(state: AppState, line: str, out: Console = console) -> bool:
    """Run one command line. Returns False when the console should exit."""
    try:
        parts = shlex.split(line)
    except ValueError as e:
        out.print(f"[red]{e}[/red]")
        return True
    if not parts:
        return True

    name, args = parts[0].lower(), parts[1:]
    if name in ("quit", "exit", "q"):
        return False
    if name == "help":
        out.print(HELP)
        return True

    command = COMMANDS.get(name)
    if command is None:
        out.print(f"[yellow]Unknown command '{name}'. Type help.[/yellow]")
        return True
    command(state, args, out)
    return True


# =============================================================================
# Main
# =============================================================================


def interactive_mode(state: AppState) -> None:
    console.print(
        Panel(
            "Task Manager console\nType help for commands.\n[dim]quit to exit[/dim]",
            border_style="cyan",
            padding=(0, 2),
        )
    )
    while True:
        console.print()
        line = Prompt.ask("[bold cyan]tasks[/bold cyan]").strip()
        if not dispatch(state, line):
            console.print("[green]Bye.[/green]")
            break


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_format, settings.log_level)
    try:
        interactive_mode(AppState.create(settings))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
    except Exception as e:
        Console(stderr=True).print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
