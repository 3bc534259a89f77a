# tests/test_console.py

from io import StringIO

from rich.console import Console

from task_manager.console import dispatch
from task_manager.models import TaskStatus
from task_manager.state import AppState

from .factories import make_task


def run(state: AppState, line: str) -> tuple[bool, str]:
    buf = StringIO()
    keep_going = dispatch(state, line, Console(file=buf, width=120))
    return keep_going, buf.getvalue()


def test_quit(state: AppState) -> None:
    assert run(state, "quit")[0] is False
    assert run(state, "")[0] is True


def test_unknown_command(state: AppState) -> None:
    keep_going, out = run(state, "dance")
    assert keep_going
    assert "Unknown command" in out


def test_list_and_stats(state: AppState) -> None:
    state.tasks.add(make_task(title="Ship release"))
    _, out = run(state, "list")
    assert "Ship release" in out

    _, out = run(state, "list done")
    assert "Status must be one of" in out

    _, out = run(state, "stats")
    assert "Total" in out


def test_done_by_partial_title(state: AppState) -> None:
    """A unique partial title completes the task."""
    task = make_task(title="Ship release")
    state.tasks.add(task)
    state.tasks.add(make_task(title="Plan retro"))

    _, out = run(state, "done ship")
    assert "Completed: Ship release" in out
    assert state.tasks.get_by_id(task.id).status == TaskStatus.COMPLETED


def test_done_ambiguous(state: AppState) -> None:
    state.tasks.add(make_task(title="Ship api"))
    state.tasks.add(make_task(title="Ship ui"))
    _, out = run(state, "done ship")
    assert "Several tasks match" in out


def test_search_and_suggest(state: AppState) -> None:
    task = make_task(title="Fix login bug", description="Urgent: users cannot log in")
    state.tasks.add(task)

    _, out = run(state, 'search "login"')
    assert "Fix login bug" in out

    _, out = run(state, f"suggest {task.id}")
    assert "High Priority" in out
    assert state.tasks.get_by_id(task.id).ai_suggestions is not None


def test_report_and_export(state: AppState, tmp_path) -> None:
    _, out = run(state, "report")
    assert "Add some tasks first" in out

    state.tasks.add(make_task())
    target = tmp_path / "report.pdf"
    _, out = run(state, f"export {target}")
    assert target.read_bytes().startswith(b"%PDF")


def test_done_by_id_suffix(state: AppState) -> None:
    task = make_task(title="Ship release")
    other = make_task(title="Ship notes")
    state.tasks.add(task)
    state.tasks.add(other)

    _, out = run(state, f"done {task.id[-10:]}")
    assert "Completed: Ship release" in out
    assert state.tasks.get_by_id(other.id).status != TaskStatus.COMPLETED


def test_done_no_match(state: AppState) -> None:
    state.tasks.add(make_task(title="Ship release"))
    _, out = run(state, "done retro")
    assert "No task matches 'retro'" in out
