"""HTML pages.

The pages play the client role: they validate forms with the same rules as
the API, write through the task service, and report outcomes with a
``notice`` query parameter on the redirect.
"""

import asyncio
from datetime import UTC, date, datetime
from pathlib import Path
from urllib.parse import urlencode

import structlog
from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from ..analysis import (
    completion_rate,
    completion_trend,
    filter_by_date_range,
    generate_report,
    priority_breakdown,
    report_filename,
    report_to_pdf,
    users_overview,
)
from ..db import DuplicateEmailError, compute_stats
from ..deps import get_state, require_session
from ..models import (
    PRIORITY_LABELS,
    STATUS_ICONS,
    STATUS_LABELS,
    AuthSession,
    Priority,
    Task,
    TaskCreate,
    TaskStatus,
    TaskUpdate,
)
from ..state import AppState
from ..validation import (
    FieldError,
    ValidationResult,
    validate_credentials,
    validate_email,
    validate_task,
)

log = structlog.get_logger()

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.globals.update(
    STATUS_LABELS=STATUS_LABELS,
    STATUS_ICONS=STATUS_ICONS,
    PRIORITY_LABELS=PRIORITY_LABELS,
    TaskStatus=TaskStatus,
    Priority=Priority,
)

router = APIRouter(tags=["pages"], include_in_schema=False)


# =============================================================================
# Helper Functions
# =============================================================================


def render(request: Request, name: str, status_code: int = 200, **context) -> HTMLResponse:
    context.setdefault("notice", request.query_params.get("notice"))
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def redirect(url: str, notice: str | None = None) -> RedirectResponse:
    if notice:
        url = f"{url}?{urlencode({'notice': notice})}"
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def split_tags(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def not_found(request: Request, session: AuthSession) -> HTMLResponse:
    return render(
        request, "not_found.html", status.HTTP_404_NOT_FOUND, session=session
    )


# =============================================================================
# Authentication
# =============================================================================


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, state: AppState = Depends(get_state)):
    if state.auth.current_session() is not None:
        return redirect("/")
    return render(request, "login.html", errors={}, email="")


@router.post("/login", response_class=HTMLResponse)
async def login_submit(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    state: AppState = Depends(get_state),
):
    result = validate_credentials(email, password)
    if not result.is_valid:
        return render(
            request,
            "login.html",
            status.HTTP_400_BAD_REQUEST,
            errors=result.by_field(),
            email=email,
        )

    # The timeout only frees the page; the login call itself keeps running.
    pending = asyncio.shield(asyncio.to_thread(state.auth.login, email, password))
    try:
        session = await asyncio.wait_for(pending, timeout=state.settings.login_timeout_s)
    except TimeoutError:
        log.warning("login_timed_out", timeout_s=state.settings.login_timeout_s)
        return render(
            request,
            "login.html",
            status.HTTP_504_GATEWAY_TIMEOUT,
            errors={},
            email=email,
            notice="Login is taking longer than expected. Please try again.",
        )

    if session is None:
        return render(
            request,
            "login.html",
            status.HTTP_401_UNAUTHORIZED,
            errors={},
            email=email,
            notice="Login failed. Please try again.",
        )
    return redirect("/", "Login successful!")


@router.api_route("/logout", methods=["GET", "POST"])
def logout(state: AppState = Depends(get_state)):
    state.auth.logout()
    return redirect("/login")


# =============================================================================
# Dashboard and tasks
# =============================================================================


@router.get("/", response_class=HTMLResponse)
def dashboard(
    request: Request,
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    tasks = state.tasks.get_all()
    columns = {s: [t for t in tasks if t.status == s] for s in TaskStatus}
    return render(
        request,
        "index.html",
        session=session,
        stats=compute_stats(tasks),
        columns=columns,
    )


@router.get("/tasks", response_class=HTMLResponse)
def task_list(
    request: Request,
    q: str = "",
    status_filter: str = "",
    priority: str = "",
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    tasks = state.tasks.search(q) if q else state.tasks.get_all()
    if status_filter:
        tasks = [t for t in tasks if t.status.value == status_filter]
    if priority:
        tasks = [t for t in tasks if t.priority.value == priority]
    return render(
        request,
        "tasks.html",
        session=session,
        tasks=tasks,
        q=q,
        status_filter=status_filter,
        priority=priority,
    )


def _form_context(state: AppState, **context) -> dict:
    context.setdefault("errors", {})
    context["users"] = state.users.get_all()
    return context


@router.get("/tasks/new", response_class=HTMLResponse)
def new_task_page(
    request: Request,
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    return render(
        request, "task_form.html", **_form_context(state, session=session, task=None)
    )


@router.post("/tasks/new", response_class=HTMLResponse)
def create_task_submit(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    priority: Priority = Form(Priority.MEDIUM),
    task_status: TaskStatus = Form(TaskStatus.TODO),
    due_date: str = Form(""),
    tags: str = Form(""),
    estimated_time: str = Form(""),
    assignees: list[str] = Form([]),
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    data = TaskCreate(
        title=title,
        description=description,
        priority=priority,
        status=task_status,
        due_date=parse_date(due_date),
        tags=split_tags(tags),
        estimated_time=estimated_time or None,
        assignees=assignees,
    )
    result = validate_task(title, description)
    if not result.is_valid:
        return render(
            request,
            "task_form.html",
            status.HTTP_400_BAD_REQUEST,
            **_form_context(state, session=session, task=data, errors=result.by_field()),
        )

    task = state.task_service.create(data)
    if task is None:
        return redirect("/tasks/new", "Failed to create task")
    return redirect(f"/tasks/{task.id}", "Task created successfully!")


@router.get("/tasks/{task_id}", response_class=HTMLResponse)
def task_detail(
    request: Request,
    task_id: str,
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    task = state.tasks.get_by_id(task_id)
    if task is None:
        return not_found(request, session)
    assignees = [u for u in state.users.get_all() if u.id in task.assignees]
    return render(
        request,
        "task_detail.html",
        session=session,
        task=task,
        assignees=assignees,
        overdue=task.is_overdue(datetime.now(UTC)),
    )


@router.get("/tasks/{task_id}/edit", response_class=HTMLResponse)
def edit_task_page(
    request: Request,
    task_id: str,
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    task = state.tasks.get_by_id(task_id)
    if task is None:
        return not_found(request, session)
    return render(
        request, "task_form.html", **_form_context(state, session=session, task=task)
    )


@router.post("/tasks/{task_id}/edit", response_class=HTMLResponse)
def edit_task_submit(
    request: Request,
    task_id: str,
    title: str = Form(""),
    description: str = Form(""),
    priority: Priority = Form(Priority.MEDIUM),
    task_status: TaskStatus = Form(TaskStatus.TODO),
    due_date: str = Form(""),
    tags: str = Form(""),
    estimated_time: str = Form(""),
    assignees: list[str] = Form([]),
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    task = state.tasks.get_by_id(task_id)
    if task is None:
        return not_found(request, session)

    result = validate_task(title, description)
    if not result.is_valid:
        draft = task.model_copy(
            update={"title": title, "description": description, "tags": split_tags(tags)}
        )
        return render(
            request,
            "task_form.html",
            status.HTTP_400_BAD_REQUEST,
            **_form_context(state, session=session, task=draft, errors=result.by_field()),
        )

    updates = TaskUpdate(
        title=title,
        description=description,
        priority=priority,
        status=task_status,
        due_date=parse_date(due_date),
        tags=split_tags(tags),
        estimated_time=estimated_time or None,
        assignees=assignees,
    )
    if not state.task_service.update(task_id, updates):
        return redirect(f"/tasks/{task_id}/edit", "Failed to update task")
    return redirect(f"/tasks/{task_id}", "Task updated successfully!")


@router.post("/tasks/{task_id}/status")
def change_status(
    task_id: str,
    task_status: TaskStatus = Form(...),
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    if not state.task_service.set_status(task_id, task_status):
        return redirect("/", "Failed to update task")
    return redirect("/", f"Moved to {STATUS_LABELS[task_status]}")


@router.post("/tasks/{task_id}/suggest")
def suggest_for_task(
    task_id: str,
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    if state.task_service.suggest(task_id) is None:
        return redirect(f"/tasks/{task_id}", "Failed to analyze task")
    return redirect(f"/tasks/{task_id}", "Suggestions ready")


@router.post("/tasks/{task_id}/delete")
def delete_task(
    task_id: str,
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    if not state.task_service.delete(task_id):
        return redirect("/", "Failed to delete task")
    return redirect("/", "Task deleted successfully!")


# =============================================================================
# Timeline and users
# =============================================================================


@router.get("/timeline", response_class=HTMLResponse)
def timeline(
    request: Request,
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    tasks = state.tasks.get_all()
    recent = sorted(tasks, key=lambda t: t.updated_at, reverse=True)
    return render(
        request,
        "timeline.html",
        session=session,
        stats=compute_stats(tasks),
        priorities=priority_breakdown(tasks),
        trend=completion_trend(tasks),
        recent=recent,
    )


@router.get("/users", response_class=HTMLResponse)
def users_page(
    request: Request,
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    state.users.ensure_seeded()
    return _render_users(request, session, state)


def _render_users(
    request: Request,
    session: AuthSession,
    state: AppState,
    status_code: int = 200,
    errors: dict[str, str] | None = None,
    form: dict[str, str] | None = None,
) -> HTMLResponse:
    users = state.users.get_all()
    return render(
        request,
        "users.html",
        status_code,
        session=session,
        users=users,
        overview=users_overview(users, state.tasks.get_all()),
        errors=errors or {},
        form=form or {"name": "", "email": "", "role": ""},
    )


@router.post("/users", response_class=HTMLResponse)
def add_user(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    role: str = Form(""),
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    form = {"name": name, "email": email, "role": role}
    missing = [
        FieldError(field=key, message="Please fill all fields")
        for key, value in form.items()
        if not value.strip()
    ]
    result = ValidationResult.of(missing)
    if email.strip():
        result = result.merge(validate_email(email.strip()))
    if not result.is_valid:
        return _render_users(
            request, session, state, status.HTTP_400_BAD_REQUEST, result.by_field(), form
        )

    try:
        user = state.users.create(name, email, role)
    except DuplicateEmailError:
        return _render_users(
            request,
            session,
            state,
            status.HTTP_409_CONFLICT,
            {"email": "User with this email already exists"},
            form,
        )
    if user is None:
        return redirect("/users", "Failed to add user")
    return redirect("/users", f"{user.name} added successfully!")


@router.post("/users/{user_id}/delete")
def delete_user(
    user_id: str,
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    if not state.users.delete(user_id):
        return redirect("/users", "User not found")
    return redirect("/users", "User deleted successfully")


# =============================================================================
# Insights
# =============================================================================


def _in_range(state: AppState, start: date | None, end: date | None) -> list[Task]:
    return filter_by_date_range(state.tasks.get_all(), start, end)


@router.get("/insights", response_class=HTMLResponse)
def insights(
    request: Request,
    start: str = "",
    end: str = "",
    generate: bool = False,
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    start_date, end_date = parse_date(start), parse_date(end)
    tasks = _in_range(state, start_date, end_date)
    stats = compute_stats(tasks)

    report = None
    notice = request.query_params.get("notice")
    if generate:
        if tasks:
            report = generate_report(tasks, start_date, end_date)
        else:
            notice = "No tasks in selected date range"

    return render(
        request,
        "insights.html",
        session=session,
        start=start,
        end=end,
        tasks=tasks,
        stats=stats,
        rate=completion_rate(stats.completed, stats.total),
        priorities=priority_breakdown(tasks),
        report=report,
        notice=notice,
    )


def _pdf_response(text: str) -> Response:
    filename = report_filename(datetime.now(UTC).date())
    return Response(
        content=report_to_pdf(text),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/insights/report.pdf")
def report_pdf(
    start: str = "",
    end: str = "",
    session: AuthSession = Depends(require_session),
    state: AppState = Depends(get_state),
):
    start_date, end_date = parse_date(start), parse_date(end)
    tasks = _in_range(state, start_date, end_date)
    if not tasks:
        return redirect("/insights", "No tasks in selected date range")
    return _pdf_response(generate_report(tasks, start_date, end_date))


@router.post("/insights/report.pdf")
def edited_report_pdf(
    report: str = Form(""),
    session: AuthSession = Depends(require_session),
):
    """PDF of a report the user edited in the browser."""
    if not report.strip():
        return redirect("/insights", "Nothing to export")
    return _pdf_response(report.replace("\r\n", "\n"))
