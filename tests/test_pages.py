# tests/test_pages.py

from fastapi.testclient import TestClient

from task_manager.models import TaskStatus
from task_manager.state import AppState

from .factories import DEMO_CREDENTIALS

TASK_FORM = {
    "title": "Prepare demo",
    "description": "Collect screenshots for the Friday demo",
    "priority": "high",
    "task_status": "todo",
    "due_date": "2026-10-30",
    "tags": "demo, slides, demo",
    "estimated_time": "2 hours",
}


def app_state(client: TestClient) -> AppState:
    return client.app.state.app_state


class TestLogin:
    def test_pages_require_login(self, client: TestClient) -> None:
        """Protected pages redirect to the login page."""
        for path in ("/", "/tasks", "/timeline", "/users", "/insights"):
            response = client.get(path, follow_redirects=False)
            assert response.status_code == 303
            assert response.headers["location"] == "/login"

    def test_login_lands_on_dashboard(self, client: TestClient) -> None:
        response = client.post("/login", data=DEMO_CREDENTIALS)
        assert response.status_code == 200
        assert "Welcome back, Demo!" in response.text
        assert app_state(client).auth.current_session() is not None

    def test_login_form_errors(self, client: TestClient) -> None:
        response = client.post("/login", data={"email": "demo", "password": "123"})
        assert response.status_code == 400
        assert "Invalid email format" in response.text
        assert "Password must be at least 6 characters" in response.text

    def test_login_page_redirects_when_signed_in(self, logged_in: TestClient) -> None:
        response = logged_in.get("/login", follow_redirects=False)
        assert response.status_code == 303

    def test_logout(self, logged_in: TestClient) -> None:
        logged_in.post("/logout")
        response = logged_in.get("/", follow_redirects=False)
        assert response.status_code == 303


class TestTaskPages:
    def test_create_task(self, logged_in: TestClient) -> None:
        """The form writes through to the store."""
        response = logged_in.post("/tasks/new", data=TASK_FORM)
        assert response.status_code == 200
        assert "Task created successfully!" in response.text

        [task] = app_state(logged_in).tasks.get_all()
        assert task.title == "Prepare demo"
        assert task.tags == ["demo", "slides"]
        assert task.due_date.isoformat() == "2026-10-30"

    def test_create_task_invalid(self, logged_in: TestClient) -> None:
        response = logged_in.post("/tasks/new", data={**TASK_FORM, "title": "ab"})
        assert response.status_code == 400
        assert "Title must be at least 3 characters" in response.text
        assert app_state(logged_in).tasks.get_all() == []

    def test_missing_task_is_404(self, logged_in: TestClient) -> None:
        response = logged_in.get("/tasks/does-not-exist")
        assert response.status_code == 404
        assert "Task not found" in response.text

    def test_edit_status_and_delete(self, logged_in: TestClient) -> None:
        logged_in.post("/tasks/new", data=TASK_FORM)
        store = app_state(logged_in).tasks
        [task] = store.get_all()

        response = logged_in.post(
            f"/tasks/{task.id}/edit", data={**TASK_FORM, "title": "Prepare the demo"}
        )
        assert response.status_code == 200
        assert store.get_by_id(task.id).title == "Prepare the demo"

        logged_in.post(f"/tasks/{task.id}/status", data={"task_status": "completed"})
        assert store.get_by_id(task.id).status == TaskStatus.COMPLETED

        logged_in.post(f"/tasks/{task.id}/delete")
        assert store.get_all() == []

    def test_suggest_keeps_priority(self, logged_in: TestClient) -> None:
        """Suggestions are attached without changing the task's own fields."""
        logged_in.post("/tasks/new", data={**TASK_FORM, "priority": "low"})
        store = app_state(logged_in).tasks
        [task] = store.get_all()

        response = logged_in.post(f"/tasks/{task.id}/suggest")
        assert response.status_code == 200
        updated = store.get_by_id(task.id)
        assert updated.ai_suggestions is not None
        assert updated.priority == task.priority
        assert updated.tags == task.tags

    def test_list_filters(self, logged_in: TestClient) -> None:
        logged_in.post("/tasks/new", data=TASK_FORM)
        logged_in.post("/tasks/new", data={**TASK_FORM, "title": "Book venue"})

        response = logged_in.get("/tasks", params={"q": "venue"})
        assert "Book venue" in response.text
        assert "Prepare demo" not in response.text


class TestOtherPages:
    def test_timeline(self, logged_in: TestClient) -> None:
        logged_in.post("/tasks/new", data={**TASK_FORM, "task_status": "completed"})
        response = logged_in.get("/timeline")
        assert response.status_code == 200
        assert "Completion Trend" in response.text

    def test_users_seeded_and_duplicate_rejected(self, logged_in: TestClient) -> None:
        response = logged_in.get("/users")
        assert "Demo Manager" in response.text

        response = logged_in.post(
            "/users", data={"name": "Copy", "email": "DEMO@example.com", "role": "QA"}
        )
        assert response.status_code == 409
        assert "User with this email already exists" in response.text

    def test_add_user(self, logged_in: TestClient) -> None:
        response = logged_in.post(
            "/users", data={"name": "Ana Lima", "email": "ana@example.com", "role": "Dev"}
        )
        assert response.status_code == 200
        assert "Ana Lima added successfully!" in response.text

    def test_add_user_store_failure(self, logged_in: TestClient, monkeypatch) -> None:
        kv = app_state(logged_in).kv
        monkeypatch.setattr(kv, "set", lambda key, value: False)
        response = logged_in.post(
            "/users", data={"name": "Ana Lima", "email": "ana@example.com", "role": "Dev"}
        )
        assert response.status_code == 200
        assert "Failed to add user" in response.text
        assert "Ana Lima added successfully!" not in response.text

    def test_add_user_missing_fields(self, logged_in: TestClient) -> None:
        response = logged_in.post("/users", data={"name": "", "email": "x", "role": ""})
        assert response.status_code == 400
        assert "Please fill all fields" in response.text

    def test_insights_report(self, logged_in: TestClient) -> None:
        logged_in.post("/tasks/new", data=TASK_FORM)
        response = logged_in.get("/insights", params={"generate": "true"})
        assert response.status_code == 200
        assert "Task Management Analysis Report" in response.text

    def test_insights_without_tasks(self, logged_in: TestClient) -> None:
        response = logged_in.get("/insights", params={"generate": "true"})
        assert "No tasks in selected date range" in response.text

    def test_pdf_download(self, logged_in: TestClient) -> None:
        logged_in.post("/tasks/new", data=TASK_FORM)
        response = logged_in.get("/insights/report.pdf")
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "Task-Analysis-Report-" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_edited_report_pdf(self, logged_in: TestClient) -> None:
        response = logged_in.post(
            "/insights/report.pdf", data={"report": "# Edited\r\nSome text"}
        )
        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")
