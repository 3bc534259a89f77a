# tests/test_api.py

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from task_manager.validation import validate_task_description, validate_task_title

VALID_TASK = {
    "title": "Fix login bug",
    "description": "Users cannot log in on mobile devices, urgent fix needed",
}


class TestTaskEndpoints:
    def test_create_returns_task(self, client: TestClient) -> None:
        """A valid task comes back with id and matching timestamps."""
        response = client.post("/api/tasks", json={**VALID_TASK, "tags": ["bug", "bug"]})
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Task created successfully"
        task = body["task"]
        assert task["id"]
        assert task["created_at"] == task["updated_at"]
        assert task["priority"] == "medium"
        assert task["status"] == "todo"
        assert task["tags"] == ["bug"]

    def test_create_does_not_persist(self, client: TestClient) -> None:
        client.post("/api/tasks", json=VALID_TASK)
        assert client.app.state.app_state.tasks.get_all() == []

    def test_create_missing_title(self, client: TestClient) -> None:
        response = client.post("/api/tasks", json={"description": VALID_TASK["description"]})
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Title is required"}

    def test_create_bad_enum_is_400(self, client: TestClient) -> None:
        response = client.post("/api/tasks", json={**VALID_TASK, "priority": "someday"})
        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.parametrize("length", [2, 3, 200, 201])
    def test_title_rules_agree(self, client: TestClient, length: int) -> None:
        """The endpoint accepts exactly what the shared rule accepts."""
        title = "a" * length
        response = client.post("/api/tasks", json={**VALID_TASK, "title": title})
        expected = validate_task_title(title)
        assert (response.status_code == 201) is expected.is_valid
        if not expected.is_valid:
            assert response.json()["message"] == expected.first_message

    @pytest.mark.parametrize("length", [9, 10, 2000, 2001])
    def test_description_rules_agree(self, client: TestClient, length: int) -> None:
        description = "d" * length
        response = client.post("/api/tasks", json={**VALID_TASK, "description": description})
        assert (response.status_code == 201) is validate_task_description(description).is_valid

    def test_update_echoes_fields(self, client: TestClient) -> None:
        response = client.put("/api/tasks/abc", json={"status": "completed"})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Task updated successfully",
            "updates": {"status": "completed"},
        }

    def test_update_validates_present_fields(self, client: TestClient) -> None:
        response = client.put("/api/tasks/abc", json={"description": "short"})
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Description must be at least 10 characters",
        }

    def test_delete(self, client: TestClient) -> None:
        response = client.delete("/api/tasks/abc")
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Task deleted successfully"}

    def test_wrong_method(self, client: TestClient) -> None:
        response = client.get("/api/tasks")
        assert response.status_code == 405
        assert response.json() == {"success": False, "message": "Method not allowed"}


class TestLoginEndpoint:
    def test_success(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login", json={"email": "demo@example.com", "password": "demo123"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Login successful"
        assert body["user"]["name"] == "Demo"
        assert body["token"]

    def test_invalid_email(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login", json={"email": "demo", "password": "demo123"}
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Invalid email format"}

    def test_short_password(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login", json={"email": "demo@example.com", "password": "123"}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Password must be at least 6 characters"


class TestAnalyzeEndpoint:
    def test_suggestions(self, client: TestClient) -> None:
        response = client.post("/api/ai/analyze", json=VALID_TASK)
        assert response.status_code == 200
        suggestions = response.json()["suggestions"]
        tomorrow = datetime.now(UTC).date() + timedelta(days=1)
        assert suggestions["suggested_priority"] == "high"
        assert "bug" in suggestions["tags"]
        assert suggestions["deadline"] == tomorrow.isoformat()

    def test_unknown_action_analyzes(self, client: TestClient) -> None:
        response = client.post("/api/ai/analyze", json={**VALID_TASK, "action": "other"})
        assert response.status_code == 200
        assert "suggestions" in response.json()

    def test_format_description(self, client: TestClient) -> None:
        response = client.post(
            "/api/ai/analyze",
            json={"action": "format_description", "description": "First line\nSecond line"},
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "formatted_description": "## Overview\nFirst line\n\n## Details\n- Second line",
        }

    @pytest.mark.parametrize(
        "payload",
        [{"title": "Only a title"}, {"action": "format_description", "description": ""}],
    )
    def test_description_required(self, client: TestClient, payload: dict) -> None:
        response = client.post("/api/ai/analyze", json=payload)
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Description is required"}

    def test_request_id_header(self, client: TestClient) -> None:
        response = client.post("/api/ai/analyze", json=VALID_TASK)
        assert response.headers["X-Request-ID"]
