# tests/test_validation.py

import pytest

from task_manager.validation import (
    validate_credentials,
    validate_email,
    validate_password,
    validate_task,
    validate_task_description,
    validate_task_title,
)


class TestTitle:
    @pytest.mark.parametrize(
        ("title", "valid"),
        [
            ("ab", False),
            ("abc", True),
            ("a" * 200, True),
            ("a" * 201, False),
            ("  ab  ", False),
            ("   ", False),
        ],
    )
    def test_length_bounds(self, title: str, valid: bool) -> None:
        """Length is checked on the trimmed title."""
        assert validate_task_title(title).is_valid is valid

    def test_messages(self) -> None:
        assert validate_task_title("").first_message == "Title is required"
        assert validate_task_title("ab").first_message == "Title must be at least 3 characters"
        assert (
            validate_task_title("a" * 201).first_message
            == "Title must not exceed 200 characters"
        )


class TestDescription:
    @pytest.mark.parametrize(
        ("description", "valid"),
        [
            ("a" * 9, False),
            ("a" * 10, True),
            ("a" * 2000, True),
            ("a" * 2001, False),
            (None, False),
        ],
    )
    def test_length_bounds(self, description: str | None, valid: bool) -> None:
        assert validate_task_description(description).is_valid is valid

    def test_task_collects_both_fields(self) -> None:
        """Errors from both fields are reported, title first."""
        result = validate_task("", "short")
        assert not result.is_valid
        assert result.by_field() == {
            "title": "Title is required",
            "description": "Description must be at least 10 characters",
        }


class TestCredentials:
    @pytest.mark.parametrize(
        ("email", "valid"),
        [
            ("demo@example.com", True),
            ("a@b.c", True),
            ("a@b", False),
            ("a b@c.d", False),
            ("@example.com", False),
            ("", False),
        ],
    )
    def test_email(self, email: str, valid: bool) -> None:
        assert validate_email(email).is_valid is valid

    def test_password_minimum(self) -> None:
        assert not validate_password("12345").is_valid
        assert validate_password("123456").is_valid
        assert validate_password("12345").first_message == "Password must be at least 6 characters"

    def test_credentials(self) -> None:
        assert validate_credentials("demo@example.com", "demo123").is_valid
        assert validate_credentials("nope", "demo123").first_message == "Invalid email format"
