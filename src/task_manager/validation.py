"""Field validation rules shared by forms, the console and the API."""

import re

from pydantic import BaseModel, Field

TITLE_MIN = 3
TITLE_MAX = 200
DESCRIPTION_MIN = 10
DESCRIPTION_MAX = 2000
PASSWORD_MIN = 6

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class FieldError(BaseModel):
    field: str
    message: str


class ValidationResult(BaseModel):
    is_valid: bool = True
    errors: list[FieldError] = Field(default_factory=list)

    @classmethod
    def of(cls, errors: list[FieldError]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=errors)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult.of([*self.errors, *other.errors])

    @property
    def first_message(self) -> str | None:
        return self.errors[0].message if self.errors else None

    def by_field(self) -> dict[str, str]:
        """First message per field, for rendering next to form inputs."""
        out: dict[str, str] = {}
        for error in self.errors:
            out.setdefault(error.field, error.message)
        return out


def validate_email(email: str | None) -> ValidationResult:
    errors: list[FieldError] = []
    if not email:
        errors.append(FieldError(field="email", message="Email is required"))
    elif not EMAIL_RE.match(email):
        errors.append(FieldError(field="email", message="Invalid email format"))
    return ValidationResult.of(errors)


def validate_password(password: str | None) -> ValidationResult:
    errors: list[FieldError] = []
    if not password:
        errors.append(FieldError(field="password", message="Password is required"))
    elif len(password) < PASSWORD_MIN:
        errors.append(
            FieldError(
                field="password",
                message=f"Password must be at least {PASSWORD_MIN} characters",
            )
        )
    return ValidationResult.of(errors)


def _length_rule(value: str | None, field: str, label: str, lo: int, hi: int) -> ValidationResult:
    errors: list[FieldError] = []
    text = (value or "").strip()
    if not text:
        errors.append(FieldError(field=field, message=f"{label} is required"))
    elif len(text) < lo:
        errors.append(
            FieldError(field=field, message=f"{label} must be at least {lo} characters")
        )
    elif len(text) > hi:
        errors.append(
            FieldError(field=field, message=f"{label} must not exceed {hi} characters")
        )
    return ValidationResult.of(errors)


def validate_task_title(title: str | None) -> ValidationResult:
    return _length_rule(title, "title", "Title", TITLE_MIN, TITLE_MAX)


def validate_task_description(description: str | None) -> ValidationResult:
    return _length_rule(
        description, "description", "Description", DESCRIPTION_MIN, DESCRIPTION_MAX
    )


def validate_task(title: str | None, description: str | None) -> ValidationResult:
    return validate_task_title(title).merge(validate_task_description(description))


def validate_credentials(email: str | None, password: str | None) -> ValidationResult:
    return validate_email(email).merge(validate_password(password))
