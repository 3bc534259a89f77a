"""Services package."""

from .auth import AuthService, build_user, display_name, issue_token
from .tasks import TaskService, validate_update

__all__ = [
    "AuthService",
    "TaskService",
    "build_user",
    "display_name",
    "issue_token",
    "validate_update",
]
