"""Models package."""

from .ai import (
    AnalyzeRequest,
    AnalyzeResponse,
    AnalyzeTaskRequest,
    FormatDescriptionRequest,
    FormatDescriptionResponse,
)
from .api import MessageResponse, TaskCreatedResponse, TaskUpdatedResponse
from .task import (
    PRIORITY_LABELS,
    STATUS_ICONS,
    STATUS_LABELS,
    AISuggestions,
    Priority,
    Task,
    TaskCreate,
    TaskStats,
    TaskStatus,
    TaskUpdate,
    build_task,
)
from .user import AuthSession, DirectoryUser, LoginRequest, LoginResponse, User

__all__ = [
    "AISuggestions",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "AnalyzeTaskRequest",
    "AuthSession",
    "DirectoryUser",
    "FormatDescriptionRequest",
    "FormatDescriptionResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PRIORITY_LABELS",
    "Priority",
    "STATUS_ICONS",
    "STATUS_LABELS",
    "Task",
    "TaskCreate",
    "TaskCreatedResponse",
    "TaskStats",
    "TaskStatus",
    "TaskUpdate",
    "TaskUpdatedResponse",
    "User",
    "build_task",
]
