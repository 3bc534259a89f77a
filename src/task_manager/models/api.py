"""Response envelopes for the JSON API."""

from typing import Any

from pydantic import BaseModel, Field

from .task import Task


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class TaskCreatedResponse(BaseModel):
    success: bool = True
    task: Task
    message: str = "Task created successfully"


class TaskUpdatedResponse(BaseModel):
    success: bool = True
    message: str = "Task updated successfully"
    updates: dict[str, Any] = Field(default_factory=dict)
