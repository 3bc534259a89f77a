"""Task API router.

These handlers validate and echo; they never touch the task store. The
caller merges the returned task or updates into its own store.
"""

from fastapi import APIRouter, HTTPException, status

from ..models import (
    MessageResponse,
    TaskCreate,
    TaskCreatedResponse,
    TaskUpdate,
    TaskUpdatedResponse,
    build_task,
)
from ..services import validate_update
from ..validation import validate_task

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post(
    "", response_model=TaskCreatedResponse, status_code=status.HTTP_201_CREATED
)
def create_task_endpoint(task_data: TaskCreate):
    """Validate a new task and return it with id and timestamps assigned."""
    result = validate_task(task_data.title, task_data.description)
    if not result.is_valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.first_message,
        )
    return TaskCreatedResponse(task=build_task(task_data))


@router.put("/{task_id}", response_model=TaskUpdatedResponse)
def update_task_endpoint(task_id: str, task_data: TaskUpdate):
    """Validate the fields present in a partial update and echo them."""
    result = validate_update(task_data)
    if not result.is_valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.first_message,
        )
    return TaskUpdatedResponse(
        updates=task_data.model_dump(mode="json", exclude_unset=True)
    )


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task_endpoint(task_id: str):
    """Always succeeds; there is nothing server-side to check."""
    return MessageResponse(message="Task deleted successfully")
