"""Rule-based analysis endpoint."""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, status
from pydantic import TypeAdapter, ValidationError

from ..analysis.classifier import format_description, suggest
from ..models import (
    AnalyzeRequest,
    AnalyzeResponse,
    AnalyzeTaskRequest,
    FormatDescriptionRequest,
    FormatDescriptionResponse,
)

router = APIRouter(prefix="/api/ai", tags=["ai"])

_requests = TypeAdapter(AnalyzeRequest)


@router.post("/analyze", response_model=AnalyzeResponse | FormatDescriptionResponse)
def analyze(payload: dict[str, Any] = Body(...)):
    """Suggestion bundle by default; a restructured description on request."""
    try:
        request = _requests.validate_python(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.errors()[0]["msg"],
        ) from exc

    if not request.description:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Description is required",
        )

    match request:
        case FormatDescriptionRequest():
            return FormatDescriptionResponse(
                formatted_description=format_description(request.description)
            )
        case AnalyzeTaskRequest():
            return AnalyzeResponse(
                suggestions=suggest(request.title or "", request.description)
            )
