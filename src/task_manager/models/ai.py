"""Request and response variants for the analysis endpoint."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Discriminator, Tag

from .task import AISuggestions


class AnalyzeTaskRequest(BaseModel):
    """Ask for the full suggestion bundle."""

    action: str | None = None
    title: str | None = None
    description: str | None = None


class FormatDescriptionRequest(BaseModel):
    """Ask for a restructured description."""

    action: Literal["format_description"] = "format_description"
    title: str | None = None
    description: str | None = None


def _action_tag(value: Any) -> str:
    if isinstance(value, dict):
        action = value.get("action")
    else:
        action = getattr(value, "action", None)
    return "format_description" if action == "format_description" else "analyze"


AnalyzeRequest = Annotated[
    Union[
        Annotated[AnalyzeTaskRequest, Tag("analyze")],
        Annotated[FormatDescriptionRequest, Tag("format_description")],
    ],
    Discriminator(_action_tag),
]


class AnalyzeResponse(BaseModel):
    success: bool = True
    suggestions: AISuggestions


class FormatDescriptionResponse(BaseModel):
    success: bool = True
    formatted_description: str
