"""Keyword and length heuristics that suggest priority, effort, tags and deadline.

All functions look at ``title + " " + description`` lower-cased and match
keywords as plain substrings, so "add" also matches "address".
"""

import re
from datetime import UTC, date, datetime, timedelta

from ..models import AISuggestions, Priority

HIGH_PRIORITY_KEYWORDS = ("urgent", "critical", "asap", "emergency", "important", "deadline")
LOW_PRIORITY_KEYWORDS = ("optional", "nice to have", "whenever", "eventually")

# (exclusive upper bound on word count, estimate)
TIME_BUCKETS = (
    (20, "1-2 hours"),
    (50, "3-5 hours"),
    (100, "1-2 days"),
)
LONGEST_ESTIMATE = "3-5 days"

TAG_PATTERNS: dict[str, tuple[str, ...]] = {
    "development": ("code", "develop", "programming", "api", "frontend", "backend"),
    "design": ("design", "ui", "ux", "mockup", "prototype"),
    "documentation": ("document", "write", "readme", "guide"),
    "bug": ("bug", "fix", "error", "issue"),
    "feature": ("feature", "implement", "add", "create"),
    "meeting": ("meeting", "call", "discuss", "sync"),
    "review": ("review", "check", "validate", "test"),
}
MAX_TAGS = 3

REASONING = (
    "Based on the task content, I've analyzed the urgency, complexity, "
    "and common patterns."
)

_STRUCTURED_LINE = re.compile(r"^(##?|[-*]|\d+\.)")


def _text(title: str, description: str) -> str:
    return f"{title or ''} {description or ''}".lower()


def _today(today: date | None) -> date:
    return today or datetime.now(UTC).date()


def analyze_priority(title: str, description: str) -> Priority:
    text = _text(title, description)
    if any(keyword in text for keyword in HIGH_PRIORITY_KEYWORDS):
        return Priority.HIGH
    if any(keyword in text for keyword in LOW_PRIORITY_KEYWORDS):
        return Priority.LOW
    return Priority.MEDIUM


def estimate_time(title: str, description: str) -> str:
    word_count = len(_text(title, description).split())
    for upper, estimate in TIME_BUCKETS:
        if word_count < upper:
            return estimate
    return LONGEST_ESTIMATE


def extract_tags(title: str, description: str) -> list[str]:
    text = _text(title, description)
    tags = [
        tag
        for tag, keywords in TAG_PATTERNS.items()
        if any(keyword in text for keyword in keywords)
    ]
    return tags[:MAX_TAGS]


def suggest_deadline(title: str, description: str, today: date | None = None) -> date:
    text = _text(title, description)
    start = _today(today)
    if "urgent" in text or "asap" in text:
        return start + timedelta(days=1)
    if "quick" in text or "simple" in text:
        return start + timedelta(days=3)
    return start + timedelta(days=7)


def suggest(title: str, description: str, today: date | None = None) -> AISuggestions:
    """Full suggestion bundle for one task."""
    return AISuggestions(
        suggested_priority=analyze_priority(title, description),
        estimated_time=estimate_time(title, description),
        tags=extract_tags(title, description),
        deadline=suggest_deadline(title, description, today),
        reasoning=REASONING,
    )


def format_description(description: str) -> str:
    """Restructure free text into an Overview/Details layout.

    Text that already has headings, bullets or numbered lines only gets blank
    lines between its lines.
    """
    lines = [line.strip() for line in description.strip().split("\n")]
    lines = [line for line in lines if line]
    if not lines:
        return description

    if any(_STRUCTURED_LINE.match(line) for line in lines):
        return "\n\n".join(lines)

    return "\n".join(
        ["## Overview", lines[0], "", "## Details", *(f"- {line}" for line in lines[1:])]
    )
