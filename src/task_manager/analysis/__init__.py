"""Rule-based task analysis: suggestions, metrics, reports and PDF export."""

from .classifier import (
    analyze_priority,
    estimate_time,
    extract_tags,
    format_description,
    suggest,
    suggest_deadline,
)
from .metrics import (
    completion_rate,
    completion_trend,
    percentage,
    priority_breakdown,
    status_breakdown,
    users_overview,
)
from .pdf import layout_report, render_pdf, report_filename, report_to_pdf
from .report import filter_by_date_range, generate_report

__all__ = [
    "analyze_priority",
    "completion_rate",
    "completion_trend",
    "estimate_time",
    "extract_tags",
    "filter_by_date_range",
    "format_description",
    "generate_report",
    "layout_report",
    "percentage",
    "priority_breakdown",
    "render_pdf",
    "report_filename",
    "report_to_pdf",
    "status_breakdown",
    "suggest",
    "suggest_deadline",
    "users_overview",
]
