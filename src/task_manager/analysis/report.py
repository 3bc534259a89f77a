"""Markdown-like task analysis report.

The narrative is assembled from ordered rules. Each section either picks the
first rule whose predicate holds (branching prose) or keeps every rule whose
predicate holds (recommendations). Rule order is part of the output contract.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime

from ..db.tasks import compute_stats
from ..models import Task
from .metrics import completion_rate, percentage, priority_breakdown


@dataclass(frozen=True)
class ReportFacts:
    """Numbers and labels every rule may read."""

    total: int
    completed: int
    in_progress: int
    todo: int
    overdue: int
    high: int
    medium: int
    low: int
    completion_rate: int
    period: str
    generated_on: str

    def share(self, count: int) -> int | None:
        return percentage(count, self.total)


@dataclass(frozen=True)
class Rule:
    when: Callable[[ReportFacts], bool]
    render: Callable[[ReportFacts], str]


def _always(_: ReportFacts) -> bool:
    return True


def first_match(rules: list[Rule], facts: ReportFacts) -> str:
    for rule in rules:
        if rule.when(facts):
            return rule.render(facts)
    return ""


def all_matches(rules: list[Rule], facts: ReportFacts) -> list[str]:
    return [rule.render(facts) for rule in rules if rule.when(facts)]


def _short_date(value: date) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def _long_date(value: date) -> str:
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def describe_period(start: date | None, end: date | None) -> str:
    if start and end:
        return f"from {_short_date(start)} to {_short_date(end)}"
    if start:
        return f"from {_short_date(start)} onwards"
    if end:
        return f"until {_short_date(end)}"
    return "for all time"


def filter_by_date_range(
    tasks: list[Task], start: date | None = None, end: date | None = None
) -> list[Task]:
    """Tasks whose creation date lies within [start, end]; open bounds allowed."""
    if start is None and end is None:
        return list(tasks)
    out: list[Task] = []
    for task in tasks:
        created = task.created_at.astimezone(UTC).date()
        if start is not None and created < start:
            continue
        if end is not None and created > end:
            continue
        out.append(task)
    return out


def collect_facts(
    tasks: list[Task],
    start: date | None = None,
    end: date | None = None,
    now: datetime | None = None,
) -> ReportFacts:
    now = now or datetime.now(UTC)
    stats = compute_stats(tasks, now)
    priorities = priority_breakdown(tasks)
    return ReportFacts(
        total=stats.total,
        completed=stats.completed,
        in_progress=stats.in_progress,
        todo=stats.todo,
        overdue=stats.overdue,
        high=priorities.high,
        medium=priorities.medium,
        low=priorities.low,
        completion_rate=completion_rate(stats.completed, stats.total),
        period=describe_period(start, end),
        generated_on=_long_date(now.date()),
    )


def _with_share(text: str, share: int | None) -> str:
    return text if share is None else f"{text} ({share}%)"


# ---- section rules ----

PERFORMANCE_BANDS = [
    Rule(
        lambda f: f.completion_rate >= 80,
        lambda f: "✅ **Excellent Performance** - The team is maintaining an exceptional "
        "completion rate. This indicates strong productivity and effective task management.",
    ),
    Rule(
        lambda f: f.completion_rate >= 60,
        lambda f: "✓ **Good Performance** - Completion rate is above average, showing solid "
        "progress. Consider strategies to push this higher.",
    ),
    Rule(
        lambda f: f.completion_rate >= 40,
        lambda f: "⚠️ **Moderate Performance** - There is room for improvement. Review task "
        "assignments and identify potential bottlenecks.",
    ),
    Rule(
        _always,
        lambda f: "⚠️ **Attention Required** - Completion rate is below optimal levels. "
        "Immediate action recommended to improve task execution.",
    ),
]

WORKLOAD = [
    Rule(
        lambda f: f.in_progress > f.todo,
        lambda f: "- Current focus is primarily on in-progress tasks, indicating active "
        "engagement with ongoing work.",
    ),
    Rule(
        _always,
        lambda f: "- Higher number of pending tasks suggests need for better task initiation "
        "and prioritization.",
    ),
]

OVERDUE = [
    Rule(
        lambda f: f.overdue > 0,
        lambda f: "### ⚠️ Overdue Tasks Alert\n"
        f"There are currently **{f.overdue} overdue tasks** requiring immediate attention. "
        "These should be prioritized to prevent project delays.",
    ),
    Rule(
        _always,
        lambda f: "### ✅ No Overdue Tasks\n"
        "Excellent time management! All tasks are being completed within their deadlines.",
    ),
]

PRIORITY_ANALYSIS = [
    Rule(
        lambda f: f.high > f.medium + f.low,
        lambda f: "### High Priority Focus\n"
        + _with_share(
            "The workload is heavily weighted toward high-priority tasks", f.share(f.high)
        )
        + ". This indicates:\n"
        "- Critical projects are receiving appropriate attention\n"
        "- Team is focused on high-impact work\n"
        "- May need additional resources to manage high-priority load",
    ),
    Rule(
        _always,
        lambda f: "### Balanced Priority Distribution\n"
        "Priority distribution shows a healthy balance across different task levels, "
        "allowing for both urgent and important work to progress simultaneously.",
    ),
]

RECOMMENDATIONS = [
    Rule(
        lambda f: f.completion_rate < 70,
        lambda f: "1. **Improve Completion Rate**: Consider breaking down larger tasks into "
        "smaller, manageable subtasks to boost completion metrics.",
    ),
    Rule(
        lambda f: f.overdue > 3,
        lambda f: "2. **Address Overdue Tasks**: Schedule a focused session to clear overdue "
        "tasks and prevent further accumulation.",
    ),
    Rule(
        lambda f: f.in_progress > f.total * 0.5,
        lambda f: "3. **Reduce Work-in-Progress**: Limit concurrent tasks to improve focus and "
        "completion speed.",
    ),
    Rule(
        lambda f: f.high > 10,
        lambda f: "4. **High Priority Management**: Review if all high-priority tasks truly "
        "require urgent attention or if some can be reclassified.",
    ),
    Rule(
        _always,
        lambda f: "5. **Maintain Momentum**: Continue current practices for completed tasks "
        "and apply successful strategies to pending work.",
    ),
    Rule(
        _always,
        lambda f: "6. **Regular Reviews**: Schedule weekly review sessions to assess progress "
        "and adjust priorities as needed.",
    ),
]

CONCLUSION = [
    Rule(
        lambda f: f.completion_rate >= 70 and f.overdue == 0,
        lambda f: "The current task management performance demonstrates strong execution and "
        "organization. The team is effectively managing workload and meeting deadlines "
        "consistently. Continue monitoring metrics and maintaining current best practices.",
    ),
    Rule(
        lambda f: f.completion_rate >= 50,
        lambda f: "Overall performance shows positive trends with room for targeted "
        "improvements. Focus on the recommendations outlined above to enhance productivity "
        "and task completion rates.",
    ),
    Rule(
        _always,
        lambda f: "Performance metrics indicate significant opportunities for improvement. "
        "Implementing the recommended strategies will help establish better task management "
        "practices and improve overall team productivity.",
    ),
]

RULE = "---"


def _header(f: ReportFacts) -> list[str]:
    return [
        "# Task Management Analysis Report",
        "## Executive Summary\n"
        f"Analysis Period: {f.period}\n"
        f"Report Generated: {f.generated_on}",
        RULE,
        "## Overview\n"
        "This report provides a comprehensive analysis of task management performance for "
        "the specified period. The analysis covers task completion rates, priority "
        "distribution, and actionable recommendations for improved productivity.",
        RULE,
    ]


def _key_metrics(f: ReportFacts) -> list[str]:
    statistics = "\n".join(
        [
            "### Task Statistics",
            f"- **Total Tasks**: {f.total}",
            _with_share(f"- **Completed Tasks**: {f.completed}", f.share(f.completed)),
            f"- **In Progress**: {f.in_progress}",
            f"- **Pending (To Do)**: {f.todo}",
            f"- **Overdue Tasks**: {f.overdue}",
        ]
    )
    distribution = "\n".join(
        [
            "### Priority Distribution",
            _with_share(f"- **High Priority**: {f.high} tasks", f.share(f.high)),
            _with_share(f"- **Medium Priority**: {f.medium} tasks", f.share(f.medium)),
            _with_share(f"- **Low Priority**: {f.low} tasks", f.share(f.low)),
        ]
    )
    return ["## Key Metrics", statistics, distribution, RULE]


def _performance(f: ReportFacts) -> list[str]:
    rate = "N/A" if f.total == 0 else f"{f.completion_rate}%"
    return [
        "## Performance Analysis",
        f"### Completion Rate: {rate}\n{first_match(PERFORMANCE_BANDS, f)}",
        f"### Workload Distribution\n{first_match(WORKLOAD, f)}",
        first_match(OVERDUE, f),
        RULE,
    ]


def _priority(f: ReportFacts) -> list[str]:
    return ["## Priority Analysis", first_match(PRIORITY_ANALYSIS, f), RULE]


def _recommendations(f: ReportFacts) -> list[str]:
    return ["## Recommendations", *all_matches(RECOMMENDATIONS, f), RULE]


def _conclusion(f: ReportFacts) -> list[str]:
    return [
        "## Conclusion",
        first_match(CONCLUSION, f),
        RULE,
        "*This report was generated automatically based on task data analysis. For "
        "questions or clarifications, please consult with your project manager.*",
    ]


SECTIONS: list[Callable[[ReportFacts], list[str]]] = [
    _header,
    _key_metrics,
    _performance,
    _priority,
    _recommendations,
    _conclusion,
]


def render_report(facts: ReportFacts) -> str:
    blocks: list[str] = []
    for section in SECTIONS:
        blocks.extend(section(facts))
    return "\n\n".join(blocks)


def generate_report(
    tasks: list[Task],
    start: date | None = None,
    end: date | None = None,
    now: datetime | None = None,
) -> str:
    """Report over ``tasks``, which the caller has already filtered by date."""
    return render_report(collect_facts(tasks, start, end, now))
