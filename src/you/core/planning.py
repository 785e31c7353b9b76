"""Pure day-plan assembly logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date

from .issues import Issue

# Tracker priority keys, most urgent first
PRIORITY_ORDER = {"blocker": 0, "critical": 1, "normal": 2, "minor": 3, "trivial": 4}

PLAN_SYSTEM_PROMPT = (
    "You are a personal work assistant. You help plan a single working day "
    "from the user's open tracker issues. Be concrete and brief."
)


@dataclass
class PlanData:
    """Assembled day-plan data ready for formatting."""

    date: date
    day_of_week: str
    issues: list[Issue]
    total_count: int | None = None


def priority_rank(issue: Issue) -> float:
    """Lower is more urgent. Unknown or missing priority sorts after 'normal'."""
    key = issue.priority.key if issue.priority else None
    return PRIORITY_ORDER.get((key or "").lower(), 2.5)


def sort_by_priority(issues: list[Issue]) -> list[Issue]:
    """
    Sort issues by priority (most urgent first), then most recently updated.

    Pure function - no I/O.
    """
    by_update = sorted(issues, key=lambda i: i.updated_at or "", reverse=True)
    return sorted(by_update, key=priority_rank)


def assemble_plan(
    issues: list[Issue],
    as_of: date | None = None,
    total_count: int | None = None,
) -> PlanData:
    as_of = as_of or date.today()
    return PlanData(
        date=as_of,
        day_of_week=as_of.strftime("%A"),
        issues=sort_by_priority(issues),
        total_count=total_count,
    )


def format_issue_line(issue: Issue) -> str:
    """
    Format a single issue for the plan prompt.

    Pure function - no I/O.
    """
    details = [issue.status_display or "no status"]
    if issue.priority and issue.priority.display:
        details.append(f"priority: {issue.priority.display}")
    if issue.queue and issue.queue.key:
        details.append(f"queue: {issue.queue.key}")
    return f"- [{issue.key}] {issue.summary} ({', '.join(details)})"


def compile_plan_prompt(data: PlanData) -> str:
    """Render the user prompt for day planning."""
    issues_md = "\n".join(format_issue_line(i) for i in data.issues) or "None"

    shown = len(data.issues)
    if data.total_count is not None and data.total_count > shown:
        scope = f"{shown} of {data.total_count} open issues"
    else:
        scope = f"{shown} open issues"

    return f"""Plan my working day.

## Date
{data.date.strftime("%A, %B %d, %Y")}

## Open Issues
{scope}:
{issues_md}

## Instructions
1. Pick the issues to focus on today, most urgent first
2. Group related issues together
3. Suggest a rough order and time budget for each
4. Flag anything that looks blocked or needs clarification
5. Keep it short: a checklist, not an essay
"""
