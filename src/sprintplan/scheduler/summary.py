"""Project-level roll-ups of a computed timeline."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from .calendars import working_days_between
from .core import ScheduledItem, TimelineResult


def project_end_date(scheduled_items: Sequence[ScheduledItem], start_date: date) -> date:
    """Latest end date over the scheduled items, or start_date if there are none."""
    if not scheduled_items:
        return start_date
    return max(item.end_date for item in scheduled_items)


def group_by_epic(scheduled_items: Sequence[ScheduledItem]) -> dict[str, list[ScheduledItem]]:
    """Group items by epic, keeping first-seen epic order and schedule order within each."""
    groups: dict[str, list[ScheduledItem]] = {}
    for item in scheduled_items:
        groups.setdefault(item.epic, []).append(item)
    return groups


def _default_str_list() -> list[str]:
    return []


def _default_epic_dates() -> dict[str, date]:
    return {}


def _default_worker_effort() -> dict[int, int]:
    return {}


@dataclass
class ProjectSummary:
    """Headline numbers for a timeline."""

    start_date: date
    end_date: date
    item_count: int
    total_effort_points: int
    working_days: int  # Inclusive working days from start to end
    iterations_used: int  # Distinct iterations with at least one booking
    epics: list[str] = field(default_factory=_default_str_list)
    epic_end_dates: dict[str, date] = field(default_factory=_default_epic_dates)
    worker_effort: dict[int, int] = field(default_factory=_default_worker_effort)  # 1-based
    unresolved_ids: list[str] = field(default_factory=_default_str_list)


def summarize(result: TimelineResult, start_date: date) -> ProjectSummary:
    """Roll a timeline result up into a ProjectSummary."""
    items = result.scheduled_items
    end = project_end_date(items, start_date)

    epic_groups = group_by_epic(items)
    epic_end_dates = {
        epic: max(item.end_date for item in members) for epic, members in epic_groups.items()
    }

    worker_effort: dict[int, int] = {}
    for item in items:
        worker_effort[item.assigned_worker] = (
            worker_effort.get(item.assigned_worker, 0) + item.effort_points
        )

    return ProjectSummary(
        start_date=start_date,
        end_date=end,
        item_count=len(items),
        total_effort_points=sum(item.effort_points for item in items),
        working_days=working_days_between(start_date, end) if items else 0,
        iterations_used=len({item.iteration_start for item in items}),
        epics=list(epic_groups),
        epic_end_dates=epic_end_dates,
        worker_effort=dict(sorted(worker_effort.items())),
        unresolved_ids=result.unresolved_ids,
    )
