"""Functional entry points for timeline computation."""

from collections.abc import Sequence
from datetime import date

from sprintplan.models import WorkItem

from .config import EstimationMode, SchedulingConfig
from .core import ScheduledItem, TimelineResult
from .precedence import PrecedenceScheduler
from .summary import project_end_date


def plan_timeline(
    items: Sequence[WorkItem],
    start_date: date,
    mode: EstimationMode | str,
    team_size: int,
    config: SchedulingConfig | None = None,
) -> TimelineResult:
    """Schedule items and report both placed and unplaceable items.

    Args:
        items: Work items; list order breaks ties
        start_date: Project start date
        mode: "optimistic" (min effort) or "pessimistic" (max effort)
        team_size: Number of workers
        config: Optional tuning constants

    Returns:
        TimelineResult; unresolved items carry the reason they were left off
    """
    return PrecedenceScheduler(items, start_date, mode, team_size, config=config).schedule()


def compute_timeline(
    items: Sequence[WorkItem],
    start_date: date,
    mode: EstimationMode | str,
    team_size: int,
    config: SchedulingConfig | None = None,
) -> list[ScheduledItem]:
    """Scheduled items in the order they became schedulable.

    Items that can never be scheduled (cycles, unknown dependencies) are
    omitted; use plan_timeline() to find out which and why.
    """
    return plan_timeline(items, start_date, mode, team_size, config).scheduled_items


def compute_project_end_date(
    items: Sequence[WorkItem],
    start_date: date,
    mode: EstimationMode | str,
    team_size: int,
    config: SchedulingConfig | None = None,
) -> date:
    """Completion date of the project, or start_date when nothing is scheduled."""
    return project_end_date(
        compute_timeline(items, start_date, mode, team_size, config), start_date
    )


def estimate_range(
    items: Sequence[WorkItem],
    start_date: date,
    team_size: int,
    config: SchedulingConfig | None = None,
) -> tuple[date, date]:
    """(optimistic, pessimistic) completion dates for the same backlog and team."""
    return (
        compute_project_end_date(items, start_date, EstimationMode.OPTIMISTIC, team_size, config),
        compute_project_end_date(items, start_date, EstimationMode.PESSIMISTIC, team_size, config),
    )
