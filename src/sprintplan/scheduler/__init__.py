"""Scheduler package - precedence-aware, capacity-leveled sprint timelines.

Main entry points:
- compute_timeline / compute_project_end_date: pure functions over work items
- plan_timeline: same run, returning a TimelineResult with unresolved items
- SchedulingService: schedules a loaded Backlog with configured defaults

Building blocks:
- calendars: working-day and iteration arithmetic
- EffortModel: effort selection and effort-to-duration quantization
- CapacityTracker: per-(worker, iteration) bookkeeping
- PrecedenceScheduler: the scheduling algorithm
"""

from .calendars import (
    IterationCalendar,
    advance_working_days,
    is_non_working_day,
    next_working_day,
    working_days_between,
)
from .capacity import CapacityKey, CapacityTracker
from .config import DEFAULT_DURATION_TABLE, EstimationMode, SchedulingConfig
from .core import ScheduledItem, TimelineResult, UnresolvedItem, UnresolvedReason
from .effort import EffortModel
from .precedence import PrecedenceScheduler
from .service import SchedulingService
from .summary import ProjectSummary, group_by_epic, project_end_date, summarize
from .timeline import compute_project_end_date, compute_timeline, estimate_range, plan_timeline

__all__ = [
    # Core dataclasses
    "ScheduledItem",
    "TimelineResult",
    "UnresolvedItem",
    "UnresolvedReason",
    # Configuration
    "SchedulingConfig",
    "EstimationMode",
    "DEFAULT_DURATION_TABLE",
    # Calendars
    "IterationCalendar",
    "is_non_working_day",
    "next_working_day",
    "advance_working_days",
    "working_days_between",
    # Building blocks
    "EffortModel",
    "CapacityKey",
    "CapacityTracker",
    "PrecedenceScheduler",
    # Entry points
    "compute_timeline",
    "compute_project_end_date",
    "plan_timeline",
    "estimate_range",
    "SchedulingService",
    # Summaries
    "ProjectSummary",
    "summarize",
    "project_end_date",
    "group_by_epic",
]
