"""Core dataclasses for the scheduling engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from sprintplan.exceptions import UnresolvedDependencyError
from sprintplan.models import WorkItem


@dataclass(frozen=True)
class ScheduledItem:
    """A work item with its placement on the timeline."""

    id: str
    title: str
    epic: str
    min_effort: int
    max_effort: int
    dependencies: tuple[str, ...]
    priority: str | None
    start_date: date
    end_date: date
    duration_days: int  # Working days
    effort_points: int  # Effort actually booked (per estimation mode)
    assigned_worker: int  # 1-based
    iteration_start: date  # Iteration the effort was booked against

    @classmethod
    def from_work_item(  # noqa: PLR0913 - one argument per placement field
        cls,
        item: WorkItem,
        *,
        start_date: date,
        end_date: date,
        duration_days: int,
        effort_points: int,
        assigned_worker: int,
        iteration_start: date,
    ) -> ScheduledItem:
        """Copy the item's fields and attach the placement."""
        return cls(
            id=item.id,
            title=item.title,
            epic=item.epic,
            min_effort=item.min_effort,
            max_effort=item.max_effort,
            dependencies=item.dependencies,
            priority=item.priority,
            start_date=start_date,
            end_date=end_date,
            duration_days=duration_days,
            effort_points=effort_points,
            assigned_worker=assigned_worker,
            iteration_start=iteration_start,
        )


class UnresolvedReason(str, Enum):
    """Why an item was left off the timeline."""

    DUPLICATE_ID = "duplicate_id"  # Another item earlier in the list has the same id
    MISSING_DEPENDENCY = "missing_dependency"  # Depends on an id that is not in the list
    CIRCULAR_DEPENDENCY = "circular_dependency"  # Part of a dependency cycle
    OVERSIZED = "oversized"  # Effort or duration can never fit one worker-iteration
    BLOCKED = "blocked"  # Depends on another unresolved item


@dataclass(frozen=True)
class UnresolvedItem:
    """An item the engine could not place, with the reason."""

    item_id: str
    reason: UnresolvedReason
    blocking_ids: tuple[str, ...] = ()

    def describe(self) -> str:
        """One-line human-readable explanation."""
        blockers = ", ".join(self.blocking_ids)
        if self.reason == UnresolvedReason.DUPLICATE_ID:
            return f"Item '{self.item_id}' appears more than once; later copies are ignored"
        if self.reason == UnresolvedReason.MISSING_DEPENDENCY:
            return f"Item '{self.item_id}' depends on unknown item(s): {blockers}"
        if self.reason == UnresolvedReason.CIRCULAR_DEPENDENCY:
            return f"Item '{self.item_id}' is part of a dependency cycle: {blockers}"
        if self.reason == UnresolvedReason.OVERSIZED:
            return f"Item '{self.item_id}' is too large to fit in a single iteration"
        return f"Item '{self.item_id}' is blocked by unscheduled item(s): {blockers}"


def _default_scheduled() -> list[ScheduledItem]:
    return []


def _default_unresolved() -> list[UnresolvedItem]:
    return []


def _default_str_list() -> list[str]:
    return []


@dataclass
class TimelineResult:
    """Complete result of one scheduling run.

    scheduled_items is in the order items became schedulable, not input order.
    """

    scheduled_items: list[ScheduledItem] = field(default_factory=_default_scheduled)
    unresolved: list[UnresolvedItem] = field(default_factory=_default_unresolved)
    warnings: list[str] = field(default_factory=_default_str_list)

    @property
    def is_complete(self) -> bool:
        """True when every input item was placed."""
        return not self.unresolved

    @property
    def unresolved_ids(self) -> list[str]:
        """IDs of items left off the timeline."""
        return [u.item_id for u in self.unresolved]

    def end_date(self, start_date: date) -> date:
        """Latest end date, or start_date when nothing was scheduled."""
        if not self.scheduled_items:
            return start_date
        return max(item.end_date for item in self.scheduled_items)

    def get_scheduled(self, item_id: str) -> ScheduledItem | None:
        """Look up a scheduled item by id."""
        for item in self.scheduled_items:
            if item.id == item_id:
                return item
        return None

    def raise_for_unresolved(self) -> None:
        """Raise UnresolvedDependencyError if any item was left off."""
        if self.unresolved:
            raise UnresolvedDependencyError(self.unresolved)
