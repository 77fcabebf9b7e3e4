"""Precedence-aware, capacity-leveled timeline scheduler."""

from __future__ import annotations

import heapq
from collections import defaultdict
from collections.abc import Sequence
from datetime import date

from sprintplan.logger import debug_enabled, get_logger
from sprintplan.models import WorkItem

from .calendars import IterationCalendar, advance_working_days, is_non_working_day, next_working_day
from .capacity import CapacityTracker
from .config import EstimationMode, SchedulingConfig
from .core import ScheduledItem, TimelineResult, UnresolvedItem, UnresolvedReason
from .effort import EffortModel

logger = get_logger()


class PrecedenceScheduler:
    """Greedy list scheduler for work items with dependencies.

    Items are scheduled in passes over the input list. An item is placed as
    soon as all of its dependencies are placed, on the earliest iteration
    where some worker (lowest index first) has both effort capacity and a free
    run of working days long enough to finish inside the iteration.

    Passes are driven by a ready queue rather than by rescanning the list, but
    the order is the same as a rescan: within a pass items are taken in input
    order, and an item released by an item later in the list waits for the
    next pass.
    """

    def __init__(  # noqa: PLR0913 - mirrors the timeline entry points
        self,
        items: Sequence[WorkItem],
        start_date: date,
        mode: EstimationMode | str,
        team_size: int,
        *,
        config: SchedulingConfig | None = None,
    ):
        """Initialize the scheduler.

        Args:
            items: Work items in priority order (earlier wins ties)
            start_date: Project start; items without dependencies may start here
            mode: Estimation mode selecting min or max effort
            team_size: Number of interchangeable workers (>= 1)
            config: Optional tuning constants
        """
        if team_size < 1:
            raise ValueError(f"team_size must be at least 1, got {team_size}")

        self.items = list(items)
        self.start_date = start_date
        self.mode = EstimationMode(mode)
        self.team_size = team_size
        self.config = config or SchedulingConfig()
        self.calendar = IterationCalendar(self.config.iteration_length_days)
        self.effort_model = EffortModel(self.config.duration_table)

        # Root items cannot start on a weekend
        self.first_working_day = (
            next_working_day(start_date) if is_non_working_day(start_date) else start_date
        )

    def schedule(self) -> TimelineResult:
        """Schedule every item that can be scheduled.

        Returns:
            TimelineResult with items in the order they were placed and the
            items that could not be placed, each with a reason
        """
        tracker = CapacityTracker()
        placed: dict[str, ScheduledItem] = {}
        timeline: list[ScheduledItem] = []
        unresolved: dict[int, UnresolvedItem] = {}

        first_index: dict[str, int] = {}
        for idx, item in enumerate(self.items):
            if item.id in first_index:
                unresolved[idx] = UnresolvedItem(item.id, UnresolvedReason.DUPLICATE_ID)
            else:
                first_index[item.id] = idx

        # Count outstanding dependencies per item and index who waits on whom
        waiting_on: dict[int, int] = {}
        dependents: dict[str, list[int]] = defaultdict(list)
        ready: list[int] = []
        for idx, item in enumerate(self.items):
            if idx in unresolved:
                continue
            dep_ids = list(dict.fromkeys(item.dependencies))
            waiting_on[idx] = len(dep_ids)
            for dep_id in dep_ids:
                dependents[dep_id].append(idx)
            if not dep_ids:
                ready.append(idx)

        pass_number = 0
        while ready:
            pass_number += 1
            if debug_enabled():
                ids = ", ".join(self.items[idx].id for idx in sorted(ready))
                logger.debug(f"Pass {pass_number}: ready [{ids}]")

            heapq.heapify(ready)
            next_pass: list[int] = []
            while ready:
                idx = heapq.heappop(ready)
                item = self.items[idx]
                scheduled = self._place(item, tracker, placed)
                if scheduled is None:
                    unresolved[idx] = UnresolvedItem(item.id, UnresolvedReason.OVERSIZED)
                    continue

                placed[item.id] = scheduled
                timeline.append(scheduled)

                for dependent_idx in dependents.get(item.id, []):
                    waiting_on[dependent_idx] -= 1
                    if waiting_on[dependent_idx] == 0:
                        if dependent_idx > idx:
                            heapq.heappush(ready, dependent_idx)
                        else:
                            next_pass.append(dependent_idx)
            ready = next_pass

        logger.debug(f"Fixed point reached after {pass_number} pass(es)")

        stalled = [
            idx
            for idx, item in enumerate(self.items)
            if idx not in unresolved and item.id not in placed
        ]
        unresolved.update(self._classify_stalled(stalled, first_index, placed))

        unresolved_items = [unresolved[idx] for idx in sorted(unresolved)]
        return TimelineResult(
            scheduled_items=timeline,
            unresolved=unresolved_items,
            warnings=[u.describe() for u in unresolved_items],
        )

    def latest_dependency_end_date(self, item: WorkItem, placed: dict[str, ScheduledItem]) -> date:
        """Earliest date the item may start given its placed dependencies."""
        if not item.dependencies:
            return self.first_working_day
        latest_end = max(placed[dep_id].end_date for dep_id in item.dependencies)
        return next_working_day(latest_end)

    def _place(
        self,
        item: WorkItem,
        tracker: CapacityTracker,
        placed: dict[str, ScheduledItem],
    ) -> ScheduledItem | None:
        """Find a slot for an item whose dependencies are all placed and book it.

        Returns None if the item can never fit a single worker-iteration.
        """
        effort = self.effort_model.effort_points_for(item, self.mode)
        duration = self.effort_model.duration_days_for(effort)
        logger.checks(f"  Considering {item.id} ({effort} pts, {duration} days)")

        if effort > self.config.capacity_per_worker:
            logger.changes(
                f"  Cannot schedule {item.id}: {effort} pts exceeds per-iteration "
                f"capacity of {self.config.capacity_per_worker}"
            )
            return None
        if duration > self.config.max_item_duration_days:
            logger.changes(
                f"  Cannot schedule {item.id}: {duration} working days is longer than "
                f"an iteration ({self.config.max_item_duration_days} days)"
            )
            return None

        earliest = self.latest_dependency_end_date(item, placed)
        worker, iteration_start, start = self._find_slot(effort, duration, earliest, tracker)
        end = advance_working_days(start, duration - 1)
        tracker.commit(worker, iteration_start, effort, (start, end))

        logger.changes(
            f"  Scheduled {item.id} on worker {worker + 1}: {start} to {end} "
            f"(iteration {iteration_start})"
        )
        return ScheduledItem.from_work_item(
            item,
            start_date=start,
            end_date=end,
            duration_days=duration,
            effort_points=effort,
            assigned_worker=worker + 1,
            iteration_start=iteration_start,
        )

    def _find_slot(
        self,
        effort: int,
        duration: int,
        earliest: date,
        tracker: CapacityTracker,
    ) -> tuple[int, date, date]:
        """Greedy allocation search.

        Walks iterations forward from the one containing `earliest`, trying
        workers in index order, and returns the first (worker, iteration_start,
        start_date) whose capacity and calendar both fit.
        """
        capacity = self.config.capacity_per_worker
        iteration_start = self.calendar.iteration_start(earliest)

        while True:
            iteration_end = self.calendar.iteration_end(iteration_start)
            for worker in range(self.team_size):
                committed = tracker.committed_effort(worker, iteration_start)
                if committed + effort > capacity:
                    logger.checks(
                        f"    Worker {worker + 1} @ {iteration_start}: "
                        f"{committed} + {effort} pts over capacity {capacity}"
                    )
                    continue

                # Never before the dependencies finish or the iteration begins
                start = max(
                    tracker.next_free_start(worker, iteration_start, earliest),
                    earliest,
                    iteration_start,
                )
                end = advance_working_days(start, duration - 1)
                if end <= iteration_end:
                    return worker, iteration_start, start

                logger.checks(
                    f"    Worker {worker + 1} @ {iteration_start}: would finish {end}, "
                    f"after iteration end {iteration_end}"
                )

            logger.debug(f"    No worker fits {iteration_start} to {iteration_end}, advancing")
            iteration_start = self.calendar.next_iteration_start(iteration_start)

    def _classify_stalled(
        self,
        stalled: list[int],
        first_index: dict[str, int],
        placed: dict[str, ScheduledItem],
    ) -> dict[int, UnresolvedItem]:
        """Explain why each stalled item never became ready."""
        pending = {self.items[idx].id: self.items[idx].dependencies for idx in stalled}
        result: dict[int, UnresolvedItem] = {}

        for idx in stalled:
            item = self.items[idx]
            missing = tuple(d for d in dict.fromkeys(item.dependencies) if d not in first_index)
            if missing:
                result[idx] = UnresolvedItem(item.id, UnresolvedReason.MISSING_DEPENDENCY, missing)
                continue

            path: list[str] = [item.id]
            if _find_cycle(item.id, item.id, pending, set(), path):
                result[idx] = UnresolvedItem(
                    item.id, UnresolvedReason.CIRCULAR_DEPENDENCY, tuple(path)
                )
                continue

            blockers = tuple(d for d in dict.fromkeys(item.dependencies) if d not in placed)
            result[idx] = UnresolvedItem(item.id, UnresolvedReason.BLOCKED, blockers)

        return result


def _find_cycle(
    origin_id: str,
    item_id: str,
    pending: dict[str, tuple[str, ...]],
    visited: set[str],
    path: list[str],
) -> bool:
    """Depth-first search for a dependency path from item_id back to origin_id.

    On success `path` holds the cycle, starting at origin_id.
    """
    for dep_id in pending.get(item_id, ()):
        if dep_id == origin_id:
            return True
        if dep_id in visited or dep_id not in pending:
            continue
        visited.add(dep_id)
        path.append(dep_id)
        if _find_cycle(origin_id, dep_id, pending, visited, path):
            return True
        path.pop()
    return False
