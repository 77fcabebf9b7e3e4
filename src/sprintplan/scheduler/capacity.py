"""Per-run capacity bookkeeping for (worker, iteration) buckets."""

from __future__ import annotations

import bisect
from collections import defaultdict
from datetime import date
from typing import NamedTuple

from sprintplan.logger import get_logger

from .calendars import next_working_day

logger = get_logger()


class CapacityKey(NamedTuple):
    """Identifies one worker's slice of one iteration."""

    worker: int  # 0-based worker index
    iteration_start: date


class CapacityTracker:
    """Tracks effort and booked intervals per (worker, iteration) bucket.

    Intervals in each bucket are kept sorted by start date so the latest end
    can be found without rescanning insertion order. A tracker belongs to a
    single scheduling run.
    """

    def __init__(self) -> None:
        self._effort: dict[CapacityKey, int] = defaultdict(int)
        self._intervals: dict[CapacityKey, list[tuple[date, date]]] = defaultdict(list)

    def committed_effort(self, worker: int, iteration_start: date) -> int:
        """Effort points already booked to the worker in that iteration (0 if none)."""
        return self._effort.get(CapacityKey(worker, iteration_start), 0)

    def commit(
        self,
        worker: int,
        iteration_start: date,
        effort: int,
        interval: tuple[date, date],
    ) -> None:
        """Book effort and a (start, end) interval to a worker's iteration.

        Args:
            worker: 0-based worker index
            iteration_start: Start date of the iteration being booked against
            effort: Effort points to add to the bucket
            interval: Inclusive (start, end) working-day range of the item
        """
        key = CapacityKey(worker, iteration_start)
        self._effort[key] += effort
        bisect.insort(self._intervals[key], interval)
        logger.debug(
            f"      Booked worker {worker + 1} @ {iteration_start}: "
            f"{interval[0]}..{interval[1]} ({self._effort[key]} pts committed)"
        )

    def booked_intervals(self, worker: int, iteration_start: date) -> list[tuple[date, date]]:
        """Intervals booked in the bucket, sorted by start."""
        return list(self._intervals.get(CapacityKey(worker, iteration_start), []))

    def next_free_start(self, worker: int, iteration_start: date, earliest_possible: date) -> date:
        """First date the worker is free within the iteration.

        Returns earliest_possible when nothing is booked in the bucket, otherwise
        the working day after the latest booked end.
        """
        intervals = self._intervals.get(CapacityKey(worker, iteration_start))
        if not intervals:
            return earliest_possible
        latest_end = max(end for _, end in intervals)
        return next_working_day(latest_end)

    def buckets(self) -> dict[CapacityKey, int]:
        """Snapshot of committed effort per bucket."""
        return dict(self._effort)
