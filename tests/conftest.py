"""Pytest configuration and helpers for sprintplan tests."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator
from datetime import date

import pytest

from sprintplan.logger import reset_logger
from sprintplan.models import WorkItem
from sprintplan.scheduler import ScheduledItem, is_non_working_day, next_working_day
from sprintplan.unified_config import set_config_path

MONDAY = date(2024, 1, 1)


def make_item(  # noqa: PLR0913 - mirrors WorkItem fields
    item_id: str,
    effort: int = 1,
    *deps: str,
    max_effort: int | None = None,
    epic: str = "Epic",
    title: str | None = None,
    priority: str | None = None,
) -> WorkItem:
    """Build a WorkItem with terse defaults.

    Example:
        make_item("b", 3, "a")  # 3 points, depends on a
        make_item("c", 3, max_effort=5)  # 3..5 points, no dependencies
    """
    return WorkItem(
        id=item_id,
        title=title or item_id.title(),
        epic=epic,
        min_effort=effort,
        max_effort=max_effort if max_effort is not None else effort,
        dependencies=deps,
        priority=priority,
    )


def assert_valid_timeline(
    scheduled: list[ScheduledItem],
    *,
    capacity: int = 8,
    team_size: int | None = None,
) -> None:
    """Assert the working-day, precedence, capacity and no-overlap invariants."""
    by_id = {item.id: item for item in scheduled}

    for item in scheduled:
        assert not is_non_working_day(item.start_date), f"{item.id} starts on {item.start_date}"
        assert not is_non_working_day(item.end_date), f"{item.id} ends on {item.end_date}"
        assert item.start_date <= item.end_date
        if team_size is not None:
            assert 1 <= item.assigned_worker <= team_size

        for dep_id in item.dependencies:
            dep = by_id[dep_id]
            assert item.start_date >= next_working_day(dep.end_date), (
                f"{item.id} starts {item.start_date} but {dep_id} ends {dep.end_date}"
            )

    effort: dict[tuple[int, date], int] = defaultdict(int)
    intervals: dict[tuple[int, date], list[tuple[date, date, str]]] = defaultdict(list)
    for item in scheduled:
        key = (item.assigned_worker, item.iteration_start)
        effort[key] += item.effort_points
        intervals[key].append((item.start_date, item.end_date, item.id))

    for key, total in effort.items():
        assert total <= capacity, f"Bucket {key} booked {total} > {capacity}"

    for key, booked in intervals.items():
        booked.sort()
        for (_, end1, id1), (start2, _, id2) in zip(booked, booked[1:]):
            assert start2 > end1, f"Worker bucket {key}: {id1} ends {end1}, {id2} starts {start2}"


@pytest.fixture(autouse=True)
def clean_global_state() -> Iterator[None]:
    """Reset the logger and the explicit config path around each test."""
    yield
    reset_logger()
    set_config_path(None)
