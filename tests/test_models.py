"""Tests for the backlog data model."""

import pytest

from sprintplan.exceptions import UnresolvedDependencyError
from sprintplan.models import Backlog, WorkItem
from sprintplan.scheduler import TimelineResult, UnresolvedItem, UnresolvedReason
from tests.conftest import make_item


def test_work_item_stores_dependencies_as_tuple() -> None:
    deps: list[str] = ["a"]
    item = WorkItem("b", "B", "E", 1, 3, deps)  # type: ignore[arg-type]

    assert item.dependencies == ("a",)
    assert item.dependency_ids == {"a"}
    assert hash(item) == hash(WorkItem("b", "B", "E", 1, 3, ("a",)))


def test_work_item_is_immutable() -> None:
    item = make_item("a")
    with pytest.raises(AttributeError):
        item.min_effort = 5  # type: ignore[misc]


def test_backlog_queries() -> None:
    backlog = Backlog(
        items=[
            make_item("a", epic="X"),
            make_item("b", 1, "a", epic="Y"),
            make_item("c", 1, "a", epic="X"),
        ]
    )

    assert backlog.get_all_ids() == {"a", "b", "c"}
    assert backlog.get_item_by_id("b") is backlog.items[1]
    assert backlog.get_item_by_id("zzz") is None
    assert backlog.get_dependents("a") == ["b", "c"]
    assert backlog.get_dependents("c") == []
    assert backlog.get_epics() == ["X", "Y"]


def test_unresolved_descriptions() -> None:
    cases = {
        UnresolvedItem("a", UnresolvedReason.DUPLICATE_ID): "appears more than once",
        UnresolvedItem("a", UnresolvedReason.MISSING_DEPENDENCY, ("x",)): "unknown item(s): x",
        UnresolvedItem("a", UnresolvedReason.CIRCULAR_DEPENDENCY, ("a", "b")): "cycle: a, b",
        UnresolvedItem("a", UnresolvedReason.OVERSIZED): "too large",
        UnresolvedItem("a", UnresolvedReason.BLOCKED, ("b",)): "unscheduled item(s): b",
    }
    for unresolved, fragment in cases.items():
        assert fragment in unresolved.describe()


def test_unresolved_dependency_error() -> None:
    unresolved = [
        UnresolvedItem("a", UnresolvedReason.CIRCULAR_DEPENDENCY, ("a", "b")),
        UnresolvedItem("b", UnresolvedReason.CIRCULAR_DEPENDENCY, ("b", "a")),
    ]
    error = UnresolvedDependencyError(unresolved)

    assert str(error) == "2 item(s) could not be scheduled: a, b"
    assert error.item_ids == ["a", "b"]


def test_raise_for_unresolved() -> None:
    TimelineResult().raise_for_unresolved()

    result = TimelineResult(unresolved=[UnresolvedItem("a", UnresolvedReason.OVERSIZED)])
    with pytest.raises(UnresolvedDependencyError, match=r"1 item\(s\) could not be scheduled: a"):
        result.raise_for_unresolved()
