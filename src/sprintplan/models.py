"""Data models for sprintplan backlogs."""

from __future__ import annotations

from dataclasses import dataclass, field

PRIORITIES = ("Low", "Medium", "High")


@dataclass(frozen=True)
class WorkItem:
    """A user story to be placed on the timeline.

    Work items are immutable; the scheduler never changes them, it produces
    ScheduledItem records alongside.
    """

    id: str
    title: str
    epic: str
    min_effort: int
    max_effort: int
    dependencies: tuple[str, ...] = ()
    priority: str | None = None  # Carried through only, never affects placement

    def __post_init__(self) -> None:
        # Accept any iterable of ids (list, set) but store a hashable tuple
        if not isinstance(self.dependencies, tuple):
            object.__setattr__(self, "dependencies", tuple(self.dependencies))

    @property
    def dependency_ids(self) -> set[str]:
        """Dependency IDs as a set."""
        return set(self.dependencies)


@dataclass
class BacklogMetadata:
    """Metadata for a backlog file."""

    version: str = "1.0"
    last_updated: str | None = None
    team: str | None = None


def _default_items() -> list[WorkItem]:
    return []


@dataclass
class Backlog:
    """Ordered collection of work items.

    Order matters: the scheduler breaks ties by position in this list.
    """

    metadata: BacklogMetadata = field(default_factory=BacklogMetadata)
    items: list[WorkItem] = field(default_factory=_default_items)

    def get_all_ids(self) -> set[str]:
        """Get all item IDs in the backlog."""
        return {item.id for item in self.items}

    def get_item_by_id(self, item_id: str) -> WorkItem | None:
        """Get an item by its ID."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def get_dependents(self, item_id: str) -> list[str]:
        """IDs of items that list the given item as a dependency, in backlog order."""
        return [item.id for item in self.items if item_id in item.dependencies]

    def get_epics(self) -> list[str]:
        """Distinct epic labels in first-seen order."""
        return list(dict.fromkeys(item.epic for item in self.items))
