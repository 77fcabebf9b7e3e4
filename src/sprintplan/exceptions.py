"""Custom exceptions for sprintplan."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .scheduler.core import UnresolvedItem


class SprintPlanError(Exception):
    """Base exception for all sprintplan errors."""

    pass


class ValidationError(SprintPlanError):
    """Raised when backlog validation fails."""

    pass


class CircularDependencyError(ValidationError):
    """Raised when a circular dependency is detected."""

    pass


class MissingReferenceError(ValidationError):
    """Raised when a referenced item ID does not exist."""

    pass


class ParseError(SprintPlanError):
    """Raised when a backlog file cannot be parsed."""

    pass


class UnresolvedDependencyError(SprintPlanError):
    """Raised when a timeline is required to be complete but items were left unscheduled."""

    def __init__(self, unresolved: list[UnresolvedItem]) -> None:
        self.unresolved = unresolved
        ids = ", ".join(item.item_id for item in unresolved)
        super().__init__(f"{len(unresolved)} item(s) could not be scheduled: {ids}")

    @property
    def item_ids(self) -> list[str]:
        """IDs of the items that could not be scheduled."""
        return [item.item_id for item in self.unresolved]
