"""Backlog loading with validation."""

from __future__ import annotations

from pathlib import Path

from .exceptions import CircularDependencyError, MissingReferenceError, ValidationError
from .models import Backlog
from .parser import BacklogParser


def load_backlog(path: Path | str, *, validate: bool = True) -> Backlog:
    """Load a backlog file.

    Args:
        path: Path to the backlog (.yaml, .yml or .json)
        validate: Check duplicate ids, dangling references and cycles. Turn
            off to let the scheduler report such items as unresolved instead.

    Returns:
        Parsed Backlog, items in file order
    """
    backlog = BacklogParser().parse_file(Path(path))
    if validate:
        validate_backlog(backlog)
    return backlog


def validate_backlog(backlog: Backlog) -> None:
    """Validate id uniqueness, reference integrity and acyclicity."""
    seen: set[str] = set()
    for item in backlog.items:
        if item.id in seen:
            raise ValidationError(f"Duplicate item id: {item.id}")
        seen.add(item.id)

    for item in backlog.items:
        for dep_id in item.dependencies:
            if dep_id not in seen:
                raise MissingReferenceError(f"Item {item.id} requires unknown item: {dep_id}")

    _check_circular_dependencies(backlog)


def _check_circular_dependencies(backlog: Backlog) -> None:
    """Raise CircularDependencyError on the first cycle found."""
    visited: set[str] = set()
    for item in backlog.items:
        path: list[str] = []
        if _has_circular_dependency(backlog, item.id, visited, path):
            start = path[-1]
            cycle = " -> ".join(path[path.index(start) :])
            raise CircularDependencyError(f"Circular dependency detected: {cycle}")


def _has_circular_dependency(
    backlog: Backlog,
    item_id: str,
    visited: set[str],
    path: list[str],
) -> bool:
    """Recursively check for a cycle reachable from item_id.

    On success the repeated id is appended to `path`, closing the cycle.
    """
    if item_id in path:
        path.append(item_id)
        return True

    if item_id in visited:
        return False

    visited.add(item_id)
    path.append(item_id)

    item = backlog.get_item_by_id(item_id)
    if item:
        for dep_id in item.dependencies:
            if _has_circular_dependency(backlog, dep_id, visited, path):
                return True

    path.pop()
    return False
