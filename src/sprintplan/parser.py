"""Backlog file parser (YAML, and JSON story exports)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .models import Backlog, BacklogMetadata, WorkItem
from .schemas import BacklogSchema, WorkItemSchema


class BacklogParser:
    """Parser for backlog files.

    Only handles reading and structural validation. Reference and cycle
    checks live in sprintplan.loader.
    """

    def parse_file(self, file_path: Path | str) -> Backlog:
        """Parse a .yaml/.yml or .json file into a Backlog."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Failed to read {path}: {e}") from e

        data: Any
        if path.suffix.lower() == ".json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise ParseError(f"Failed to parse JSON: {e}") from e
        else:
            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise ParseError(f"Failed to parse YAML: {e}") from e

        # A bare list of stories is shorthand for {"items": [...]}
        if isinstance(data, list):
            data = {"items": data}
        if not isinstance(data, dict):
            raise ParseError("Backlog must contain a mapping or a list at the root level")

        return self.parse_data(data)  # type: ignore[arg-type]

    def parse_data(self, data: dict[str, Any]) -> Backlog:
        """Parse already-loaded data into a Backlog."""
        try:
            schema = BacklogSchema(**data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid backlog structure: {e}") from e

        metadata = BacklogMetadata(
            version=schema.metadata.version,
            last_updated=schema.metadata.last_updated,
            team=schema.metadata.team,
        )

        if isinstance(schema.items, dict):
            pairs = list(schema.items.items())
        else:
            pairs = []
            for position, item_data in enumerate(schema.items):
                if not item_data.id:
                    raise ValidationError(f"Item #{position + 1} ('{item_data.title}') has no id")
                pairs.append((item_data.id, item_data))

        return Backlog(
            metadata=metadata,
            items=[_to_work_item(item_id, item_data) for item_id, item_data in pairs],
        )


def _to_work_item(item_id: str, item_data: WorkItemSchema) -> WorkItem:
    return WorkItem(
        id=str(item_id),
        title=item_data.title,
        epic=item_data.epic,
        min_effort=item_data.min_effort,
        max_effort=item_data.max_effort,
        dependencies=tuple(item_data.requires),
        priority=item_data.priority,
    )
