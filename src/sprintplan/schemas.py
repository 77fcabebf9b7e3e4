"""Pydantic schemas for backlog file validation."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from .models import PRIORITIES


class WorkItemSchema(BaseModel):
    """Schema for one work item.

    Accepts the snake_case YAML field names as well as the camelCase names
    used by JSON story exports (minSP, maxSP, dependencies).
    """

    id: str | None = None  # Taken from the mapping key in YAML backlogs
    title: str
    epic: str = ""
    min_effort: int = Field(ge=1, validation_alias=AliasChoices("min_effort", "minSP", "min_sp"))
    max_effort: int = Field(ge=1, validation_alias=AliasChoices("max_effort", "maxSP", "max_sp"))
    requires: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("requires", "dependencies")
    )
    priority: str | None = None

    @field_validator("requires", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        """Ensure value is a list of strings."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]  # type: ignore[misc]
        return [str(v)]

    @field_validator("epic", mode="before")
    @classmethod
    def none_epic_to_empty(cls, v: Any) -> str:
        """Treat a missing or null epic as ungrouped."""
        return "" if v is None else str(v)

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v: Any) -> str | None:
        """Accept priorities case-insensitively."""
        if v is None or v == "":
            return None
        label = str(v).strip().capitalize()
        if label not in PRIORITIES:
            raise ValueError(f"priority must be one of {', '.join(PRIORITIES)}, got '{v}'")
        return label

    @model_validator(mode="after")
    def check_effort_range(self) -> WorkItemSchema:
        """Max effort must not be below min effort."""
        if self.min_effort > self.max_effort:
            raise ValueError(
                f"max_effort ({self.max_effort}) must be greater than or equal to "
                f"min_effort ({self.min_effort})"
            )
        return self


class MetadataSchema(BaseModel):
    """Schema for backlog metadata."""

    version: str = "1.0"
    last_updated: str | None = None
    team: str | None = None

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version_to_string(cls, v: Any) -> str:
        """Ensure version is a string."""
        return str(v)

    @field_validator("last_updated", mode="before")
    @classmethod
    def coerce_date_to_string(cls, v: Any) -> str | None:
        """Convert date objects to string."""
        if v is None:
            return None
        return str(v)


class BacklogSchema(BaseModel):
    """Schema for an entire backlog file."""

    metadata: MetadataSchema = Field(default_factory=MetadataSchema)
    # Mapping keyed by item id (YAML) or a list of items carrying their own id (JSON)
    items: dict[str, WorkItemSchema] | list[WorkItemSchema] = Field(default_factory=dict)

    @field_validator("items", mode="before")
    @classmethod
    def none_items_to_empty(cls, v: Any) -> Any:
        """Treat a bare `items:` key as an empty backlog."""
        return {} if v is None else v
