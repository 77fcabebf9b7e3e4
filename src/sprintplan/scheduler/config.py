"""Configuration classes for the scheduling engine."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

# Quantized effort -> working-day duration. Larger stories carry overhead.
DEFAULT_DURATION_TABLE: dict[int, int] = {1: 1, 3: 3, 5: 5, 8: 10}


class EstimationMode(str, Enum):
    """Which end of an item's effort range to plan with."""

    OPTIMISTIC = "optimistic"  # min_effort
    PESSIMISTIC = "pessimistic"  # max_effort


class SchedulingConfig(BaseModel):
    """Tuning constants for the engine.

    These are fixed for the duration of a run; change them by building a new
    config, not by mutating one mid-schedule.
    """

    # Working days an iteration runs past its first day
    iteration_length_days: int = Field(default=10, ge=1)
    # Effort points a single worker may take on per iteration
    capacity_per_worker: int = Field(default=8, ge=1)
    # Effort -> duration lookup; unlisted values map to themselves
    duration_table: dict[int, int] = Field(default_factory=lambda: dict(DEFAULT_DURATION_TABLE))

    # Defaults used by the CLI and service when the caller supplies none
    default_team_size: int = Field(default=3, ge=1)
    default_mode: EstimationMode = EstimationMode.OPTIMISTIC

    @field_validator("duration_table")
    @classmethod
    def durations_positive(cls, v: dict[int, int]) -> dict[int, int]:
        """Reject table entries that would produce empty or negative durations."""
        for points, days in v.items():
            if points < 1 or days < 1:
                raise ValueError(
                    f"duration_table entries must be positive, got {points} -> {days}"
                )
        return v

    @property
    def max_item_duration_days(self) -> int:
        """Longest duration that fits in one iteration window (its first day included)."""
        return self.iteration_length_days + 1
