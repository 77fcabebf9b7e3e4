"""Configuration file (sprintplan_config.yaml) loading and discovery.

A single optional file holds the engine constants plus planning defaults:

    scheduler:
      iteration_length_days: 10
      capacity_per_worker: 8
      duration_table: {1: 1, 3: 3, 5: 5, 8: 10}
    team_size: 3
    mode: optimistic
    start_date: 2024-01-01
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from .exceptions import ParseError
from .scheduler.config import EstimationMode, SchedulingConfig

CONFIG_FILENAME = "sprintplan_config.yaml"

# Set from the CLI --config option
_explicit_config_path: Path | None = None


class UnifiedConfig(BaseModel):
    """Everything a config file can set."""

    scheduler: SchedulingConfig = Field(default_factory=SchedulingConfig)
    team_size: int | None = Field(default=None, ge=1)
    mode: EstimationMode | None = None
    start_date: date | None = None

    @property
    def effective_team_size(self) -> int:
        """Configured team size, falling back to the scheduler default."""
        return self.team_size if self.team_size is not None else self.scheduler.default_team_size

    @property
    def effective_mode(self) -> EstimationMode:
        """Configured mode, falling back to the scheduler default."""
        return self.mode if self.mode is not None else self.scheduler.default_mode


def load_unified_config(config_path: Path | str) -> UnifiedConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to sprintplan_config.yaml

    Returns:
        Validated UnifiedConfig

    Raises:
        FileNotFoundError: If the file does not exist
        ParseError: If the file is not valid YAML or fails validation
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        data: Any = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ParseError(f"Failed to read {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse config {config_path}: {e}") from e

    if data is None:
        return UnifiedConfig()
    if not isinstance(data, dict):
        raise ParseError(f"Config {config_path} must contain a mapping at the root level")

    try:
        return UnifiedConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ParseError(f"Invalid config {config_path}: {e}") from e


def set_config_path(path: Path | None) -> None:
    """Set the explicit config path (CLI --config)."""
    global _explicit_config_path  # noqa: PLW0603 - process-wide CLI option
    _explicit_config_path = path


def get_config_path() -> Path | None:
    """Get the explicit config path, if one was set."""
    return _explicit_config_path


def discover_config(backlog_path: Path | str | None = None) -> UnifiedConfig:
    """Find and load configuration, or return defaults.

    Search order:
    1. Explicit path set with set_config_path()
    2. The backlog file's directory / sprintplan_config.yaml
    3. Current directory / sprintplan_config.yaml
    """
    explicit = get_config_path()
    if explicit is not None:
        return load_unified_config(explicit)

    candidates: list[Path] = []
    if backlog_path is not None:
        candidates.append(Path(backlog_path).parent / CONFIG_FILENAME)
    candidates.append(Path(CONFIG_FILENAME))

    for candidate in candidates:
        if candidate.exists():
            return load_unified_config(candidate)
    return UnifiedConfig()
