"""Tests for configuration file loading and discovery."""

from datetime import date
from pathlib import Path

import pytest

from sprintplan.exceptions import ParseError
from sprintplan.scheduler import EstimationMode
from sprintplan.unified_config import (
    CONFIG_FILENAME,
    UnifiedConfig,
    discover_config,
    get_config_path,
    load_unified_config,
    set_config_path,
)

FULL_CONFIG = """
scheduler:
  iteration_length_days: 5
  capacity_per_worker: 6
  duration_table:
    1: 1
    2: 3
  default_team_size: 4

team_size: 2
mode: pessimistic
start_date: 2024-03-04
"""


def _write(directory: Path, content: str, name: str = CONFIG_FILENAME) -> Path:
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


def test_load_full_config(tmp_path: Path) -> None:
    config = load_unified_config(_write(tmp_path, FULL_CONFIG))

    assert config.scheduler.iteration_length_days == 5
    assert config.scheduler.capacity_per_worker == 6
    assert config.scheduler.duration_table == {1: 1, 2: 3}
    assert config.team_size == 2
    assert config.mode == EstimationMode.PESSIMISTIC
    assert config.start_date == date(2024, 3, 4)
    assert config.effective_team_size == 2
    assert config.effective_mode == EstimationMode.PESSIMISTIC


def test_effective_values_fall_back_to_scheduler_defaults() -> None:
    config = UnifiedConfig()

    assert config.team_size is None
    assert config.effective_team_size == 3
    assert config.effective_mode == EstimationMode.OPTIMISTIC
    assert config.scheduler.duration_table == {1: 1, 3: 3, 5: 5, 8: 10}


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    config = load_unified_config(_write(tmp_path, ""))
    assert config == UnifiedConfig()


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_unified_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "content",
    [
        "team_size: 0\n",
        "mode: realistic\n",
        "scheduler:\n  capacity_per_worker: 0\n",
        "scheduler:\n  duration_table:\n    3: 0\n",
    ],
)
def test_invalid_values(tmp_path: Path, content: str) -> None:
    with pytest.raises(ParseError, match="Invalid config"):
        load_unified_config(_write(tmp_path, content))


def test_non_mapping_root(tmp_path: Path) -> None:
    with pytest.raises(ParseError, match="mapping"):
        load_unified_config(_write(tmp_path, "- a\n- b\n"))


def test_malformed_yaml(tmp_path: Path) -> None:
    with pytest.raises(ParseError, match="Failed to parse config"):
        load_unified_config(_write(tmp_path, "team_size: [3\n"))


def test_discover_next_to_backlog(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    project = tmp_path / "project"
    project.mkdir()
    _write(project, "team_size: 7\n")

    assert discover_config(project / "backlog.yaml").team_size == 7


def test_discover_in_current_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    _write(tmp_path, "team_size: 5\n")

    assert discover_config(tmp_path / "elsewhere" / "backlog.yaml").team_size == 5
    assert discover_config().team_size == 5


def test_discover_explicit_path_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    _write(tmp_path, "team_size: 5\n")
    explicit = _write(tmp_path, "team_size: 9\n", name="custom.yaml")

    set_config_path(explicit)
    assert get_config_path() == explicit
    assert discover_config(tmp_path / "backlog.yaml").team_size == 9


def test_discover_explicit_path_must_exist(tmp_path: Path) -> None:
    set_config_path(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError):
        discover_config()


def test_discover_without_any_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert discover_config(tmp_path / "backlog.yaml") == UnifiedConfig()


def test_undecodable_config(tmp_path: Path) -> None:
    path = tmp_path / CONFIG_FILENAME
    path.write_bytes(b"team_size: \xff\xfe\n")
    with pytest.raises(ParseError, match="Failed to read"):
        load_unified_config(path)
