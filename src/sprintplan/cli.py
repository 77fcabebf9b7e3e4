"""Command-line interface for sprintplan."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import Annotated

import typer

from .exceptions import SprintPlanError
from .loader import load_backlog
from .logger import setup_logger
from .models import Backlog
from .scheduler import (
    EstimationMode,
    ProjectSummary,
    SchedulingService,
    TimelineResult,
)
from .unified_config import UnifiedConfig, discover_config, set_config_path

app = typer.Typer(
    name="sprintplan",
    help="Sprint timeline planner - dependency-aware, capacity-leveled delivery dates",
    add_completion=False,
)

BacklogArgument = Annotated[
    Path, typer.Argument(help="Path to the backlog file (.yaml or .json)")
]
StartDateOption = Annotated[
    str | None,
    typer.Option(
        "--start-date",
        "-s",
        help="Project start date (YYYY-MM-DD). Defaults to config, then today",
    ),
]
TeamSizeOption = Annotated[
    int | None,
    typer.Option("--team-size", "-n", help="Number of workers. Defaults to config, then 3", min=1),
]


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=placements, 2=all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: sprintplan_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for sprintplan commands."""
    setup_logger(verbose)
    set_config_path(config)


def _parse_date_option(date_str: str | None) -> date | None:
    """Parse a YYYY-MM-DD CLI option, exiting with an error on bad input."""
    if date_str is None:
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        typer.echo(
            f"Error: Invalid date format '{date_str}'. Use YYYY-MM-DD format.",
            err=True,
        )
        raise typer.Exit(1) from None


def _load(file: Path, *, validate: bool = True) -> tuple[Backlog, UnifiedConfig]:
    """Load backlog and config, converting failures into a CLI error exit."""
    try:
        config = discover_config(file)
        backlog = load_backlog(file, validate=validate)
    except (SprintPlanError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    return backlog, config


def _build_service(
    backlog: Backlog,
    config: UnifiedConfig,
    start_date: str | None,
    team_size: int | None,
    mode: EstimationMode | None,
) -> SchedulingService:
    """Resolve CLI options against config defaults."""
    return SchedulingService(
        backlog,
        _parse_date_option(start_date) or config.start_date,
        mode=mode or config.effective_mode,
        team_size=team_size or config.effective_team_size,
        config=config.scheduler,
    )


def _display_timeline(service: SchedulingService, result: TimelineResult) -> None:
    """Print the timeline in schedule order."""
    typer.echo(
        f"Timeline ({service.mode.value}, team of {service.team_size}, "
        f"starting {service.start_date})"
    )
    typer.echo("=" * 80)
    typer.echo("")

    for item in result.scheduled_items:
        typer.echo(f"{item.title} ({item.id})")
        if item.epic:
            typer.echo(f"  Epic:       {item.epic}")
        typer.echo(f"  Start:      {item.start_date}")
        typer.echo(f"  End:        {item.end_date}")
        typer.echo(f"  Effort:     {item.effort_points} pts, {item.duration_days} working days")
        typer.echo(f"  Worker:     {item.assigned_worker}")
        typer.echo(f"  Iteration:  {item.iteration_start}")
        typer.echo("")

    typer.echo(f"Project end date: {result.end_date(service.start_date)}")


def _export_timeline_csv(result: TimelineResult, output_path: Path) -> None:
    """Write one row per scheduled item."""
    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(
            [
                "id",
                "title",
                "epic",
                "effort_points",
                "duration_days",
                "worker",
                "iteration_start",
                "start_date",
                "end_date",
            ]
        )
        for item in result.scheduled_items:
            writer.writerow(
                [
                    item.id,
                    item.title,
                    item.epic,
                    item.effort_points,
                    item.duration_days,
                    item.assigned_worker,
                    item.iteration_start.isoformat(),
                    item.start_date.isoformat(),
                    item.end_date.isoformat(),
                ]
            )


def _echo_warnings(warnings: list[str]) -> None:
    if warnings:
        typer.echo("\nWarnings:", err=True)
        for warning in warnings:
            typer.echo(f"  - {warning}", err=True)


@app.command()
def schedule(  # noqa: PLR0913 - CLI command needs multiple options
    file: BacklogArgument = Path("backlog.yaml"),
    *,
    start_date: StartDateOption = None,
    team_size: TeamSizeOption = None,
    mode: Annotated[
        EstimationMode | None,
        typer.Option("--mode", "-m", help="Estimation mode. Defaults to config, then optimistic"),
    ] = None,
    output_csv: Annotated[
        Path | None,
        typer.Option("--output-csv", help="Write the timeline to a CSV file instead"),
    ] = None,
    allow_unresolved: Annotated[
        bool,
        typer.Option(
            "--allow-unresolved",
            help="Skip reference/cycle validation; unschedulable items are reported as warnings",
        ),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with status 1 if any item could not be scheduled"),
    ] = False,
) -> None:
    """Compute and display the delivery timeline."""
    backlog, config = _load(file, validate=not allow_unresolved)
    service = _build_service(backlog, config, start_date, team_size, mode)
    result = service.schedule()

    if output_csv:
        try:
            _export_timeline_csv(result, output_csv)
        except OSError as e:
            typer.echo(f"Error: Cannot write {output_csv}: {e}", err=True)
            raise typer.Exit(1) from e
        typer.echo(f"Timeline exported to {output_csv}")
    else:
        _display_timeline(service, result)

    _echo_warnings(result.warnings)

    if strict and not result.is_complete:
        typer.echo(f"Error: {len(result.unresolved)} item(s) could not be scheduled", err=True)
        raise typer.Exit(1)


@app.command(name="end-date")
def end_date(
    file: BacklogArgument = Path("backlog.yaml"),
    *,
    start_date: StartDateOption = None,
    team_size: TeamSizeOption = None,
    mode: Annotated[
        EstimationMode | None,
        typer.Option("--mode", "-m", help="Only print this mode's date (default: both)"),
    ] = None,
) -> None:
    """Print the project completion date."""
    backlog, config = _load(file)
    service = _build_service(backlog, config, start_date, team_size, mode)

    if mode is not None:
        typer.echo(service.schedule().end_date(service.start_date).isoformat())
        return

    optimistic, pessimistic = service.estimate_range()
    typer.echo(f"Optimistic:  {optimistic.isoformat()}")
    typer.echo(f"Pessimistic: {pessimistic.isoformat()}")


@app.command()
def summary(
    file: BacklogArgument = Path("backlog.yaml"),
    *,
    start_date: StartDateOption = None,
    team_size: TeamSizeOption = None,
    mode: Annotated[
        EstimationMode | None,
        typer.Option("--mode", "-m", help="Estimation mode. Defaults to config, then optimistic"),
    ] = None,
) -> None:
    """Print project-level totals and per-epic completion dates."""
    backlog, config = _load(file, validate=False)
    service = _build_service(backlog, config, start_date, team_size, mode)
    result = service.schedule()
    _display_summary(service.summary(result))
    _echo_warnings(result.warnings)


def _display_summary(project: ProjectSummary) -> None:
    typer.echo(f"Start:         {project.start_date}")
    typer.echo(f"End:           {project.end_date}")
    typer.echo(f"Items:         {project.item_count}")
    typer.echo(f"Effort:        {project.total_effort_points} pts")
    typer.echo(f"Working days:  {project.working_days}")
    typer.echo(f"Iterations:    {project.iterations_used}")
    if project.epic_end_dates:
        typer.echo("Epics:")
        for epic, epic_end in project.epic_end_dates.items():
            typer.echo(f"  {epic or '(none)'}: {epic_end}")
    if project.worker_effort:
        typer.echo("Workers:")
        for worker, effort in project.worker_effort.items():
            typer.echo(f"  {worker}: {effort} pts")


@app.command()
def check(file: BacklogArgument = Path("backlog.yaml")) -> None:
    """Validate a backlog file."""
    backlog, _ = _load(file)
    epics = backlog.get_epics()
    typer.echo(f"OK: {len(backlog.items)} item(s) in {len(epics)} epic(s)")


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
