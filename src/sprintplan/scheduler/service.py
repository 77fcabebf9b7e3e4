"""High-level scheduling service."""

from datetime import date
from typing import TYPE_CHECKING

from sprintplan.logger import get_logger

from .config import EstimationMode, SchedulingConfig
from .core import TimelineResult
from .summary import ProjectSummary, summarize
from .timeline import estimate_range, plan_timeline

if TYPE_CHECKING:
    from sprintplan.models import Backlog

logger = get_logger()


class SchedulingService:
    """Schedules a loaded backlog with defaults filled in from configuration.

    This service coordinates:
    - parameter defaults (start date, estimation mode, team size)
    - the PrecedenceScheduler run
    - warnings for the caller to surface
    """

    def __init__(
        self,
        backlog: "Backlog",
        start_date: date | None = None,
        *,
        mode: EstimationMode | str | None = None,
        team_size: int | None = None,
        config: SchedulingConfig | None = None,
    ):
        """Initialize scheduling service.

        Args:
            backlog: Backlog to schedule
            start_date: Project start date (defaults to today)
            mode: Estimation mode (defaults to config.default_mode)
            team_size: Number of workers (defaults to config.default_team_size)
            config: Optional scheduling configuration
        """
        self.backlog = backlog
        self.config = config or SchedulingConfig()
        self.start_date = start_date or date.today()  # noqa: DTZ011
        self.mode = EstimationMode(mode) if mode is not None else self.config.default_mode
        self.team_size = team_size if team_size is not None else self.config.default_team_size

    def schedule(self) -> TimelineResult:
        """Schedule all backlog items.

        Returns:
            TimelineResult with placements, unresolved items and warnings
        """
        logger.changes(
            f"Scheduling {len(self.backlog.items)} item(s) from {self.start_date} "
            f"({self.mode.value}, team of {self.team_size})"
        )
        result = plan_timeline(
            self.backlog.items, self.start_date, self.mode, self.team_size, self.config
        )

        if not result.scheduled_items and self.backlog.items:
            result.warnings.append("No items could be scheduled")
        return result

    def summary(self, result: TimelineResult | None = None) -> ProjectSummary:
        """Summarize a result, scheduling first if none is given."""
        return summarize(result or self.schedule(), self.start_date)

    def estimate_range(self) -> tuple[date, date]:
        """(optimistic, pessimistic) end dates for this backlog and team."""
        return estimate_range(self.backlog.items, self.start_date, self.team_size, self.config)
