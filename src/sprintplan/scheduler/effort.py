"""Effort selection and effort-to-duration conversion."""

from sprintplan.models import WorkItem

from .config import DEFAULT_DURATION_TABLE, EstimationMode


class EffortModel:
    """Turns an item's effort range into booked points and a working-day duration."""

    def __init__(self, duration_table: dict[int, int] | None = None) -> None:
        """Initialize with a quantization table.

        Args:
            duration_table: Effort points -> working days. Values missing from
                the table map to themselves. Defaults to {1:1, 3:3, 5:5, 8:10}.
        """
        self.duration_table = dict(
            DEFAULT_DURATION_TABLE if duration_table is None else duration_table
        )

    def effort_points_for(self, item: WorkItem, mode: EstimationMode) -> int:
        """Effort to book: min_effort when optimistic, max_effort when pessimistic."""
        if mode == EstimationMode.OPTIMISTIC:
            return item.min_effort
        return item.max_effort

    def duration_days_for(self, effort_points: int) -> int:
        """Working days needed for the given effort (identity for unlisted values)."""
        return self.duration_table.get(effort_points, effort_points)
