"""Working-day and iteration calendar arithmetic."""

from datetime import date, timedelta

SATURDAY = 5  # date.weekday() value; Sunday is 6
DEFAULT_ITERATION_LENGTH_DAYS = 10


def is_non_working_day(day: date) -> bool:
    """True if the date falls on a Saturday or Sunday."""
    return day.weekday() >= SATURDAY


def next_working_day(day: date) -> date:
    """Return the first working day strictly after the given date."""
    candidate = day + timedelta(days=1)
    while is_non_working_day(candidate):
        candidate += timedelta(days=1)
    return candidate


def advance_working_days(day: date, steps: int) -> date:
    """Apply next_working_day() `steps` times.

    A task of N working days starting on `day` ends on
    advance_working_days(day, N - 1). Non-positive steps return `day`.
    """
    current = day
    for _ in range(max(steps, 0)):
        current = next_working_day(current)
    return current


def working_days_between(start: date, end: date) -> int:
    """Count working days in the inclusive range [start, end]."""
    if end < start:
        return 0
    count = 0
    current = start
    while current <= end:
        if not is_non_working_day(current):
            count += 1
        current += timedelta(days=1)
    return count


class IterationCalendar:
    """Maps dates onto fixed-length iterations ("sprints").

    An iteration is identified by its start date. Iterations found from a date
    start on that week's Monday; iterations reached by advancing past a
    previous one start on the working day after its end.
    """

    def __init__(self, iteration_length_days: int = DEFAULT_ITERATION_LENGTH_DAYS) -> None:
        if iteration_length_days < 1:
            raise ValueError(f"iteration_length_days must be >= 1, got {iteration_length_days}")
        self.iteration_length_days = iteration_length_days

    def iteration_start(self, day: date) -> date:
        """Monday of the calendar week containing `day` (Sunday belongs to the week before)."""
        return day - timedelta(days=day.weekday())

    def iteration_end(self, iteration_start: date) -> date:
        """Last working day of the iteration; the start day itself is not counted."""
        return advance_working_days(iteration_start, self.iteration_length_days)

    def next_iteration_start(self, iteration_start: date) -> date:
        """Start of the iteration that follows the one starting at `iteration_start`."""
        return next_working_day(self.iteration_end(iteration_start))
