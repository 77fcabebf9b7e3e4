"""Tests for working-day and iteration calendar arithmetic."""

from datetime import date

import pytest

from sprintplan.scheduler import (
    IterationCalendar,
    advance_working_days,
    is_non_working_day,
    next_working_day,
    working_days_between,
)

# January 2024: the 1st is a Monday, the 6th/7th a weekend
MON = date(2024, 1, 1)
FRI = date(2024, 1, 5)
SAT = date(2024, 1, 6)
SUN = date(2024, 1, 7)
NEXT_MON = date(2024, 1, 8)


class TestWorkingDays:
    """Test the weekend-skipping helpers."""

    def test_weekend_detection(self) -> None:
        assert is_non_working_day(SAT)
        assert is_non_working_day(SUN)
        assert not is_non_working_day(MON)
        assert not is_non_working_day(FRI)

    def test_next_working_day_midweek(self) -> None:
        assert next_working_day(MON) == date(2024, 1, 2)

    def test_next_working_day_skips_weekend(self) -> None:
        """Friday, Saturday and Sunday all roll to Monday."""
        assert next_working_day(FRI) == NEXT_MON
        assert next_working_day(SAT) == NEXT_MON
        assert next_working_day(SUN) == NEXT_MON

    def test_next_working_day_is_strictly_after(self) -> None:
        for offset in range(14):
            day = date(2024, 1, 1 + offset)
            result = next_working_day(day)
            assert result > day
            assert not is_non_working_day(result)
            assert (result - day).days <= 3

    def test_advance_working_days(self) -> None:
        assert advance_working_days(MON, 0) == MON
        assert advance_working_days(MON, 4) == FRI
        assert advance_working_days(MON, 5) == NEXT_MON
        assert advance_working_days(MON, 9) == date(2024, 1, 12)

    def test_advance_negative_steps_is_noop(self) -> None:
        assert advance_working_days(MON, -1) == MON

    def test_working_days_between(self) -> None:
        assert working_days_between(MON, FRI) == 5
        assert working_days_between(MON, date(2024, 1, 12)) == 10
        assert working_days_between(SAT, SUN) == 0
        assert working_days_between(FRI, MON) == 0


class TestIterationCalendar:
    """Test iteration boundaries."""

    def test_iteration_start_is_monday_of_week(self) -> None:
        calendar = IterationCalendar()
        assert calendar.iteration_start(MON) == MON
        assert calendar.iteration_start(date(2024, 1, 3)) == MON
        assert calendar.iteration_start(SAT) == MON

    def test_sunday_belongs_to_preceding_monday(self) -> None:
        assert IterationCalendar().iteration_start(SUN) == MON

    def test_iteration_end_counts_ten_working_days_past_start(self) -> None:
        """The start day is not counted: Monday + 10 working days is the Monday two weeks on."""
        assert IterationCalendar().iteration_end(MON) == date(2024, 1, 15)

    def test_iteration_end_custom_length(self) -> None:
        assert IterationCalendar(5).iteration_end(MON) == NEXT_MON

    def test_next_iteration_starts_after_end(self) -> None:
        calendar = IterationCalendar()
        assert calendar.next_iteration_start(MON) == date(2024, 1, 16)
        assert calendar.next_iteration_start(date(2024, 1, 16)) == date(2024, 1, 31)

    def test_invalid_length_rejected(self) -> None:
        with pytest.raises(ValueError, match="iteration_length_days"):
            IterationCalendar(0)
