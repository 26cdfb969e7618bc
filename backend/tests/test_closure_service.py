from datetime import date, timedelta

import pytest

from services.closure_service import (
    FIXED_HOLIDAYS,
    is_closed,
    is_fixed_holiday,
    is_weekly_closure,
)


def test_every_sunday_is_closed() -> None:
    day = date(2030, 1, 6)  # a Sunday
    for _ in range(60):
        assert is_weekly_closure(day)
        assert is_closed(day)
        day += timedelta(days=7)


def test_saturday_and_weekdays_are_open() -> None:
    # 2030-03-04 is a Monday, none of the week is a holiday
    monday = date(2030, 3, 4)
    for offset in range(6):
        assert not is_closed(monday + timedelta(days=offset))


@pytest.mark.parametrize("year", [2024, 2026, 2031, 2100])
@pytest.mark.parametrize("month,day", sorted(FIXED_HOLIDAYS))
def test_fixed_holidays_are_closed_every_year(year: int, month: int, day: int) -> None:
    holiday = date(year, month, day)
    assert is_fixed_holiday(holiday)
    assert is_closed(holiday)


def test_there_are_ten_fixed_holidays() -> None:
    assert len(FIXED_HOLIDAYS) == 10


def test_declared_closure_closes_an_ordinary_day() -> None:
    ordinary = date(2030, 3, 5)
    assert not is_closed(ordinary)
    assert is_closed(ordinary, {ordinary})
    assert not is_closed(ordinary, {date(2030, 3, 6)})


def test_sunday_stays_closed_without_declared_closures() -> None:
    assert is_closed(date(2030, 3, 3), set())
