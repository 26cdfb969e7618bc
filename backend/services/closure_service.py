from datetime import date
from typing import Iterable

# date.weekday(): Monday is 0, Sunday is 6. Saturday stays open.
WEEKLY_OFF_DAY = 6

FIXED_HOLIDAYS = {
    (1, 1),  # Capodanno
    (1, 6),  # Epifania
    (4, 25),  # Festa della Liberazione
    (5, 1),  # Festa del Lavoro
    (6, 2),  # Festa della Repubblica
    (8, 15),  # Ferragosto
    (11, 1),  # Ognissanti
    (12, 8),  # Immacolata
    (12, 25),  # Natale
    (12, 26),  # Santo Stefano
}


def is_weekly_closure(target_date: date) -> bool:
    return target_date.weekday() == WEEKLY_OFF_DAY


def is_fixed_holiday(target_date: date) -> bool:
    return (target_date.month, target_date.day) in FIXED_HOLIDAYS


def is_declared_closure(target_date: date, declared_dates: Iterable[date]) -> bool:
    return target_date in set(declared_dates)


def is_closed(target_date: date, declared_dates: Iterable[date] = ()) -> bool:
    """Weekly off-day, annual holiday or a day an admin closed by hand."""
    return (
        is_weekly_closure(target_date)
        or is_fixed_holiday(target_date)
        or is_declared_closure(target_date, declared_dates)
    )
