from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

STUDIO_TZ = ZoneInfo("Europe/Rome")

CLOSING_TIME = time(18, 0)

TIME_SLOTS = [
    "09:00",
    "10:00",
    "11:00",
    "12:00",
    "13:00",
    "14:00",
    "15:00",
    "16:00",
    "17:00",
]


def parse_slot_time(time_str: str) -> time:
    return datetime.strptime(time_str, "%H:%M").time()


GRID_TIMES = {parse_slot_time(time_str) for time_str in TIME_SLOTS}


def is_grid_slot(slot_time: time) -> bool:
    # offsets and sub-minute parts never land on the grid
    return slot_time.tzinfo is None and slot_time in GRID_TIMES


def slot_datetime(target_date: date, slot_time: time) -> datetime:
    return datetime.combine(target_date, slot_time, tzinfo=STUDIO_TZ)


def day_bounds(target_date: date):
    start_of_day = datetime.combine(target_date, time(0, 0), tzinfo=STUDIO_TZ)
    end_of_day = datetime.combine(
        target_date + timedelta(days=1), time(0, 0), tzinfo=STUDIO_TZ
    )
    return start_of_day, end_of_day


def now() -> datetime:
    return datetime.now(STUDIO_TZ)


def today() -> date:
    return now().date()
