from fastapi import HTTPException
from datetime import datetime, date, timedelta
from typing import List
from collections import Counter
from models.calendar_model import (
    BusyInterval,
    CalendarDay,
    CalendarResponse,
    DayStatus,
    SlotsResponse,
    TimeSlot,
)
from services.closure_service import is_closed
from services.closed_day_service import get_closed_dates
from services.slot_service import (
    STUDIO_TZ,
    TIME_SLOTS,
    day_bounds,
    parse_slot_time,
    now,
    slot_datetime,
)


def get_month_bounds(year: int, month: int):
    """First and last date of the month plus the local [start, end) instants."""
    try:
        from_date = date(year, month, 1)
        if month == 12:
            to_date = date(year + 1, 1, 1) - timedelta(days=1)
        else:
            to_date = date(year, month + 1, 1) - timedelta(days=1)
        time_min, _ = day_bounds(from_date)
        _, time_max = day_bounds(to_date)
    except (ValueError, OverflowError):
        raise HTTPException(status_code=400, detail="Invalid year or month")
    return from_date, to_date, time_min, time_max


async def get_booked_intervals(
    time_min: datetime, time_max: datetime, db
) -> List[BusyInterval]:
    select_query = """
        SELECT id, start_time, end_time FROM bookings
        WHERE status = 'confirmed' AND start_time < $2 AND end_time > $1
        ORDER BY start_time
    """
    rows = await db.fetch(select_query, time_min, time_max)
    return [
        BusyInterval(start=row["start_time"], end=row["end_time"], event_id=row["id"])
        for row in rows
    ]


async def get_busy_intervals(
    time_min: datetime, time_max: datetime, calendar_client, db
) -> List[BusyInterval]:
    """Calendar events plus persisted bookings in [time_min, time_max).

    A booking whose event already shows up in the calendar is counted once.
    """
    intervals = await calendar_client.list_busy_intervals(time_min, time_max)
    known_event_ids = {interval.event_id for interval in intervals if interval.event_id}
    for booked in await get_booked_intervals(time_min, time_max, db):
        if booked.event_id not in known_event_ids:
            intervals.append(booked)
    return sorted(intervals, key=lambda interval: interval.start)


def local_start_date(interval: BusyInterval) -> date:
    return interval.start.astimezone(STUDIO_TZ).date()


def is_slot_busy(slot_time: datetime, intervals: List[BusyInterval]) -> bool:
    return any(interval.start <= slot_time < interval.end for interval in intervals)


def overlaps_busy_interval(
    start: datetime, end: datetime, intervals: List[BusyInterval]
) -> bool:
    return any(start < interval.end and interval.start < end for interval in intervals)


def get_day_status(target_date: date, closed_dates, busy_count: int) -> DayStatus:
    if is_closed(target_date, closed_dates):
        return DayStatus.CLOSED
    if busy_count > 0:
        return DayStatus.OCCUPIED
    return DayStatus.AVAILABLE


async def get_month_availability(
    year: int, month: int, calendar_client, db
) -> CalendarResponse:
    from_date, to_date, time_min, time_max = get_month_bounds(year, month)
    try:
        closed_dates = await get_closed_dates(from_date, to_date, db)
        intervals = await get_busy_intervals(time_min, time_max, calendar_client, db)
    except Exception as e:
        print(f"Failed to fetch calendar data for {year}-{month:02d}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch calendar data")

    busy_counts = Counter(local_start_date(interval) for interval in intervals)
    days = []
    current_date = from_date
    while current_date <= to_date:
        busy_count = busy_counts.get(current_date, 0)
        days.append(
            CalendarDay(
                date=current_date,
                status=get_day_status(current_date, closed_dates, busy_count),
                bookings=busy_count,
            )
        )
        current_date += timedelta(days=1)
    return CalendarResponse(data=days, month=f"{year}-{month:02d}")


async def get_day_slots(target_date: date, calendar_client, db) -> SlotsResponse:
    current_time = now()
    if target_date < current_time.date():
        return SlotsResponse(date=target_date, slots=[])
    try:
        closed_dates = await get_closed_dates(target_date, target_date, db)
        if is_closed(target_date, closed_dates):
            return SlotsResponse(date=target_date, slots=[])
        start_of_day, end_of_day = day_bounds(target_date)
        intervals = await get_busy_intervals(
            start_of_day, end_of_day, calendar_client, db
        )
    except Exception as e:
        print(f"Failed to fetch time slots for {target_date}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch time slots")

    slots = []
    for time_str in TIME_SLOTS:
        slot_time = slot_datetime(target_date, parse_slot_time(time_str))
        slots.append(
            TimeSlot(
                time=time_str,
                available=slot_time > current_time
                and not is_slot_busy(slot_time, intervals),
                datetime=slot_time,
            )
        )
    return SlotsResponse(date=target_date, slots=slots)
