from fastapi import HTTPException
from datetime import date
from typing import Set
from models.closed_day_model import ClosedDay, ClosedDayRequest


async def add_closed_day(closed_day_data: ClosedDayRequest, db) -> ClosedDay:
    # append-only: closing the same date twice stores two rows
    try:
        insert_query = "INSERT INTO closed_days (date, reason, type) VALUES ($1, $2, $3) RETURNING id, date, reason, type"
        row = await db.fetchrow(
            insert_query,
            closed_day_data.date,
            closed_day_data.reason,
            closed_day_data.type.value,
        )
        print(f"Closed day added: {row['date']} ({row['type']})")
        return ClosedDay(**dict(row))
    except Exception as e:
        print(f"Failed to add closed day: {e}")
        raise HTTPException(status_code=500, detail=str(e))


async def get_closed_dates(from_date: date, to_date: date, db) -> Set[date]:
    select_query = "SELECT DISTINCT date FROM closed_days WHERE date >= $1 AND date <= $2"
    rows = await db.fetch(select_query, from_date, to_date)
    return {row["date"] for row in rows}
