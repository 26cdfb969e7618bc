from fastapi import APIRouter, HTTPException, Depends
from utils.dependencies import get_connection, get_calendar_client
from models.calendar_model import CalendarResponse, SlotsResponse
from services.calendar_service import get_month_availability, get_day_slots
from services.google_calendar_service import GoogleCalendarClient
from datetime import date
import asyncpg

router = APIRouter(prefix="/api", tags=["calendar"])


@router.get("/calendar/{year}/{month}", response_model=CalendarResponse)
async def get_calendar(
    year: int,
    month: int,
    calendar_client: GoogleCalendarClient = Depends(get_calendar_client),
    db: asyncpg.Connection = Depends(get_connection),
):
    try:
        return await get_month_availability(year, month, calendar_client, db)
    except HTTPException as http_exc:
        print(f"{http_exc.status_code} - {http_exc.detail}")
        raise http_exc
    except Exception as e:
        print(f"Error fetching calendar: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch calendar data")


@router.get("/slots/{target_date}", response_model=SlotsResponse)
async def get_slots(
    target_date: date,
    calendar_client: GoogleCalendarClient = Depends(get_calendar_client),
    db: asyncpg.Connection = Depends(get_connection),
):
    try:
        return await get_day_slots(target_date, calendar_client, db)
    except HTTPException as http_exc:
        print(f"{http_exc.status_code} - {http_exc.detail}")
        raise http_exc
    except Exception as e:
        print(f"Error fetching slots: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch time slots")
