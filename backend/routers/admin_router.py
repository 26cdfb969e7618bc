from fastapi import APIRouter, Depends, HTTPException
from utils.dependencies import get_connection
from models.booking_model import BookingListResponse
from models.closed_day_model import ClosedDayRequest, ClosedDayResponse
from services.booking_service import get_all_bookings
from services.closed_day_service import add_closed_day
import asyncpg

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/bookings", response_model=BookingListResponse)
async def get_all_bookings_by_admin(
    db: asyncpg.Connection = Depends(get_connection),
):
    try:
        bookings = await get_all_bookings(db)
        return BookingListResponse(bookings=bookings)
    except HTTPException as http_exc:
        raise http_exc
    except Exception as e:
        print(f"Failed to fetch bookings: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/closed-days", response_model=ClosedDayResponse)
async def add_closed_day_by_admin(
    closed_day_data: ClosedDayRequest,
    db: asyncpg.Connection = Depends(get_connection),
):
    try:
        closed_day = await add_closed_day(closed_day_data, db)
        return ClosedDayResponse(closedDay=closed_day)
    except HTTPException as http_exc:
        raise http_exc
    except Exception as e:
        print(f"Failed to add closed day: {e}")
        raise HTTPException(status_code=500, detail=str(e))
