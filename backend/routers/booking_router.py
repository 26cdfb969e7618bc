from fastapi import APIRouter, HTTPException, Depends
from utils.dependencies import get_connection, get_calendar_client, get_mailer
from models.booking_model import BookingRequest, BookingResponse
from services.booking_service import create_booking
from services.google_calendar_service import GoogleCalendarClient
from services.mail_service import ResendMailer
import asyncpg

router = APIRouter(prefix="/api", tags=["booking"])


@router.post("/bookings", response_model=BookingResponse)
async def create_booking_endpoint(
    booking_data: BookingRequest,
    calendar_client: GoogleCalendarClient = Depends(get_calendar_client),
    mailer: ResendMailer = Depends(get_mailer),
    db: asyncpg.Connection = Depends(get_connection),
):
    try:
        return await create_booking(booking_data, db, calendar_client, mailer)
    except HTTPException as http_exc:
        raise http_exc
    except Exception as e:
        print(f"Error creating booking: {e}")
        raise HTTPException(status_code=500, detail="Failed to create booking")
