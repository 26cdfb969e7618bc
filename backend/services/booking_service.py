from fastapi import HTTPException
from datetime import timedelta
from models.booking_model import (
    BookingConfirmation,
    BookingRecord,
    BookingRequest,
    BookingResponse,
    BookingStatus,
)
from services.calendar_service import get_busy_intervals, overlaps_busy_interval
from services.closed_day_service import get_closed_dates
from services.closure_service import is_closed
from services.mail_service import send_booking_confirmation_email
from services.slot_service import (
    CLOSING_TIME,
    day_bounds,
    is_grid_slot,
    now,
    slot_datetime,
)
import asyncio


def validate_booking_request(booking_data: BookingRequest):
    if not is_grid_slot(booking_data.time_slot):
        raise HTTPException(status_code=400, detail="Invalid time slot")
    start_time = slot_datetime(booking_data.date, booking_data.time_slot)
    if start_time <= now():
        raise HTTPException(status_code=400, detail="Cannot book a time in the past")
    end_time = start_time + timedelta(hours=booking_data.duration)
    if end_time > slot_datetime(booking_data.date, CLOSING_TIME):
        raise HTTPException(
            status_code=400, detail="Booking must end by studio closing time"
        )
    return start_time, end_time


def build_event_description(booking_data: BookingRequest) -> str:
    return (
        f"Cliente: {booking_data.customer_name}\n"
        f"Email: {booking_data.customer_email}\n"
        f"Telefono: {booking_data.customer_phone}\n"
        f"Tipo: {booking_data.shooting_type or 'Non specificato'}\n"
        f"Note: {booking_data.message or 'Nessuna nota'}"
    )


async def insert_booking(booking: dict, db):
    insert_query = """
        INSERT INTO bookings (id, date, start_time, end_time, customer_name,
                              customer_email, customer_phone, duration,
                              shooting_type, message, status, google_event_id)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12)
    """
    await db.execute(
        insert_query,
        booking["id"],
        booking["date"],
        booking["start_time"],
        booking["end_time"],
        booking["customer_name"],
        booking["customer_email"],
        booking["customer_phone"],
        booking["duration"],
        booking["shooting_type"],
        booking["message"],
        booking["status"],
        booking["google_event_id"],
    )


async def discard_calendar_event(event_id: str, calendar_client):
    try:
        await calendar_client.delete_event(event_id)
        print(f"Rolled back calendar event {event_id}")
    except Exception as e:
        print(f"Orphaned calendar event {event_id}, delete failed: {e}")


async def create_booking(
    booking_data: BookingRequest, db, calendar_client, mailer
) -> BookingResponse:
    start_time, end_time = validate_booking_request(booking_data)
    booking = None
    event_id = None
    try:
        async with db.transaction():
            # serialises bookings for the same day across workers until commit
            await db.execute(
                "SELECT pg_advisory_xact_lock(hashtext($1))",
                f"booking:{booking_data.date.isoformat()}",
            )
            closed_dates = await get_closed_dates(booking_data.date, booking_data.date, db)
            if is_closed(booking_data.date, closed_dates):
                raise HTTPException(status_code=409, detail="The studio is closed on this date")
            start_of_day, end_of_day = day_bounds(booking_data.date)
            intervals = await get_busy_intervals(
                start_of_day, end_of_day, calendar_client, db
            )
            if overlaps_busy_interval(start_time, end_time, intervals):
                raise HTTPException(status_code=409, detail="The selected time slot is no longer available")

            print(f"Creating calendar event for {booking_data.customer_name} at {start_time.isoformat()}")
            event_id = await calendar_client.create_event(
                summary=f"Shooting - {booking_data.customer_name}",
                description=build_event_description(booking_data),
                start=start_time,
                end=end_time,
                attendee_email=booking_data.customer_email,
            )
            booking = {
                "id": event_id,
                "date": booking_data.date,
                "start_time": start_time,
                "end_time": end_time,
                "customer_name": booking_data.customer_name,
                "customer_email": booking_data.customer_email,
                "customer_phone": booking_data.customer_phone,
                "duration": booking_data.duration,
                "shooting_type": booking_data.shooting_type,
                "message": booking_data.message,
                "status": BookingStatus.CONFIRMED.value,
                "google_event_id": event_id,
            }
            await insert_booking(booking, db)
            print(f"Booking {event_id} saved")
    except HTTPException:
        if event_id:
            await discard_calendar_event(event_id, calendar_client)
        raise
    except Exception as e:
        print(f"Failed to create booking: {e}")
        if event_id:
            await discard_calendar_event(event_id, calendar_client)
        raise HTTPException(status_code=500, detail="Failed to create booking")

    email_sent = False
    try:
        mail_result = await asyncio.to_thread(
            send_booking_confirmation_email, mailer, booking
        )
        email_sent = mail_result.get("success", False)
    except Exception as email_error:
        print(f"Confirmation email failed, booking {event_id} is kept: {email_error}")

    return BookingResponse(
        booking=BookingConfirmation(
            id=event_id,
            date=start_time,
            time_slot=booking_data.time_slot.strftime("%H:%M"),
            duration=booking_data.duration,
            customer_name=booking_data.customer_name,
        ),
        email_sent=email_sent,
    )


async def get_all_bookings(db):
    try:
        select_query = "SELECT * FROM bookings ORDER BY start_time ASC"
        bookings = await db.fetch(select_query)
        return [BookingRecord(**dict(booking)) for booking in bookings]
    except Exception as e:
        print(f"Failed to fetch bookings: {e}")
        raise HTTPException(status_code=500, detail=str(e))
