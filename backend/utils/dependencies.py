import asyncpg
from fastapi import Request, HTTPException
from services.google_calendar_service import GoogleCalendarClient
from services.mail_service import ResendMailer


async def get_connection(request: Request):
    if not hasattr(request.app.state, "db_pool") or not request.app.state.db_pool:
        print("Database connection pool is not available")
        raise HTTPException(status_code=503, detail="Database service unavailable")
    pool: asyncpg.Pool = request.app.state.db_pool
    async with pool.acquire() as connection:
        yield connection


async def get_calendar_client(request: Request):
    if (
        not hasattr(request.app.state, "calendar_client")
        or not request.app.state.calendar_client
    ):
        print("Google Calendar client is not available")
        raise HTTPException(status_code=503, detail="Calendar service unavailable")
    client: GoogleCalendarClient = request.app.state.calendar_client
    return client


async def get_mailer(request: Request):
    # bookings go through without e-mail, so a missing mailer is not fatal
    mailer: ResendMailer = getattr(request.app.state, "mailer", None)
    if not mailer:
        print("Mail service is not available, confirmations will be skipped")
    return mailer
