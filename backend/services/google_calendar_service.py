from datetime import datetime
from typing import List, Optional
from urllib.parse import quote
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2.credentials import Credentials
from dotenv import load_dotenv
from models.calendar_model import BusyInterval
from services.slot_service import STUDIO_TZ
import asyncio
import httpx
import os

load_dotenv()

GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET")
GOOGLE_REFRESH_TOKEN = os.getenv("GOOGLE_REFRESH_TOKEN")
GOOGLE_CALENDAR_ID = os.getenv("GOOGLE_CALENDAR_ID", "primary")

CALENDAR_API_URL = "https://www.googleapis.com/calendar/v3"
TOKEN_URI = "https://oauth2.googleapis.com/token"
CALENDAR_SCOPES = ["https://www.googleapis.com/auth/calendar"]


class GoogleCalendarClient:
    """Busy intervals and event writes against one Google calendar.

    The httpx client is owned by the application lifespan; this class only
    borrows it.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        credentials: Credentials,
        calendar_id: str,
    ):
        self.http_client = http_client
        self.credentials = credentials
        self.calendar_id = calendar_id
        self.events_url = f"{CALENDAR_API_URL}/calendars/{quote(calendar_id, safe='')}/events"

    async def _auth_headers(self):
        if not self.credentials.valid:
            # google-auth refreshes synchronously
            await asyncio.to_thread(self.credentials.refresh, GoogleAuthRequest())
        return {"Authorization": f"Bearer {self.credentials.token}"}

    async def list_busy_intervals(
        self, time_min: datetime, time_max: datetime
    ) -> List[BusyInterval]:
        params = {
            "timeMin": time_min.isoformat(),
            "timeMax": time_max.isoformat(),
            "singleEvents": "true",
            "orderBy": "startTime",
        }
        intervals = []
        page_token = None
        while True:
            if page_token:
                params["pageToken"] = page_token
            response = await self.http_client.get(
                self.events_url, params=params, headers=await self._auth_headers()
            )
            response.raise_for_status()
            data = response.json()
            for event in data.get("items", []):
                interval = event_to_busy_interval(event)
                if interval:
                    intervals.append(interval)
            page_token = data.get("nextPageToken")
            if not page_token:
                return intervals

    async def create_event(
        self,
        summary: str,
        description: str,
        start: datetime,
        end: datetime,
        attendee_email: str,
    ) -> str:
        event = {
            "summary": summary,
            "description": description,
            "start": {"dateTime": start.isoformat(), "timeZone": str(STUDIO_TZ)},
            "end": {"dateTime": end.isoformat(), "timeZone": str(STUDIO_TZ)},
            "attendees": [{"email": attendee_email}],
        }
        response = await self.http_client.post(
            self.events_url, json=event, headers=await self._auth_headers()
        )
        response.raise_for_status()
        return response.json()["id"]

    async def delete_event(self, event_id: str):
        response = await self.http_client.delete(
            f"{self.events_url}/{quote(event_id, safe='')}",
            headers=await self._auth_headers(),
        )
        # already gone counts as deleted
        if response.status_code in (404, 410):
            return
        response.raise_for_status()


def event_to_busy_interval(event: dict) -> Optional[BusyInterval]:
    if event.get("status") == "cancelled":
        return None
    start = (event.get("start") or {}).get("dateTime")
    end = (event.get("end") or {}).get("dateTime")
    # all-day events only carry "date" and never block a slot
    if not start or not end:
        return None
    return BusyInterval(
        start=datetime.fromisoformat(start.replace("Z", "+00:00")),
        end=datetime.fromisoformat(end.replace("Z", "+00:00")),
        event_id=event.get("id"),
    )


def create_calendar_client(http_client: httpx.AsyncClient) -> GoogleCalendarClient:
    if not (GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET and GOOGLE_REFRESH_TOKEN):
        raise RuntimeError("Google Calendar credentials are not configured")
    credentials = Credentials(
        token=None,
        refresh_token=GOOGLE_REFRESH_TOKEN,
        client_id=GOOGLE_CLIENT_ID,
        client_secret=GOOGLE_CLIENT_SECRET,
        token_uri=TOKEN_URI,
        scopes=CALENDAR_SCOPES,
    )
    print(f"Google Calendar client ready for calendar {GOOGLE_CALENDAR_ID}")
    return GoogleCalendarClient(http_client, credentials, GOOGLE_CALENDAR_ID)
