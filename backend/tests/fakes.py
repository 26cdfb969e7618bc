from datetime import date, datetime, time

from models.calendar_model import BusyInterval
from services.slot_service import STUDIO_TZ


def local(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute), tzinfo=STUDIO_TZ)


class FakeCalendarClient:
    def __init__(self, intervals=None, fail_on_list=False, fail_on_create=False, fail_on_delete=False):
        self.intervals = list(intervals or [])
        self.fail_on_list = fail_on_list
        self.fail_on_create = fail_on_create
        self.fail_on_delete = fail_on_delete
        self.list_calls = []
        self.created_events = []
        self.deleted_events = []

    async def list_busy_intervals(self, time_min, time_max):
        self.list_calls.append((time_min, time_max))
        if self.fail_on_list:
            raise RuntimeError("calendar unavailable")
        return [i for i in self.intervals if i.start < time_max and i.end > time_min]

    async def create_event(self, summary, description, start, end, attendee_email):
        if self.fail_on_create:
            raise RuntimeError("calendar insert failed")
        event_id = f"evt{len(self.created_events) + 1}"
        self.created_events.append(
            {
                "id": event_id,
                "summary": summary,
                "description": description,
                "start": start,
                "end": end,
                "attendee_email": attendee_email,
            }
        )
        self.intervals.append(BusyInterval(start=start, end=end, event_id=event_id))
        return event_id

    async def delete_event(self, event_id):
        if self.fail_on_delete:
            raise RuntimeError("calendar delete failed")
        self.deleted_events.append(event_id)


class FakeTransaction:
    def __init__(self, connection):
        self.connection = connection

    async def __aenter__(self):
        self.connection.transactions += 1
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeConnection:
    """Just enough of asyncpg.Connection for the queries the services run."""

    def __init__(self, closed_dates=(), bookings=(), fail_on_insert=False, fail_on_fetch=False):
        self.closed_days = [
            {"id": i + 1, "date": d, "reason": None, "type": "personal"}
            for i, d in enumerate(closed_dates)
        ]
        self.bookings = list(bookings)
        self.fail_on_insert = fail_on_insert
        self.fail_on_fetch = fail_on_fetch
        self.executed = []
        self.transactions = 0

    def transaction(self):
        return FakeTransaction(self)

    async def execute(self, query, *args):
        self.executed.append((query, args))
        if "INSERT INTO bookings" in query:
            if self.fail_on_insert:
                raise RuntimeError("insert failed")
            columns = [
                "id", "date", "start_time", "end_time", "customer_name",
                "customer_email", "customer_phone", "duration",
                "shooting_type", "message", "status", "google_event_id",
            ]
            row = dict(zip(columns, args))
            row["created_at"] = datetime.now(STUDIO_TZ)
            self.bookings.append(row)
            return "INSERT 0 1"
        return "SELECT 1"

    async def fetch(self, query, *args):
        if self.fail_on_fetch:
            raise RuntimeError("database unavailable")
        if "FROM closed_days" in query:
            from_date, to_date = args
            return [
                {"date": d}
                for d in sorted({row["date"] for row in self.closed_days})
                if from_date <= d <= to_date
            ]
        if "FROM bookings" in query and args:
            time_min, time_max = args
            return sorted(
                (
                    row
                    for row in self.bookings
                    if row["status"] == "confirmed"
                    and row["start_time"] < time_max
                    and row["end_time"] > time_min
                ),
                key=lambda row: row["start_time"],
            )
        if "FROM bookings" in query:
            return sorted(self.bookings, key=lambda row: row["start_time"])
        raise AssertionError(f"unexpected query: {query}")

    async def fetchrow(self, query, *args):
        if "INSERT INTO closed_days" in query:
            row = {
                "id": len(self.closed_days) + 1,
                "date": args[0],
                "reason": args[1],
                "type": args[2],
            }
            self.closed_days.append(row)
            return row
        raise AssertionError(f"unexpected query: {query}")


class FakeMailer:
    def __init__(self, fail=False):
        self.fail = fail
        self.studio_email = "studio@example.com"
        self.sent = []

    def send(self, to, subject, html, cc=None):
        if self.fail:
            raise RuntimeError("mail provider down")
        self.sent.append({"to": to, "cc": cc, "subject": subject, "html": html})
        return {"id": f"mail{len(self.sent)}"}

