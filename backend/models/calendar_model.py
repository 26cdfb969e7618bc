from pydantic import BaseModel
from typing import List, Optional
from datetime import date, datetime
from enum import Enum


class DayStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    CLOSED = "closed"


class BusyInterval(BaseModel):
    start: datetime
    end: datetime
    event_id: Optional[str] = None


class CalendarDay(BaseModel):
    date: date
    status: DayStatus
    bookings: int = 0


class CalendarResponse(BaseModel):
    success: bool = True
    data: List[CalendarDay]
    month: str


class TimeSlot(BaseModel):
    time: str
    available: bool
    datetime: datetime


class SlotsResponse(BaseModel):
    success: bool = True
    date: date
    slots: List[TimeSlot]
