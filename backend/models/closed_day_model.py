from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import date, datetime
from enum import Enum


class ClosedDayType(str, Enum):
    HOLIDAY = "holiday"
    MAINTENANCE = "maintenance"
    PERSONAL = "personal"


class ClosedDayRequest(BaseModel):
    date: date
    reason: Optional[str] = None
    type: ClosedDayType = ClosedDayType.PERSONAL

    @field_validator("date", mode="before")
    @classmethod
    def drop_time_of_day(cls, value):
        # admin clients may send a full timestamp, only the calendar date counts
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        return value


class ClosedDay(BaseModel):
    id: int
    date: date
    reason: Optional[str] = None
    type: ClosedDayType


class ClosedDayResponse(BaseModel):
    success: bool = True
    closedDay: ClosedDay
