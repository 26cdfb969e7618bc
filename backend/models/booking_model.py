from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime, date, time
from enum import Enum
import re

DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*h?\s*$", re.IGNORECASE)


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"


class BookingRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: date
    time_slot: time
    duration: int = Field(..., ge=1)
    customer_name: str = Field(..., min_length=1)
    customer_email: EmailStr
    customer_phone: str = Field(..., min_length=1)
    shooting_type: Optional[str] = None
    message: Optional[str] = None

    @field_validator("duration", mode="before")
    @classmethod
    def parse_duration_hours(cls, value):
        if isinstance(value, bool):
            raise ValueError("duration must be a whole number of hours")
        # older clients send "2h"
        if isinstance(value, str):
            match = DURATION_PATTERN.match(value)
            if not match:
                raise ValueError("duration must be a whole number of hours")
            return int(match.group(1))
        return value

    @field_validator("customer_name", "customer_phone", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class BookingConfirmation(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    date: datetime
    time_slot: str
    duration: int
    customer_name: str


class BookingResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    booking: BookingConfirmation
    email_sent: bool = False


class BookingRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    date: date
    start_time: datetime
    end_time: datetime
    customer_name: str
    customer_email: str
    customer_phone: str
    duration: int
    shooting_type: Optional[str] = None
    message: Optional[str] = None
    status: BookingStatus = BookingStatus.CONFIRMED
    google_event_id: str
    created_at: datetime


class BookingListResponse(BaseModel):
    success: bool = True
    bookings: List[BookingRecord]
