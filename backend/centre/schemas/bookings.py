# backend/centre/schemas/bookings.py

from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field

from .common import UtcDateTime
from .facilities import FacilitySummary

BookingStatus = Literal["pending", "confirmed", "cancelled", "rejected"]


class BookingCreate(BaseModel):
    facility_id: int
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    customer_phone: Optional[str] = None
    event_title: str = Field(min_length=1)
    event_description: Optional[str] = None

    start_date_time: datetime
    end_date_time: datetime

    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class BookingUpdate(BaseModel):
    status: Optional[BookingStatus] = None
    notes: Optional[str] = None
    customer_name: Optional[str] = Field(default=None, min_length=1)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    event_title: Optional[str] = Field(default=None, min_length=1)
    event_description: Optional[str] = None

    start_date_time: Optional[datetime] = None
    end_date_time: Optional[datetime] = None

    model_config = {"from_attributes": True, "extra": "forbid"}


class BookingRead(BaseModel):
    id: int
    facility_id: int

    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    event_title: str
    event_description: Optional[str] = None

    start_date_time: UtcDateTime
    end_date_time: UtcDateTime

    total_hours: float
    hourly_rate: Optional[float] = None
    total_cost: Optional[float] = None

    status: BookingStatus
    notes: Optional[str] = None

    created_at: UtcDateTime
    updated_at: UtcDateTime

    facility: Optional[FacilitySummary] = None

    model_config = {"from_attributes": True}


# ── Availability ─────────────────────────────────────────────────────────


class TimeSlot(BaseModel):
    start_time: UtcDateTime
    end_time: UtcDateTime
    start_time_display: str  # "HH:MM", local to the centre
    end_time_display: str
    available: bool
    reason: Optional[Literal["booked", "too_soon"]] = None


class OperatingHours(BaseModel):
    start: str
    end: str


class AvailabilityResponse(BaseModel):
    facility: FacilitySummary
    date: date
    day_of_week: int = Field(description="0 = Monday … 6 = Sunday")
    available: bool
    message: Optional[str] = None
    operating_hours: Optional[OperatingHours] = None
    time_slots: list[TimeSlot]
    existing_bookings: int
