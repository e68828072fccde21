# backend/centre/services/bookings/config.py
"""
Booking configuration for availability and slot calculation.
"""

from dataclasses import dataclass
from functools import lru_cache
from zoneinfo import ZoneInfo

from ...config import settings
from ...utils.time import is_valid_time_str, time_str_to_minutes


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the booking system.

    Attributes:
        open_time: Default daily opening time "HH:MM"
        close_time: Default daily closing time "HH:MM" (24:00 allowed)
        slot_step_minutes: Slot size in minutes (15/30/60)
        min_notice_hours: Minimum hours between now and a bookable slot start
        timezone: IANA zone the operating hours are expressed in
    """
    open_time: str = "07:00"
    close_time: str = "23:00"
    slot_step_minutes: int = 60
    min_notice_hours: int = 2
    timezone: str = "Europe/London"

    def __post_init__(self):
        """Validate configuration."""
        if self.slot_step_minutes not in (15, 30, 60):
            raise ValueError(f"slot_step_minutes must be 15, 30, or 60, got {self.slot_step_minutes}")
        for value in (self.open_time, self.close_time):
            if not is_valid_time_str(value):
                raise ValueError(f"Invalid time {value!r}, expected HH:MM")
        if time_str_to_minutes(self.open_time) >= time_str_to_minutes(self.close_time):
            raise ValueError("open_time must be before close_time")
        if self.min_notice_hours < 0:
            raise ValueError("min_notice_hours must not be negative")

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


@lru_cache
def get_booking_config() -> BookingConfig:
    """Booking configuration from settings (singleton)."""
    return BookingConfig(
        open_time=settings.booking_open_time,
        close_time=settings.booking_close_time,
        slot_step_minutes=settings.booking_slot_minutes,
        min_notice_hours=settings.booking_min_notice_hours,
        timezone=settings.timezone,
    )
