# backend/centre/services/bookings/availability.py
"""
Day availability for a facility.

Splits the facility's operating window for a date into fixed-size slots and
marks each one:
- booked   : overlaps a pending/confirmed booking
- too_soon : starts before now + min_notice_hours
- available: otherwise

Operating window comes from facility_hours for the weekday, falling back to
the configured default. Read-only.
"""

from datetime import date, datetime, time, timedelta

from sqlalchemy.orm import Session

from ...errors import NotFoundError
from ...models import Booking, Facility, FacilityHours
from ...utils.time import as_utc, time_str_to_minutes, to_storage, utcnow
from .config import BookingConfig, get_booking_config
from .conflicts import ACTIVE_STATUSES


def get_availability(
    db: Session,
    facility_id: int,
    target_date: date,
    config: BookingConfig | None = None,
    now: datetime | None = None,
) -> dict:
    """
    Calculate slot availability for a facility on a date.

    Returns:
        Dict shaped like AvailabilityResponse.

    Raises:
        NotFoundError: facility missing or inactive.
    """
    config = config or get_booking_config()
    now = as_utc(now) if now else utcnow()
    tz = config.tz

    # Step 1: Facility
    facility = _get_facility(db, facility_id)
    if not facility:
        raise NotFoundError("Facility not found or inactive")

    # Step 2: Bookings touching the local calendar day
    day_start = datetime.combine(target_date, time.min, tzinfo=tz)
    day_end = datetime.combine(target_date + timedelta(days=1), time.min, tzinfo=tz)
    bookings = _get_day_bookings(db, facility_id, day_start, day_end)

    day_of_week = target_date.weekday()  # 0 = Monday
    result = {
        "facility": facility_summary(facility),
        "date": target_date,
        "day_of_week": day_of_week,
        "available": False,
        "message": None,
        "operating_hours": None,
        "time_slots": [],
        "existing_bookings": len(bookings),
    }

    # Step 3: Past dates are never bookable
    if target_date < now.astimezone(tz).date():
        result["message"] = "Date is in the past"
        return result

    # Step 4: Operating hours for the weekday
    open_time, close_time, is_open = _get_day_hours(db, facility_id, day_of_week, config)
    if not is_open:
        result["message"] = "Facility is not available on this day"
        return result
    result["operating_hours"] = {"start": open_time, "end": close_time}

    # Step 5: Slots
    step = config.slot_step_minutes
    earliest_start = now + timedelta(hours=config.min_notice_hours)
    intervals = [(as_utc(b.start_date_time), as_utc(b.end_date_time)) for b in bookings]

    slots = []
    t = time_str_to_minutes(open_time)
    end_min = time_str_to_minutes(close_time)
    while t + step <= end_min:
        slot_start = day_start + timedelta(minutes=t)
        slot_end = slot_start + timedelta(minutes=step)
        start_utc = as_utc(slot_start)
        end_utc = as_utc(slot_end)

        booked = any(start_utc < b_end and end_utc > b_start for b_start, b_end in intervals)
        too_soon = start_utc < earliest_start

        reason = None
        if booked:
            reason = "booked"
        elif too_soon:
            reason = "too_soon"

        slots.append({
            "start_time": start_utc,
            "end_time": end_utc,
            "start_time_display": slot_start.strftime("%H:%M"),
            "end_time_display": slot_end.strftime("%H:%M"),
            "available": reason is None,
            "reason": reason,
        })
        t += step

    result["time_slots"] = slots
    result["available"] = any(s["available"] for s in slots)
    if not result["available"]:
        result["message"] = "No time slots available on this day"

    return result


def facility_summary(facility: Facility) -> dict:
    return {
        "id": facility.id,
        "name": facility.name,
        "hourly_rate": facility.hourly_rate,
        "capacity": facility.capacity,
        "features": list(facility.features or []),
    }


# ── Helpers ──────────────────────────────────────────────────────────────


def _get_day_hours(
    db: Session,
    facility_id: int,
    day_of_week: int,
    config: BookingConfig,
) -> tuple[str, str, bool]:
    """(open_time, close_time, is_open) for a weekday."""
    row = (
        db.query(FacilityHours)
        .filter(
            FacilityHours.facility_id == facility_id,
            FacilityHours.day_of_week == day_of_week,
        )
        .first()
    )
    if row is None:
        return config.open_time, config.close_time, True
    return row.open_time, row.close_time, bool(row.is_open)


def _get_facility(db: Session, facility_id: int) -> Facility | None:
    return (
        db.query(Facility)
        .filter(Facility.id == facility_id, Facility.active.is_(True))
        .first()
    )


def _get_day_bookings(
    db: Session,
    facility_id: int,
    day_start: datetime,
    day_end: datetime,
) -> list[Booking]:
    """Active bookings overlapping [day_start, day_end)."""
    return (
        db.query(Booking)
        .filter(
            Booking.facility_id == facility_id,
            Booking.status.in_(ACTIVE_STATUSES),
            Booking.start_date_time < to_storage(day_end),
            Booking.end_date_time > to_storage(day_start),
        )
        .order_by(Booking.start_date_time)
        .all()
    )
