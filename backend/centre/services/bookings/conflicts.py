# backend/centre/services/bookings/conflicts.py
"""
Booking conflict checks.

Intervals are half-open [start, end): a booking ending at 12:00 and one
starting at 12:00 do not overlap.
"""

from datetime import datetime

from sqlalchemy.orm import Session

from ...models import Booking
from ...utils.time import to_storage

ACTIVE_STATUSES = ("pending", "confirmed")


def find_conflicts(
    db: Session,
    facility_id: int,
    start: datetime,
    end: datetime,
    exclude_booking_id: int | None = None,
) -> list[Booking]:
    """Active bookings on the facility overlapping [start, end)."""
    query = db.query(Booking).filter(
        Booking.facility_id == facility_id,
        Booking.status.in_(ACTIVE_STATUSES),
        Booking.start_date_time < to_storage(end),
        Booking.end_date_time > to_storage(start),
    )
    if exclude_booking_id is not None:
        query = query.filter(Booking.id != exclude_booking_id)

    return query.order_by(Booking.start_date_time).all()


def has_conflict(
    db: Session,
    facility_id: int,
    start: datetime,
    end: datetime,
    exclude_booking_id: int | None = None,
) -> bool:
    return bool(find_conflicts(db, facility_id, start, end, exclude_booking_id))
