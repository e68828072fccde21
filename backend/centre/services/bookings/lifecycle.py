# backend/centre/services/bookings/lifecycle.py
"""
Booking lifecycle: create, update, cancel.

Status machine:
    pending   -> confirmed | rejected | cancelled
    confirmed -> cancelled
    rejected, cancelled: terminal

Every write that touches the interval re-runs the conflict check against
other pending/confirmed bookings on the same facility and recomputes
total_hours / total_cost. Notifications are sent after commit and never
affect the result of the write.
"""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...errors import ConflictError, InternalError, NotFoundError, ValidationError
from ...models import Booking, Facility
from ...schemas.bookings import BookingCreate, BookingUpdate
from ...utils.time import to_storage
from ..notifications import BookingNotifier, BookingSnapshot
from .conflicts import ACTIVE_STATUSES, has_conflict

logger = logging.getLogger(__name__)

TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"confirmed", "rejected", "cancelled"}),
    "confirmed": frozenset({"cancelled"}),
    "rejected": frozenset(),
    "cancelled": frozenset(),
}

_HOURS_QUANT = Decimal("0.0001")
_MONEY_QUANT = Decimal("0.01")

_NOT_NULL_FIELDS = ("customer_name", "customer_email", "event_title", "status",
                    "start_date_time", "end_date_time")


# ── Pricing ──────────────────────────────────────────────────────────────


def compute_total_hours(start: datetime, end: datetime) -> Decimal:
    seconds = Decimal((end - start).total_seconds())
    return (seconds / Decimal(3600)).quantize(_HOURS_QUANT, rounding=ROUND_HALF_UP)


def compute_total_cost(total_hours: Decimal, hourly_rate: Decimal | None) -> Decimal | None:
    """total_hours × hourly_rate to 2dp; None when the facility has no rate."""
    if hourly_rate is None:
        return None
    return (Decimal(total_hours) * Decimal(hourly_rate)).quantize(
        _MONEY_QUANT, rounding=ROUND_HALF_UP
    )


def can_transition(current: str, new: str) -> bool:
    return new == current or new in TRANSITIONS.get(current, frozenset())


# ── Reads ────────────────────────────────────────────────────────────────


def get_booking(db: Session, booking_id: int) -> Booking:
    booking = db.get(Booking, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    return booking


def list_bookings(
    db: Session,
    facility_id: int | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    status: str | None = None,
) -> list[Booking]:
    query = db.query(Booking)
    if facility_id is not None:
        query = query.filter(Booking.facility_id == facility_id)
    if start_date is not None:
        query = query.filter(Booking.start_date_time >= to_storage(start_date))
    if end_date is not None:
        query = query.filter(Booking.start_date_time <= to_storage(end_date))
    if status is not None:
        query = query.filter(Booking.status == status)
    return query.order_by(Booking.start_date_time).all()


# ── Writes ───────────────────────────────────────────────────────────────


def create_booking(
    db: Session,
    data: BookingCreate,
    notifier: BookingNotifier,
) -> Booking:
    """
    Create a pending booking.

    Raises:
        ValidationError: start >= end
        NotFoundError: facility missing or inactive
        ConflictError: interval overlaps an active booking
        InternalError: persistence failure
    """
    start = to_storage(data.start_date_time)
    end = to_storage(data.end_date_time)
    if start >= end:
        raise ValidationError("End time must be after start time")

    facility = _lock_facility(db, data.facility_id)
    if not facility or not facility.active:
        raise NotFoundError("Facility not found or inactive")

    if has_conflict(db, facility.id, start, end):
        raise ConflictError("Time slot not available")

    total_hours = compute_total_hours(start, end)
    booking = Booking(
        facility_id=facility.id,
        customer_name=data.customer_name,
        customer_email=data.customer_email,
        customer_phone=data.customer_phone,
        event_title=data.event_title,
        event_description=data.event_description,
        start_date_time=start,
        end_date_time=end,
        total_hours=total_hours,
        hourly_rate=facility.hourly_rate,
        total_cost=compute_total_cost(total_hours, facility.hourly_rate),
        status="pending",
        notes=data.notes,
    )
    db.add(booking)
    _commit(db, "Failed to create booking")
    db.refresh(booking)

    logger.info(
        "Booking %s created: facility=%s %s-%s",
        booking.id, facility.id, booking.start_date_time, booking.end_date_time,
    )

    snapshot = BookingSnapshot.from_booking(booking)
    _notify(notifier.notify_customer, snapshot, "customer acknowledgement")
    _notify(notifier.notify_admin_new_booking, snapshot, "admin new-booking notice")
    return booking


def update_booking(
    db: Session,
    booking_id: int,
    data: BookingUpdate,
    notifier: BookingNotifier,
) -> Booking:
    """
    Partially update a booking.

    Rescheduling re-validates the interval and re-checks conflicts (self
    excluded) when the resulting status is active.
    """
    booking = get_booking(db, booking_id)
    changes = data.model_dump(exclude_unset=True)

    for field in _NOT_NULL_FIELDS:
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null")

    old_status = booking.status
    new_status = changes.pop("status", None)
    if new_status is not None and not can_transition(old_status, new_status):
        raise ValidationError(f"Cannot change status from {old_status} to {new_status}")
    resulting_status = new_status or old_status

    if "start_date_time" in changes or "end_date_time" in changes:
        start = to_storage(changes.pop("start_date_time", None) or booking.start_date_time)
        end = to_storage(changes.pop("end_date_time", None) or booking.end_date_time)
        if start >= end:
            raise ValidationError("End time must be after start time")

        facility = _lock_facility(db, booking.facility_id)
        if resulting_status in ACTIVE_STATUSES and has_conflict(
            db, booking.facility_id, start, end, exclude_booking_id=booking.id
        ):
            raise ConflictError("Time slot not available")

        rate = facility.hourly_rate if facility else booking.hourly_rate
        booking.start_date_time = start
        booking.end_date_time = end
        booking.total_hours = compute_total_hours(start, end)
        booking.hourly_rate = rate
        booking.total_cost = compute_total_cost(booking.total_hours, rate)

    for field, value in changes.items():
        setattr(booking, field, value)
    if new_status is not None:
        booking.status = new_status

    _commit(db, "Failed to update booking")
    db.refresh(booking)

    if new_status is not None and new_status != old_status:
        logger.info("Booking %s status %s -> %s", booking.id, old_status, new_status)
        _notify_status_change(notifier, booking)

    return booking


def cancel_booking(
    db: Session,
    booking_id: int,
    notifier: BookingNotifier,
) -> Booking:
    """Soft-cancel. Cancelling a cancelled booking is a no-op."""
    booking = get_booking(db, booking_id)

    if booking.status == "cancelled":
        logger.info("Booking %s already cancelled", booking.id)
        return booking
    if not can_transition(booking.status, "cancelled"):
        raise ValidationError(f"Cannot cancel a {booking.status} booking")

    old_status = booking.status
    booking.status = "cancelled"
    _commit(db, "Failed to cancel booking")
    db.refresh(booking)

    logger.info("Booking %s status %s -> cancelled", booking.id, old_status)
    _notify_status_change(notifier, booking)
    return booking


# ── Helpers ──────────────────────────────────────────────────────────────


def _lock_facility(db: Session, facility_id: int) -> Facility | None:
    """
    Load the facility with a row lock so concurrent writers for the same
    facility serialise on it. Dialects without FOR UPDATE (SQLite) ignore it.
    """
    return (
        db.query(Facility)
        .filter(Facility.id == facility_id)
        .with_for_update()
        .first()
    )


def _commit(db: Session, message: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(message)
        raise InternalError(message) from e


def _notify_status_change(notifier: BookingNotifier, booking: Booking) -> None:
    snapshot = BookingSnapshot.from_booking(booking)
    _notify(notifier.notify_admin_status_change, snapshot, "admin status update")
    _notify(notifier.notify_customer, snapshot, "customer status update")


def _notify(
    send: Callable[[BookingSnapshot], None],
    snapshot: BookingSnapshot,
    what: str,
) -> None:
    try:
        send(snapshot)
    except Exception:
        logger.exception("Failed to send %s for booking %s", what, snapshot.booking_id)
