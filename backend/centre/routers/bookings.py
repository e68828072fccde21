# backend/centre/routers/bookings.py
# Public: availability, create, get. Admin: list, update, cancel (soft).

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..errors import ValidationError
from ..schemas.bookings import (
    AvailabilityResponse,
    BookingCreate,
    BookingRead,
    BookingStatus,
    BookingUpdate,
)
from ..schemas.common import Message
from ..services.bookings import (
    BookingConfig,
    cancel_booking,
    create_booking,
    get_availability,
    get_booking,
    get_booking_config,
    list_bookings,
    update_booking,
)
from ..services.notifications import BookingNotifier, get_notifier
from ..services.site_settings import SettingsService, get_settings_service

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/availability", response_model=AvailabilityResponse)
def get_booking_availability(
    facility_id: int = Query(..., alias="facilityId"),
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    config: BookingConfig = Depends(get_booking_config),
):
    """Slots for a facility on a day, each marked available / booked / too_soon."""
    return get_availability(db, facility_id, target_date, config)


@router.get(
    "",
    response_model=list[BookingRead],
    dependencies=[Depends(require_admin)],
)
def list_all_bookings(
    facility_id: Optional[int] = Query(None, alias="facilityId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    return list_bookings(db, facility_id, start_date, end_date, booking_status)


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_new_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
    notifier: BookingNotifier = Depends(get_notifier),
    site_settings: SettingsService = Depends(get_settings_service),
):
    if not site_settings.get_all().booking_enabled:
        raise ValidationError("Online booking is currently disabled")
    return create_booking(db, data, notifier)


@router.get("/{id}", response_model=BookingRead)
def get_single_booking(id: int, db: Session = Depends(get_db)):
    return get_booking(db, id)


@router.put(
    "/{id}",
    response_model=BookingRead,
    dependencies=[Depends(require_admin)],
)
def update_existing_booking(
    id: int,
    data: BookingUpdate,
    db: Session = Depends(get_db),
    notifier: BookingNotifier = Depends(get_notifier),
):
    return update_booking(db, id, data, notifier)


@router.delete(
    "/{id}",
    response_model=Message,
    dependencies=[Depends(require_admin)],
)
def cancel_existing_booking(
    id: int,
    db: Session = Depends(get_db),
    notifier: BookingNotifier = Depends(get_notifier),
):
    cancel_booking(db, id, notifier)
    return {"message": "Booking cancelled successfully"}
