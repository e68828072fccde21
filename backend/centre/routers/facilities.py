# backend/centre/routers/facilities.py
# DELETE = soft-delete (active), refused while upcoming bookings exist

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..errors import ConflictError, NotFoundError
from ..models import Booking, Facility as DBFacility, FacilityHours as DBFacilityHours
from ..schemas.common import Message
from ..schemas.facilities import (
    FacilityCreate,
    FacilityHoursRead,
    FacilityHoursUpdate,
    FacilityRead,
    FacilityUpdate,
)
from ..services.bookings import ACTIVE_STATUSES
from ..utils.time import to_storage, utcnow

router = APIRouter(prefix="/facilities", tags=["facilities"])


def _get_or_404(db: Session, id: int) -> DBFacility:
    obj = db.get(DBFacility, id)
    if not obj:
        raise NotFoundError("Facility not found")
    return obj


@router.get("", response_model=list[FacilityRead])
def list_facilities(db: Session = Depends(get_db)):
    return (
        db.query(DBFacility)
        .filter(DBFacility.active.is_(True))
        .order_by(DBFacility.created_at, DBFacility.id)
        .all()
    )


@router.get("/{id}", response_model=FacilityRead)
def get_facility(id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, id)


@router.post(
    "",
    response_model=FacilityRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_facility(
    data: FacilityCreate,
    db: Session = Depends(get_db),
):
    obj = DBFacility(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put(
    "/{id}",
    response_model=FacilityRead,
    dependencies=[Depends(require_admin)],
)
def update_facility(
    id: int,
    data: FacilityUpdate,
    db: Session = Depends(get_db),
):
    obj = _get_or_404(db, id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete(
    "/{id}",
    response_model=Message,
    dependencies=[Depends(require_admin)],
)
def delete_facility(id: int, db: Session = Depends(get_db)):
    obj = _get_or_404(db, id)

    upcoming = (
        db.query(Booking)
        .filter(
            Booking.facility_id == id,
            Booking.status.in_(ACTIVE_STATUSES),
            Booking.end_date_time > to_storage(utcnow()),
        )
        .count()
    )
    if upcoming:
        raise ConflictError(
            f"Facility has {upcoming} upcoming booking(s); cancel them first"
        )

    obj.active = False
    db.commit()
    return {"message": "Facility deleted successfully"}


# ── Weekday operating hours ──────────────────────────────────────────────


@router.get("/{id}/hours", response_model=list[FacilityHoursRead])
def list_facility_hours(id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, id).hours


@router.put(
    "/{id}/hours/{day_of_week}",
    response_model=FacilityHoursRead,
    dependencies=[Depends(require_admin)],
)
def set_facility_hours(
    id: int,
    data: FacilityHoursUpdate,
    day_of_week: int = Path(..., ge=0, le=6),
    db: Session = Depends(get_db),
):
    _get_or_404(db, id)

    obj = (
        db.query(DBFacilityHours)
        .filter(
            DBFacilityHours.facility_id == id,
            DBFacilityHours.day_of_week == day_of_week,
        )
        .first()
    )
    if obj is None:
        obj = DBFacilityHours(facility_id=id, day_of_week=day_of_week)
        db.add(obj)

    for field, value in data.model_dump().items():
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj
