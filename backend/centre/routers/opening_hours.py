# backend/centre/routers/opening_hours.py
# DELETE = soft-delete (active)

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..errors import NotFoundError
from ..models import OpeningHours as DBOpeningHours
from ..schemas.common import Message
from ..schemas.opening_hours import (
    OpeningHoursCreate,
    OpeningHoursRead,
    OpeningHoursUpdate,
)

router = APIRouter(prefix="/opening-hours", tags=["opening-hours"])


@router.get("", response_model=list[OpeningHoursRead])
def list_opening_hours(db: Session = Depends(get_db)):
    return (
        db.query(DBOpeningHours)
        .filter(DBOpeningHours.active.is_(True))
        .order_by(DBOpeningHours.id)
        .all()
    )


@router.get("/{id}", response_model=OpeningHoursRead)
def get_opening_hours(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBOpeningHours, id)
    if not obj or not obj.active:
        raise NotFoundError("Opening hours not found")
    return obj


@router.post(
    "",
    response_model=OpeningHoursRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_opening_hours(
    data: OpeningHoursCreate,
    db: Session = Depends(get_db),
):
    obj = DBOpeningHours(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put(
    "/{id}",
    response_model=OpeningHoursRead,
    dependencies=[Depends(require_admin)],
)
def update_opening_hours(
    id: int,
    data: OpeningHoursUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBOpeningHours, id)
    if not obj:
        raise NotFoundError("Opening hours not found")

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
def delete_opening_hours(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBOpeningHours, id)
    if not obj:
        raise NotFoundError("Opening hours not found")

    obj.active = False
    db.commit()
    return {"message": "Opening hours deleted successfully"}
