# backend/centre/routers/contact_info.py
# DELETE = soft-delete (active)

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..errors import NotFoundError
from ..models import ContactInfo as DBContactInfo
from ..schemas.common import Message
from ..schemas.contact_info import (
    ContactInfoCreate,
    ContactInfoRead,
    ContactInfoUpdate,
)

router = APIRouter(prefix="/contact-info", tags=["contact-info"])


@router.get("", response_model=list[ContactInfoRead])
def list_contact_info(db: Session = Depends(get_db)):
    return (
        db.query(DBContactInfo)
        .filter(DBContactInfo.active.is_(True))
        .order_by(DBContactInfo.display_order, DBContactInfo.id)
        .all()
    )


@router.get("/{id}", response_model=ContactInfoRead)
def get_contact_info(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBContactInfo, id)
    if not obj or not obj.active:
        raise NotFoundError("Contact info not found")
    return obj


@router.post(
    "",
    response_model=ContactInfoRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_contact_info(
    data: ContactInfoCreate,
    db: Session = Depends(get_db),
):
    obj = DBContactInfo(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put(
    "/{id}",
    response_model=ContactInfoRead,
    dependencies=[Depends(require_admin)],
)
def update_contact_info(
    id: int,
    data: ContactInfoUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBContactInfo, id)
    if not obj:
        raise NotFoundError("Contact info not found")

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
def delete_contact_info(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBContactInfo, id)
    if not obj:
        raise NotFoundError("Contact info not found")

    obj.active = False
    db.commit()
    return {"message": "Contact info deleted successfully"}
