# backend/centre/routers/faq.py
# DELETE = soft-delete (active)

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..errors import NotFoundError
from ..models import FaqItem as DBFaqItem
from ..schemas.common import Message
from ..schemas.faq import (
    FaqItemCreate,
    FaqItemRead,
    FaqItemUpdate,
)

router = APIRouter(prefix="/faq", tags=["faq"])


@router.get("", response_model=list[FaqItemRead])
def list_faq_items(db: Session = Depends(get_db)):
    return (
        db.query(DBFaqItem)
        .filter(DBFaqItem.active.is_(True))
        .order_by(DBFaqItem.display_order, DBFaqItem.id)
        .all()
    )


@router.get("/{id}", response_model=FaqItemRead)
def get_faq_item(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBFaqItem, id)
    if not obj or not obj.active:
        raise NotFoundError("FAQ item not found")
    return obj


@router.post(
    "",
    response_model=FaqItemRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_faq_item(
    data: FaqItemCreate,
    db: Session = Depends(get_db),
):
    obj = DBFaqItem(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put(
    "/{id}",
    response_model=FaqItemRead,
    dependencies=[Depends(require_admin)],
)
def update_faq_item(
    id: int,
    data: FaqItemUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBFaqItem, id)
    if not obj:
        raise NotFoundError("FAQ item not found")

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
def delete_faq_item(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBFaqItem, id)
    if not obj:
        raise NotFoundError("FAQ item not found")

    obj.active = False
    db.commit()
    return {"message": "FAQ item deleted successfully"}
