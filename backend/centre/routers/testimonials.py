# backend/centre/routers/testimonials.py
# DELETE = soft-delete (active)

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..errors import NotFoundError
from ..models import Testimonial as DBTestimonial
from ..schemas.common import Message
from ..schemas.testimonials import (
    TestimonialCreate,
    TestimonialRead,
    TestimonialUpdate,
)

router = APIRouter(prefix="/testimonials", tags=["testimonials"])


@router.get("", response_model=list[TestimonialRead])
def list_testimonials(db: Session = Depends(get_db)):
    return (
        db.query(DBTestimonial)
        .filter(DBTestimonial.active.is_(True))
        .order_by(DBTestimonial.display_order, DBTestimonial.id)
        .all()
    )


@router.get("/{id}", response_model=TestimonialRead)
def get_testimonial(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBTestimonial, id)
    if not obj or not obj.active:
        raise NotFoundError("Testimonial not found")
    return obj


@router.post(
    "",
    response_model=TestimonialRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_testimonial(
    data: TestimonialCreate,
    db: Session = Depends(get_db),
):
    obj = DBTestimonial(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put(
    "/{id}",
    response_model=TestimonialRead,
    dependencies=[Depends(require_admin)],
)
def update_testimonial(
    id: int,
    data: TestimonialUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBTestimonial, id)
    if not obj:
        raise NotFoundError("Testimonial not found")

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
def delete_testimonial(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBTestimonial, id)
    if not obj:
        raise NotFoundError("Testimonial not found")

    obj.active = False
    db.commit()
    return {"message": "Testimonial deleted successfully"}
