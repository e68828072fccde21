# backend/centre/routers/programs.py
# DELETE = soft-delete (active); PUT replaces schedules when they are sent

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..database import get_db
from ..errors import NotFoundError
from ..models import Program as DBProgram, ProgramSchedule as DBProgramSchedule
from ..schemas.common import Message
from ..schemas.programs import (
    ProgramCreate,
    ProgramRead,
    ProgramUpdate,
)

router = APIRouter(prefix="/programs", tags=["programs"])


def _get_or_404(db: Session, id: int) -> DBProgram:
    obj = db.get(DBProgram, id)
    if not obj:
        raise NotFoundError("Program not found")
    return obj


def _public_view(obj: DBProgram) -> ProgramRead:
    item = ProgramRead.model_validate(obj)
    item.schedules = [s for s in item.schedules if s.active]
    return item


@router.get("", response_model=list[ProgramRead])
def list_programs(db: Session = Depends(get_db)):
    programs = (
        db.query(DBProgram)
        .filter(DBProgram.active.is_(True))
        .order_by(DBProgram.created_at, DBProgram.id)
        .all()
    )
    return [_public_view(p) for p in programs]


@router.get("/{id}", response_model=ProgramRead)
def get_program(id: int, db: Session = Depends(get_db)):
    obj = _get_or_404(db, id)
    if not obj.active:
        raise NotFoundError("Program not found")
    return _public_view(obj)


@router.post(
    "",
    response_model=ProgramRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_program(
    data: ProgramCreate,
    db: Session = Depends(get_db),
):
    payload = data.model_dump(exclude={"schedules"})
    obj = DBProgram(**payload)
    obj.schedules = [DBProgramSchedule(**s.model_dump()) for s in data.schedules]
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put(
    "/{id}",
    response_model=ProgramRead,
    dependencies=[Depends(require_admin)],
)
def update_program(
    id: int,
    data: ProgramUpdate,
    db: Session = Depends(get_db),
):
    obj = _get_or_404(db, id)

    changes = data.model_dump(exclude_unset=True)
    schedules = changes.pop("schedules", None)
    for field, value in changes.items():
        setattr(obj, field, value)
    if schedules is not None:
        obj.schedules = [DBProgramSchedule(**s) for s in schedules]

    db.commit()
    db.refresh(obj)
    return obj


@router.delete(
    "/{id}",
    response_model=Message,
    dependencies=[Depends(require_admin)],
)
def delete_program(id: int, db: Session = Depends(get_db)):
    obj = _get_or_404(db, id)
    obj.active = False
    db.commit()
    return {"message": "Program deleted successfully"}
