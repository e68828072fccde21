# backend/centre/schemas/programs.py

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .common import UtcDateTime, reject_null


class ProgramScheduleCreate(BaseModel):
    description: str = Field(min_length=1)
    day_of_week: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    model_config = {"from_attributes": True}


class ProgramScheduleRead(BaseModel):
    id: int
    description: str
    day_of_week: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    active: bool

    model_config = {"from_attributes": True}


class ProgramCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    age_group: Optional[str] = None
    price: Optional[str] = None
    booking_info: Optional[str] = None
    instructor: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_website: Optional[str] = None
    image_url: Optional[str] = None
    schedules: list[ProgramScheduleCreate] = []

    model_config = {"from_attributes": True}


class ProgramUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    age_group: Optional[str] = None
    price: Optional[str] = None
    booking_info: Optional[str] = None
    instructor: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_website: Optional[str] = None
    image_url: Optional[str] = None
    # replaces all schedules when present
    schedules: Optional[list[ProgramScheduleCreate]] = None

    model_config = {"from_attributes": True}

    @field_validator("title")
    @classmethod
    def _not_null(cls, v):
        return reject_null(v)


class ProgramRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    age_group: Optional[str] = None
    price: Optional[str] = None
    booking_info: Optional[str] = None
    instructor: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_website: Optional[str] = None
    image_url: Optional[str] = None
    active: bool
    schedules: list[ProgramScheduleRead] = []
    created_at: UtcDateTime
    updated_at: UtcDateTime

    model_config = {"from_attributes": True}
