# backend/centre/schemas/opening_hours.py

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .common import reject_null


class OpeningHoursCreate(BaseModel):
    title: str = Field(min_length=1)
    # free-text lines, e.g. "Monday - Friday: 9:00 AM - 5:00 PM"
    schedule: list[str] = []
    description: Optional[str] = None
    type: Optional[str] = None

    model_config = {"from_attributes": True}


class OpeningHoursUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    schedule: Optional[list[str]] = None
    description: Optional[str] = None
    type: Optional[str] = None
    active: Optional[bool] = None

    model_config = {"from_attributes": True}

    @field_validator("title", "schedule", "active")
    @classmethod
    def _not_null(cls, v):
        return reject_null(v)


class OpeningHoursRead(BaseModel):
    id: int
    title: str
    schedule: list[str] = []
    description: Optional[str] = None
    type: Optional[str] = None
    active: bool

    model_config = {"from_attributes": True}

    @field_validator("schedule", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []
