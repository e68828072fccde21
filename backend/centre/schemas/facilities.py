# backend/centre/schemas/facilities.py

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from ..utils.time import is_valid_time_str, time_str_to_minutes
from .common import UtcDateTime, reject_null


class FacilityCreate(BaseModel):
    name: str = Field(min_length=1)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    dimensions: Optional[str] = None
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    features: list[str] = []
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class FacilityUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    dimensions: Optional[str] = None
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    features: Optional[list[str]] = None
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}

    @field_validator("name", "features")
    @classmethod
    def _not_null(cls, v):
        return reject_null(v)


class FacilityRead(BaseModel):
    id: int
    name: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    capacity: Optional[int] = None
    dimensions: Optional[str] = None
    hourly_rate: Optional[float] = None
    features: list[str] = []
    image_url: Optional[str] = None
    active: bool
    created_at: UtcDateTime
    updated_at: UtcDateTime

    model_config = {"from_attributes": True}

    @field_validator("features", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []


class FacilitySummary(BaseModel):
    id: int
    name: str
    hourly_rate: Optional[float] = None
    capacity: Optional[int] = None
    features: list[str] = []

    model_config = {"from_attributes": True}

    @field_validator("features", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []


class FacilityHoursUpdate(BaseModel):
    open_time: str = "07:00"
    close_time: str = "23:00"
    is_open: bool = True

    @field_validator("open_time", "close_time")
    @classmethod
    def _check_time(cls, v: str) -> str:
        if not is_valid_time_str(v):
            raise ValueError("expected HH:MM")
        return v

    @model_validator(mode="after")
    def _check_order(self):
        if self.is_open and time_str_to_minutes(self.open_time) >= time_str_to_minutes(self.close_time):
            raise ValueError("open_time must be before close_time")
        return self


class FacilityHoursRead(BaseModel):
    facility_id: int
    day_of_week: int
    open_time: str
    close_time: str
    is_open: bool

    model_config = {"from_attributes": True}
