# backend/centre/schemas/contact_info.py

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .common import reject_null


class ContactInfoCreate(BaseModel):
    type: str = Field(min_length=1)
    label: str = Field(min_length=1)
    value: str = Field(min_length=1)
    description: Optional[str] = None
    display_order: int = 0

    model_config = {"from_attributes": True}


class ContactInfoUpdate(BaseModel):
    type: Optional[str] = Field(default=None, min_length=1)
    label: Optional[str] = Field(default=None, min_length=1)
    value: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    display_order: Optional[int] = None
    active: Optional[bool] = None

    model_config = {"from_attributes": True}

    @field_validator("type", "label", "value", "display_order", "active")
    @classmethod
    def _not_null(cls, v):
        return reject_null(v)


class ContactInfoRead(BaseModel):
    id: int
    type: str
    label: str
    value: str
    description: Optional[str] = None
    display_order: int
    active: bool

    model_config = {"from_attributes": True}
