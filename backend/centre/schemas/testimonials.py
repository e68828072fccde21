# backend/centre/schemas/testimonials.py

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .common import reject_null


class TestimonialCreate(BaseModel):
    quote: str = Field(min_length=1)
    author_name: str = Field(min_length=1)
    author_title: Optional[str] = None
    avatar_url: Optional[str] = None
    display_order: int = 0

    model_config = {"from_attributes": True}


class TestimonialUpdate(BaseModel):
    quote: Optional[str] = Field(default=None, min_length=1)
    author_name: Optional[str] = Field(default=None, min_length=1)
    author_title: Optional[str] = None
    avatar_url: Optional[str] = None
    display_order: Optional[int] = None
    active: Optional[bool] = None

    model_config = {"from_attributes": True}

    @field_validator("quote", "author_name", "display_order", "active")
    @classmethod
    def _not_null(cls, v):
        return reject_null(v)


class TestimonialRead(BaseModel):
    id: int
    quote: str
    author_name: str
    author_title: Optional[str] = None
    avatar_url: Optional[str] = None
    display_order: int
    active: bool

    model_config = {"from_attributes": True}
