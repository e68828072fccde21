# backend/centre/schemas/faq.py

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .common import reject_null


class FaqItemCreate(BaseModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    category: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int = 0

    model_config = {"from_attributes": True}


class FaqItemUpdate(BaseModel):
    question: Optional[str] = Field(default=None, min_length=1)
    answer: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    image_url: Optional[str] = None
    display_order: Optional[int] = None
    active: Optional[bool] = None

    model_config = {"from_attributes": True}

    @field_validator("question", "answer", "display_order", "active")
    @classmethod
    def _not_null(cls, v):
        return reject_null(v)


class FaqItemRead(BaseModel):
    id: int
    question: str
    answer: str
    category: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int
    active: bool

    model_config = {"from_attributes": True}
