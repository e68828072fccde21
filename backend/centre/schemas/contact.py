# backend/centre/schemas/contact.py

from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class ContactFormSubmit(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    subject: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ContactFormResult(BaseModel):
    success: bool
    message: str
