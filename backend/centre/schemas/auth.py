# backend/centre/schemas/auth.py

from datetime import datetime
from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str
    password: str


class SessionRead(BaseModel):
    token: str | None = None
    username: str
    expires_at: datetime
