# backend/centre/routers/auth.py

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response

from ..auth import (
    SESSION_COOKIE,
    AdminSession,
    check_credentials,
    issue_token,
    require_admin,
)
from ..config import settings
from ..errors import AuthError
from ..schemas.auth import LoginRequest, SessionRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionRead)
def login(data: LoginRequest, response: Response):
    if not check_credentials(data.username, data.password):
        logger.warning("Failed admin login for %r", data.username)
        raise AuthError("Invalid credentials")

    token, expires_at = issue_token(data.username)
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
    )
    logger.info("Admin %s logged in", data.username)
    return SessionRead(
        token=token,
        username=data.username,
        expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
    )


@router.get("/session", response_model=SessionRead)
def get_session(session: AdminSession = Depends(require_admin)):
    return SessionRead(
        username=session.username,
        expires_at=datetime.fromtimestamp(session.expires_at, tz=timezone.utc),
    )


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(SESSION_COOKIE)
    return {"message": "Logged out"}
