# backend/centre/auth.py
"""
Admin sessions.

Token format: "<username>.<expires_ts>.<signature>", where signature is
HMAC-SHA256(secret_key, "<username>.<expires_ts>") in hex. Accepted from
`Authorization: Bearer <token>` or the `admin_session` cookie.
"""

import hashlib
import hmac
import logging
import time
from dataclasses import dataclass

from fastapi import Request

from .config import settings
from .errors import AuthError

logger = logging.getLogger(__name__)

SESSION_COOKIE = "admin_session"


@dataclass(frozen=True)
class AdminSession:
    username: str
    expires_at: int


def _sign(payload: str, secret: str) -> str:
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


def issue_token(username: str, ttl_seconds: int | None = None, now: float | None = None) -> tuple[str, int]:
    ttl = ttl_seconds if ttl_seconds is not None else settings.session_ttl_seconds
    expires_at = int((now or time.time()) + ttl)
    payload = f"{username}.{expires_at}"
    return f"{payload}.{_sign(payload, settings.secret_key)}", expires_at


def verify_token(token: str, now: float | None = None) -> AdminSession:
    """Raises ValueError on a malformed, forged or expired token."""
    try:
        username, expires_raw, signature = token.rsplit(".", 2)
        expires_at = int(expires_raw)
    except ValueError:
        raise ValueError("Malformed token") from None

    expected = _sign(f"{username}.{expires_at}", settings.secret_key)
    if not hmac.compare_digest(expected, signature):
        raise ValueError("Invalid token signature")

    if expires_at <= (now or time.time()):
        raise ValueError("Session expired")

    if username != settings.admin_username:
        raise ValueError("Unknown user")

    return AdminSession(username=username, expires_at=expires_at)


def check_credentials(username: str, password: str) -> bool:
    if not settings.admin_password:
        logger.warning("ADMIN_PASSWORD not set, admin login disabled")
        return False
    user_ok = hmac.compare_digest(username.encode(), settings.admin_username.encode())
    pass_ok = hmac.compare_digest(password.encode(), settings.admin_password.encode())
    return user_ok and pass_ok


def _extract_token(request: Request) -> str | None:
    header = request.headers.get("Authorization") or ""
    if header.lower().startswith("bearer "):
        return header[7:].strip()
    return request.cookies.get(SESSION_COOKIE)


def require_admin(request: Request) -> AdminSession:
    """FastAPI dependency guarding admin routes."""
    token = _extract_token(request)
    if not token:
        raise AuthError("Unauthorized")

    try:
        return verify_token(token)
    except ValueError as e:
        logger.warning("Rejected admin session on %s: %s", request.url.path, e)
        raise AuthError("Unauthorized") from None
