# backend/centre/utils/time.py
"""
Instant handling.

The database stores naive UTC datetimes. Anything coming in from a client
is normalised with `to_storage()`; anything going out is made aware again
with `as_utc()`.
"""

import re
from datetime import datetime, timezone

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$|^24:00$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_storage(dt: datetime) -> datetime:
    """Aware -> naive UTC. Naive input is taken to already be UTC."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def as_utc(dt: datetime | None) -> datetime | None:
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def time_str_to_minutes(value: str) -> int:
    """"HH:MM" -> minutes since midnight."""
    hour, minute = value.split(":")
    return int(hour) * 60 + int(minute)


def is_valid_time_str(value: str) -> bool:
    """"HH:MM" on a 24h clock; "24:00" allowed as an end of day."""
    return bool(_TIME_RE.match(value))
