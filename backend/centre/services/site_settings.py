"""
backend/centre/services/site_settings.py

Site settings store with an explicit cache.

Values live in `site_settings` as text plus a declared type; the set of
keys and their types come from the SiteSettings schema. The cache object is
created once by the application factory and injected into each request.

Cache backends:
- RedisSettingsCache   : SETEX JSON, shared between workers
- InMemorySettingsCache: per-process, used when Redis is not configured
"""

import json
import logging
import threading
import time
from typing import Any, Protocol

from fastapi import Depends, Request
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from redis import Redis
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import InternalError, NotFoundError, ValidationError
from ..models import SiteSetting
from ..schemas.site_settings import SiteSettings

logger = logging.getLogger(__name__)

CACHE_KEY = "site_settings"

_TYPE_NAMES = {bool: "boolean", int: "number", float: "number", str: "string"}


# ── Cache ────────────────────────────────────────────────────────────────


class SettingsCache(Protocol):
    def get(self, key: str) -> dict | None: ...

    def set(self, key: str, value: dict) -> None: ...

    def invalidate(self, key: str) -> None: ...


class InMemorySettingsCache:
    """Process-local TTL cache."""

    def __init__(self, ttl_seconds: int):
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, tuple[float, dict]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> dict | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: dict) -> None:
        with self._lock:
            self._entries[key] = (time.monotonic() + self.ttl_seconds, value)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)


class RedisSettingsCache:
    """Redis-backed cache; Redis errors degrade to a cache miss."""

    KEY_PREFIX = "cache:settings"

    def __init__(self, redis: Redis, ttl_seconds: int):
        self.redis = redis
        self.ttl_seconds = ttl_seconds

    def _key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}:{key}"

    def get(self, key: str) -> dict | None:
        try:
            data = self.redis.get(self._key(key))
            if data:
                return json.loads(data)
        except Exception as e:
            logger.warning(f"Settings cache read error: {e}")
        return None

    def set(self, key: str, value: dict) -> None:
        try:
            self.redis.setex(self._key(key), self.ttl_seconds, json.dumps(value))
        except Exception as e:
            logger.warning(f"Settings cache write error: {e}")

    def invalidate(self, key: str) -> None:
        try:
            self.redis.delete(self._key(key))
        except Exception as e:
            logger.warning(f"Settings cache invalidate error: {e}")


def build_settings_cache(redis: Redis | None, ttl_seconds: int) -> SettingsCache:
    if redis is not None:
        return RedisSettingsCache(redis, ttl_seconds)
    return InMemorySettingsCache(ttl_seconds)


# ── Value encoding ───────────────────────────────────────────────────────


def setting_type(key: str) -> str:
    return _TYPE_NAMES.get(SiteSettings.model_fields[key].annotation, "string")


def encode_value(value: Any, type_name: str) -> str:
    if type_name == "boolean":
        return "true" if value else "false"
    return str(value)


def decode_value(raw: str | None, type_name: str) -> Any:
    if type_name == "boolean":
        return raw == "true"
    if type_name == "number":
        return float(raw) if raw else 0
    return raw or ""


# ── Service ──────────────────────────────────────────────────────────────


class SettingsService:
    def __init__(self, db: Session, cache: SettingsCache):
        self.db = db
        self.cache = cache

    def get_all(self) -> SiteSettings:
        cached = self.cache.get(CACHE_KEY)
        if cached is not None:
            return SiteSettings.model_validate(cached)

        settings = self._load()
        self.cache.set(CACHE_KEY, settings.model_dump())
        return settings

    def get(self, key: str) -> dict:
        self._require_known(key)
        row = self._row(key)
        value = getattr(self.get_all(), key)
        return {
            "key": key,
            "value": value,
            "type": setting_type(key),
            "description": row.description if row else None,
            "is_default": row is None,
        }

    def update(self, changes: dict[str, Any]) -> SiteSettings:
        """Apply an already-validated partial update."""
        for key, value in changes.items():
            if value is None:
                continue
            self._upsert(key, value)
        self._commit()
        return self.get_all()

    def set_value(self, key: str, value: Any, description: str | None = None) -> dict:
        self._require_known(key)
        annotation = SiteSettings.model_fields[key].annotation
        try:
            value = TypeAdapter(annotation).validate_python(value)
        except PydanticValidationError:
            raise ValidationError(f"Invalid value for setting {key}") from None

        self._upsert(key, value, description)
        self._commit()
        return self.get(key)

    def reset(self, key: str) -> None:
        """Drop the stored value so the default applies again."""
        self._require_known(key)
        row = self._row(key)
        if row is None:
            raise NotFoundError("Setting not found")
        self.db.delete(row)
        self._commit()

    # ── internals ──

    def _load(self) -> SiteSettings:
        values = SiteSettings().model_dump()
        for row in self.db.query(SiteSetting).all():
            if row.key not in SiteSettings.model_fields:
                logger.warning("Ignoring unknown site setting %r", row.key)
                continue
            values[row.key] = decode_value(row.value, setting_type(row.key))

        try:
            return SiteSettings.model_validate(values)
        except PydanticValidationError:
            logger.exception("Stored site settings are invalid, using defaults")
            return SiteSettings()

    def _row(self, key: str) -> SiteSetting | None:
        return self.db.query(SiteSetting).filter(SiteSetting.key == key).first()

    def _upsert(self, key: str, value: Any, description: str | None = None) -> None:
        type_name = setting_type(key)
        row = self._row(key)
        if row is None:
            row = SiteSetting(key=key, type=type_name)
            self.db.add(row)
        row.value = encode_value(value, type_name)
        row.type = type_name
        if description is not None:
            row.description = description

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to save site settings")
            raise InternalError("Failed to save site settings") from e
        finally:
            self.cache.invalidate(CACHE_KEY)

    @staticmethod
    def _require_known(key: str) -> None:
        if key not in SiteSettings.model_fields:
            raise NotFoundError("Setting not found")


# ── Dependencies ─────────────────────────────────────────────────────────


def get_settings_cache(request: Request) -> SettingsCache:
    return request.app.state.settings_cache


def get_settings_service(
    db: Session = Depends(get_db),
    cache: SettingsCache = Depends(get_settings_cache),
) -> SettingsService:
    return SettingsService(db, cache)
