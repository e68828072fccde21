# backend/centre/main.py

import logging

from fastapi import FastAPI

from .config import settings
from .errors import register_error_handlers
from .redis_client import redis_client
from .routers import (
    auth,
    bookings,
    contact,
    contact_info,
    facilities,
    faq,
    opening_hours,
    programs,
    site_settings,
    testimonials,
)
from .services.site_settings import build_settings_cache

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Community Centre API")
    register_error_handlers(app)

    app.state.settings_cache = build_settings_cache(
        redis_client, settings.settings_cache_ttl_seconds
    )

    for module in (
        auth, bookings, contact, contact_info, facilities, faq,
        opening_hours, programs, site_settings, testimonials,
    ):
        app.include_router(module.router, prefix="/api")

    @app.get("/health")
    def health():
        if redis_client is None:
            return {"status": "ok", "redis": None}
        try:
            redis_ok = bool(redis_client.ping())
        except Exception as e:
            logger.warning(f"Redis ping failed: {e}")
            redis_ok = False
        return {"status": "ok", "redis": redis_ok}

    return app


app = create_app()
