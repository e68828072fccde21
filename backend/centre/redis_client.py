# backend/centre/redis_client.py

from redis import Redis

from .config import settings

# None when REDIS_URL is unset; callers fall back to in-process caching
redis_client: Redis | None = (
    Redis.from_url(settings.redis_url, decode_responses=True, socket_timeout=2.0)
    if settings.redis_url
    else None
)
