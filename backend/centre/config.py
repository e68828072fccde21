# backend/centre/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repo root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/centre.db"
    redis_url: str | None = None
    log_level: str = "INFO"

    # Admin session
    secret_key: str = "change-me"
    admin_username: str = "admin"
    admin_password: str | None = None
    session_ttl_seconds: int = 8 * 3600

    # Email
    resend_api_key: str | None = None
    mail_from: str = "onboarding@resend.dev"
    admin_notification_email: str | None = None
    notification_max_attempts: int = 3
    notification_backoff_seconds: float = 0.5

    # Booking
    timezone: str = "Europe/London"
    booking_open_time: str = "07:00"
    booking_close_time: str = "23:00"
    booking_slot_minutes: int = 60
    booking_min_notice_hours: int = 2

    settings_cache_ttl_seconds: int = 300

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # relative sqlite path -> absolute, anchored at the repo root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
