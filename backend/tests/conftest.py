# backend/tests/conftest.py

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from centre.auth import issue_token
from centre.config import settings
from centre.database import enable_sqlite_fk, get_db
from centre.main import create_app
from centre.models import Base, Facility
from centre.services.bookings import BookingConfig, get_booking_config
from centre.services.notifications import NotificationError, get_notifier
from centre.services.site_settings import InMemorySettingsCache


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def notify_customer(self, snapshot):
        self.sent.append(("customer", snapshot))

    def notify_admin_new_booking(self, snapshot):
        self.sent.append(("admin_new", snapshot))

    def notify_admin_status_change(self, snapshot):
        self.sent.append(("admin_status", snapshot))

    def send_contact_message(self, message):
        self.sent.append(("contact", message))

    def kinds(self):
        return [kind for kind, _ in self.sent]


class FailingNotifier:
    def notify_customer(self, snapshot):
        raise NotificationError("smtp down")

    def notify_admin_new_booking(self, snapshot):
        raise NotificationError("smtp down")

    def notify_admin_status_change(self, snapshot):
        raise NotificationError("smtp down")

    def send_contact_message(self, message):
        raise NotificationError("smtp down")


TEST_BOOKING_CONFIG = BookingConfig(
    open_time="07:00",
    close_time="23:00",
    slot_step_minutes=60,
    min_notice_hours=2,
    timezone="UTC",
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_fk)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(session_factory, notifier):
    app = create_app()
    app.state.settings_cache = InMemorySettingsCache(ttl_seconds=300)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_booking_config] = lambda: TEST_BOOKING_CONFIG
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers():
    token, _ = issue_token(settings.admin_username)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def main_hall(db):
    hall = Facility(
        name="Main Hall",
        capacity=120,
        hourly_rate=Decimal("50.00"),
        features=["Stage", "Kitchen access"],
    )
    db.add(hall)
    db.commit()
    db.refresh(hall)
    return hall


@pytest.fixture
def small_hall(db):
    hall = Facility(name="Small Hall", capacity=30, hourly_rate=None, features=[])
    db.add(hall)
    db.commit()
    db.refresh(hall)
    return hall


def booking_payload(facility_id, start, end, **overrides):
    payload = {
        "facility_id": facility_id,
        "customer_name": "Jane Doe",
        "customer_email": "jane@example.com",
        "customer_phone": "07700 900000",
        "event_title": "Birthday party",
        "start_date_time": start,
        "end_date_time": end,
    }
    payload.update(overrides)
    return payload
