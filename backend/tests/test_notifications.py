# backend/tests/test_notifications.py

from datetime import datetime, timezone
from decimal import Decimal

import pytest
import resend

from centre.config import settings
from centre.services import notifications
from centre.services.notifications import (
    BookingSnapshot,
    ContactMessage,
    NotificationError,
    ResendNotifier,
    render_admin_status_email,
    render_contact_email,
    render_customer_email,
)


def _snapshot(**overrides):
    values = dict(
        booking_id=7,
        facility_name="Main Hall",
        customer_name="Jane <b>Doe</b>",
        customer_email="jane@example.com",
        customer_phone=None,
        event_title="Party",
        event_description=None,
        start_date_time=datetime(2099, 6, 1, 10, 0, tzinfo=timezone.utc),
        end_date_time=datetime(2099, 6, 1, 12, 0, tzinfo=timezone.utc),
        total_hours=Decimal("2.0000"),
        total_cost=Decimal("100.00"),
        status="pending",
        notes=None,
    )
    values.update(overrides)
    return BookingSnapshot(**values)


@pytest.fixture
def london(monkeypatch):
    monkeypatch.setattr(settings, "timezone", "Europe/London")


@pytest.fixture
def sent(monkeypatch):
    calls = []
    monkeypatch.setattr(resend.Emails, "send", lambda params: calls.append(params) or {"id": "x"})
    monkeypatch.setattr(notifications.time, "sleep", lambda s: None)
    return calls


def _notifier(admin_email="admin@example.com", attempts=3):
    return ResendNotifier(
        api_key="re_test",
        mail_from="bookings@example.com",
        admin_email=admin_email,
        max_attempts=attempts,
        backoff_seconds=0.01,
    )


def test_customer_email_escapes_and_prices(london):
    subject, html = render_customer_email(_snapshot())

    assert subject == "We received your booking request - Party"
    assert "Jane &lt;b&gt;Doe&lt;/b&gt;" in html
    assert "<b>Doe</b>" not in html
    assert "£100.00" in html
    assert "2 hours" in html
    assert "01/06/2099 from 11:00 to 13:00 (BST)" in html


def test_times_follow_configured_zone(london):
    winter = _snapshot(
        start_date_time=datetime(2099, 1, 15, 10, 0, tzinfo=timezone.utc),
        end_date_time=datetime(2099, 1, 15, 12, 0, tzinfo=timezone.utc),
    )
    _, html = render_admin_status_email(winter)
    assert "15/01/2099 from 10:00 to 12:00 (GMT)" in html


def test_times_in_utc_zone(monkeypatch):
    monkeypatch.setattr(settings, "timezone", "UTC")
    _, html = render_customer_email(_snapshot())
    assert "01/06/2099 from 10:00 to 12:00 (UTC)" in html


def test_customer_email_without_cost():
    _, html = render_customer_email(_snapshot(total_cost=None))
    assert "Total Cost" not in html


def test_status_emails():
    subject, _ = render_customer_email(_snapshot(status="confirmed"))
    assert subject == "Your booking is confirmed - Party"

    _, html = render_admin_status_email(_snapshot(status="rejected"))
    assert "Booking has been rejected" in html


def test_contact_email():
    subject, html = render_contact_email(
        ContactMessage(name="Alex", email="a@example.com", subject="Hi", message="<script>")
    )
    assert subject == "Contact Form: Hi"
    assert "&lt;script&gt;" in html


def test_sends_through_resend(sent):
    _notifier().notify_customer(_snapshot())

    assert len(sent) == 1
    assert sent[0]["to"] == ["jane@example.com"]
    assert sent[0]["from"] == "bookings@example.com"


def test_contact_message_sets_reply_to(sent):
    _notifier().send_contact_message(
        ContactMessage(name="Alex", email="a@example.com", subject="Hi", message="Hello")
    )
    assert sent[0]["to"] == ["admin@example.com"]
    assert sent[0]["reply_to"] == "a@example.com"


def test_admin_notice_skipped_without_address(sent):
    _notifier(admin_email=None).notify_admin_new_booking(_snapshot())
    assert sent == []


def test_contact_message_requires_admin_address(sent):
    with pytest.raises(NotificationError):
        _notifier(admin_email=None).send_contact_message(
            ContactMessage(name="Alex", email="a@example.com", subject="Hi", message="Hello")
        )


def test_retries_then_succeeds(monkeypatch):
    attempts = []

    def flaky(params):
        attempts.append(params)
        if len(attempts) < 3:
            raise RuntimeError("rate limited")
        return {"id": "ok"}

    sleeps = []
    monkeypatch.setattr(resend.Emails, "send", flaky)
    monkeypatch.setattr(notifications.time, "sleep", sleeps.append)

    _notifier(attempts=3).notify_customer(_snapshot())

    assert len(attempts) == 3
    assert sleeps == [0.01, 0.02]


def test_gives_up_after_max_attempts(monkeypatch):
    def broken(params):
        raise RuntimeError("down")

    sleeps = []
    monkeypatch.setattr(resend.Emails, "send", broken)
    monkeypatch.setattr(notifications.time, "sleep", sleeps.append)

    with pytest.raises(NotificationError):
        _notifier(attempts=2).notify_customer(_snapshot())
    # no sleep after the final attempt
    assert sleeps == [0.01]
