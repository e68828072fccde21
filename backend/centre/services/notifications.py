"""
backend/centre/services/notifications.py

Outbound email for bookings and the contact form.

Two notifiers:
- ResendNotifier: sends HTML email through Resend, with bounded retries
- LoggingNotifier: used when no API key is configured; only logs

Notifiers raise on delivery failure. Booking code wraps every call and
logs the error instead of failing the write.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from html import escape
from typing import Protocol
from zoneinfo import ZoneInfo

import resend

from ..config import settings
from ..models import Booking
from ..utils.time import as_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingSnapshot:
    """Immutable copy of a booking taken after commit."""
    booking_id: int
    facility_name: str
    customer_name: str
    customer_email: str
    customer_phone: str | None
    event_title: str
    event_description: str | None
    start_date_time: datetime
    end_date_time: datetime
    total_hours: Decimal
    total_cost: Decimal | None
    status: str
    notes: str | None

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingSnapshot":
        return cls(
            booking_id=booking.id,
            facility_name=booking.facility.name if booking.facility else "Unknown Facility",
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
            customer_phone=booking.customer_phone,
            event_title=booking.event_title,
            event_description=booking.event_description,
            start_date_time=as_utc(booking.start_date_time),
            end_date_time=as_utc(booking.end_date_time),
            total_hours=booking.total_hours,
            total_cost=booking.total_cost,
            status=booking.status,
            notes=booking.notes,
        )


@dataclass(frozen=True)
class ContactMessage:
    name: str
    email: str
    subject: str
    message: str
    phone: str | None = None


class BookingNotifier(Protocol):
    def notify_customer(self, snapshot: BookingSnapshot) -> None: ...

    def notify_admin_new_booking(self, snapshot: BookingSnapshot) -> None: ...

    def notify_admin_status_change(self, snapshot: BookingSnapshot) -> None: ...

    def send_contact_message(self, message: ContactMessage) -> None: ...


class NotificationError(Exception):
    pass


# ── Resend ───────────────────────────────────────────────────────────────


class ResendNotifier:
    """Email notifier backed by the Resend API."""

    def __init__(
        self,
        api_key: str,
        mail_from: str,
        admin_email: str | None,
        max_attempts: int = 3,
        backoff_seconds: float = 0.5,
    ):
        resend.api_key = api_key
        self.mail_from = mail_from
        self.admin_email = admin_email
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds

    def notify_customer(self, snapshot: BookingSnapshot) -> None:
        subject, html = render_customer_email(snapshot)
        self._send(snapshot.customer_email, subject, html)

    def notify_admin_new_booking(self, snapshot: BookingSnapshot) -> None:
        if not self.admin_email:
            logger.warning("ADMIN_NOTIFICATION_EMAIL not set, skipping admin notification")
            return
        subject, html = render_admin_new_booking_email(snapshot)
        self._send(self.admin_email, subject, html)

    def notify_admin_status_change(self, snapshot: BookingSnapshot) -> None:
        if not self.admin_email:
            logger.warning("ADMIN_NOTIFICATION_EMAIL not set, skipping admin notification")
            return
        subject, html = render_admin_status_email(snapshot)
        self._send(self.admin_email, subject, html)

    def send_contact_message(self, message: ContactMessage) -> None:
        if not self.admin_email:
            raise NotificationError("ADMIN_NOTIFICATION_EMAIL not configured")
        subject, html = render_contact_email(message)
        self._send(self.admin_email, subject, html, reply_to=message.email)

    def _send(self, to: str, subject: str, html: str, reply_to: str | None = None) -> None:
        params: dict = {
            "from": self.mail_from,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        if reply_to:
            params["reply_to"] = reply_to

        last_error: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                resend.Emails.send(params)
                logger.info("Email sent to %s: %s", to, subject)
                return
            except Exception as e:
                last_error = e
                logger.warning(
                    "Email attempt %d/%d to %s failed: %s",
                    attempt, self.max_attempts, to, e,
                )
                if attempt < self.max_attempts:
                    # Runs in the request worker thread.
                    time.sleep(self.backoff_seconds * 2 ** (attempt - 1))

        raise NotificationError(f"Failed to send email to {to}") from last_error


class LoggingNotifier:
    """Notifier used when email delivery is not configured."""

    def notify_customer(self, snapshot: BookingSnapshot) -> None:
        logger.info(f"[email disabled] customer notice booking={snapshot.booking_id} status={snapshot.status}")

    def notify_admin_new_booking(self, snapshot: BookingSnapshot) -> None:
        logger.info(f"[email disabled] new booking booking={snapshot.booking_id}")

    def notify_admin_status_change(self, snapshot: BookingSnapshot) -> None:
        logger.info(f"[email disabled] status change booking={snapshot.booking_id} status={snapshot.status}")

    def send_contact_message(self, message: ContactMessage) -> None:
        logger.info(f"[email disabled] contact message from {message.email}: {message.subject}")


def get_notifier() -> BookingNotifier:
    """FastAPI dependency."""
    if not settings.resend_api_key:
        return LoggingNotifier()
    return ResendNotifier(
        api_key=settings.resend_api_key,
        mail_from=settings.mail_from,
        admin_email=settings.admin_notification_email,
        max_attempts=settings.notification_max_attempts,
        backoff_seconds=settings.notification_backoff_seconds,
    )


# ── Templates ────────────────────────────────────────────────────────────

_STATUS_MESSAGES = {
    "confirmed": "Booking has been confirmed",
    "cancelled": "Booking has been cancelled",
    "rejected": "Booking has been rejected",
}

_STATUS_COLOURS = {
    "confirmed": "#28a745",
    "cancelled": "#dc3545",
    "rejected": "#dc3545",
}


def _when(snapshot: BookingSnapshot) -> str:
    """Local to the centre, same zone as the slot display times."""
    tz = ZoneInfo(settings.timezone)
    start = snapshot.start_date_time.astimezone(tz)
    end = snapshot.end_date_time.astimezone(tz)
    return f"{start:%d/%m/%Y} from {start:%H:%M} to {end:%H:%M} ({start:%Z})"


def _details(snapshot: BookingSnapshot) -> str:
    rows = [
        ("Booking ID", str(snapshot.booking_id)),
        ("Customer", snapshot.customer_name),
        ("Email", snapshot.customer_email),
        ("Phone", snapshot.customer_phone),
        ("Event", snapshot.event_title),
        ("Description", snapshot.event_description),
        ("Facility", snapshot.facility_name),
        ("Date & Time", _when(snapshot)),
        ("Duration", f"{snapshot.total_hours.normalize():f} hours"),
        ("Total Cost", f"£{snapshot.total_cost:.2f}" if snapshot.total_cost is not None else None),
        ("Notes", snapshot.notes),
        ("Status", snapshot.status.upper()),
    ]
    return "\n".join(
        f"<p><strong>{label}:</strong> {escape(value)}</p>"
        for label, value in rows
        if value
    )


def _wrap(title: str, intro: str, body: str, accent: str) -> str:
    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
      <h2 style="color: #333; border-bottom: 2px solid {accent}; padding-bottom: 10px;">{escape(title)}</h2>
      <p>{escape(intro)}</p>
      <div style="background-color: #f8f9fa; padding: 20px; border-radius: 5px; margin: 20px 0;">
        {body}
      </div>
      <p>Best regards,<br>Booking System</p>
    </div>
    """


def render_customer_email(snapshot: BookingSnapshot) -> tuple[str, str]:
    if snapshot.status == "pending":
        subject = f"We received your booking request - {snapshot.event_title}"
        intro = (
            f"Hello {snapshot.customer_name}, thank you for your request. "
            "We will review it and get back to you shortly."
        )
    else:
        subject = f"Your booking is {snapshot.status} - {snapshot.event_title}"
        intro = f"Hello {snapshot.customer_name}, your booking status is now {snapshot.status}."
    accent = _STATUS_COLOURS.get(snapshot.status, "#007bff")
    return subject, _wrap("Booking Update", intro, _details(snapshot), accent)


def render_admin_new_booking_email(snapshot: BookingSnapshot) -> tuple[str, str]:
    subject = f"New Booking Request - {snapshot.event_title}"
    intro = "A new booking request has been submitted. Please review it in the admin panel."
    return subject, _wrap("New Booking Request", intro, _details(snapshot), "#dc3545")


def render_admin_status_email(snapshot: BookingSnapshot) -> tuple[str, str]:
    subject = f"Booking Status Update - {snapshot.event_title}"
    intro = _STATUS_MESSAGES.get(snapshot.status, f"Booking status updated to: {snapshot.status}")
    accent = _STATUS_COLOURS.get(snapshot.status, "#007bff")
    return subject, _wrap("Booking Status Update", intro, _details(snapshot), accent)


def render_contact_email(message: ContactMessage) -> tuple[str, str]:
    subject = f"Contact Form: {message.subject}"
    rows = [
        ("Name", message.name),
        ("Email", message.email),
        ("Phone", message.phone),
        ("Subject", message.subject),
        ("Message", message.message),
    ]
    body = "\n".join(
        f"<p><strong>{label}:</strong> {escape(value)}</p>"
        for label, value in rows
        if value
    )
    return subject, _wrap("New Contact Form Submission", "A visitor sent a message:", body, "#007bff")
