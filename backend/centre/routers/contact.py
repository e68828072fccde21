# backend/centre/routers/contact.py

import logging

from fastapi import APIRouter, Depends

from ..errors import InternalError
from ..schemas.contact import ContactFormResult, ContactFormSubmit
from ..services.notifications import BookingNotifier, ContactMessage, get_notifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contact"])


@router.post("/contact-form", response_model=ContactFormResult)
def submit_contact_form(
    data: ContactFormSubmit,
    notifier: BookingNotifier = Depends(get_notifier),
):
    message = ContactMessage(
        name=data.name,
        email=data.email,
        phone=data.phone,
        subject=data.subject,
        message=data.message,
    )
    try:
        notifier.send_contact_message(message)
    except Exception:
        logger.exception("Contact form delivery failed for %s", data.email)
        raise InternalError("Failed to send message. Please try again later.") from None

    return {
        "success": True,
        "message": "Your message has been sent successfully. We will respond within 2-3 working days.",
    }
