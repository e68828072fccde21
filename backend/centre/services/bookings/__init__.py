# backend/centre/services/bookings/__init__.py
"""
Booking core.

- availability: day slots for a facility (read-only)
- conflicts: half-open interval overlap against active bookings
- lifecycle: create / update / cancel with pricing and notifications
"""

from .config import BookingConfig, get_booking_config
from .availability import facility_summary, get_availability
from .conflicts import ACTIVE_STATUSES, find_conflicts, has_conflict
from .lifecycle import (
    TRANSITIONS,
    can_transition,
    cancel_booking,
    compute_total_cost,
    compute_total_hours,
    create_booking,
    get_booking,
    list_bookings,
    update_booking,
)

__all__ = [
    "ACTIVE_STATUSES",
    "BookingConfig",
    "TRANSITIONS",
    "can_transition",
    "cancel_booking",
    "compute_total_cost",
    "compute_total_hours",
    "create_booking",
    "facility_summary",
    "find_conflicts",
    "get_availability",
    "get_booking",
    "get_booking_config",
    "has_conflict",
    "list_bookings",
    "update_booking",
]
