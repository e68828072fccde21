from .tables import (
    BOOKING_STATUSES,
    Base,
    Booking,
    ContactInfo,
    Facility,
    FacilityHours,
    FaqItem,
    OpeningHours,
    Program,
    ProgramSchedule,
    SiteSetting,
    Testimonial,
)

__all__ = [
    "BOOKING_STATUSES",
    "Base",
    "Booking",
    "ContactInfo",
    "Facility",
    "FacilityHours",
    "FaqItem",
    "OpeningHours",
    "Program",
    "ProgramSchedule",
    "SiteSetting",
    "Testimonial",
]
