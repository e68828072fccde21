import sys
import pathlib
from decimal import Decimal

from dotenv import load_dotenv

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "backend"))


# ======================================================
# ENV
# ======================================================

load_dotenv()

from centre.config import BASE_DIR, settings  # noqa: E402
from centre.database import SessionLocal, engine  # noqa: E402
from centre.models import (  # noqa: E402
    Base,
    ContactInfo,
    Facility,
    FaqItem,
    OpeningHours,
    Program,
    ProgramSchedule,
    Testimonial,
)


# ======================================================
# SEED DATA
# ======================================================

FACILITIES = [
    dict(
        name="Main Hall",
        subtitle="Our largest space, ideal for parties and performances",
        capacity=120,
        dimensions="18m x 12m",
        hourly_rate=Decimal("50.00"),
        features=["Stage", "Sound system", "Kitchen access", "Accessible entrance"],
    ),
    dict(
        name="Small Hall",
        subtitle="A flexible room for classes and meetings",
        capacity=30,
        dimensions="8m x 6m",
        hourly_rate=Decimal("25.00"),
        features=["Projector", "Tables and chairs"],
    ),
]

PROGRAMS = [
    (
        dict(
            title="Stay & Play",
            category="Families",
            age_group="0-5 years",
            price="£2 per family",
            description="Relaxed play sessions for young children and their carers.",
        ),
        [dict(description="Mondays and Wednesdays, 10am-12pm", day_of_week="Monday", start_time="10:00", end_time="12:00")],
    ),
    (
        dict(
            title="Karate Club",
            category="Martial arts",
            age_group="6+",
            price="£6 per session",
        ),
        [dict(description="Tuesdays, 6pm-7pm", day_of_week="Tuesday", start_time="18:00", end_time="19:00")],
    ),
]

TESTIMONIALS = [
    dict(quote="The Main Hall was perfect for my daughter's birthday.", author_name="Sarah M.", author_title="Local resident"),
    dict(quote="Our weekly class has found a real home here.", author_name="David K.", author_title="Yoga instructor"),
]

FAQ = [
    dict(question="How do I book a hall?", answer="Use the online booking page. Requests are confirmed by email.", category="Bookings"),
    dict(question="Is there parking?", answer="There is limited free parking on site.", category="Visiting"),
]

CONTACT_INFO = [
    dict(type="email", label="General Enquiries", value="info@westactoncc.org.uk", description="Bookings, programs and general questions"),
    dict(type="phone", label="Phone", value="+44 20 1234 5678", description="Call during office hours"),
]

OPENING_HOURS = [
    dict(title="Centre Opening Hours", schedule=["Monday - Sunday: 9:00 AM - 10:00 PM"], type="centre"),
    dict(title="Office Hours", schedule=["Monday: 9:30 AM - 11:00 AM", "Wednesday - Friday: 10:00 AM - 2:30 PM"], type="office"),
]


# ======================================================
# MAIN LOGIC
# ======================================================

def main():
    if settings.resolved_database_url.startswith("sqlite"):
        (BASE_DIR / "data").mkdir(exist_ok=True)

    Base.metadata.create_all(engine)
    db = SessionLocal()
    try:
        if db.query(Facility).count():
            print("[SEED] Facilities already present, skipping")
            return

        for data in FACILITIES:
            db.add(Facility(**data))

        for data, schedules in PROGRAMS:
            program = Program(**data)
            program.schedules = [ProgramSchedule(**s) for s in schedules]
            db.add(program)

        for order, data in enumerate(TESTIMONIALS):
            db.add(Testimonial(display_order=order, **data))

        for order, data in enumerate(FAQ):
            db.add(FaqItem(display_order=order, **data))

        for order, data in enumerate(CONTACT_INFO):
            db.add(ContactInfo(display_order=order, **data))

        for data in OPENING_HOURS:
            db.add(OpeningHours(**data))

        db.commit()
        print(
            f"[SEED] {len(FACILITIES)} facilities, {len(PROGRAMS)} programs, "
            f"{len(TESTIMONIALS)} testimonials, {len(FAQ)} FAQ items, "
            f"{len(CONTACT_INFO)} contact entries, {len(OPENING_HOURS)} opening-hours blocks"
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
