from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata

BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "rejected")


class Facility(Base):
    __tablename__ = 'facilities'

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    subtitle = Column(Text)
    description = Column(Text)
    capacity = Column(Integer)
    dimensions = Column(Text)
    hourly_rate = Column(Numeric(10, 2))
    features = Column(JSON, nullable=False, default=list)
    image_url = Column(Text)
    active = Column(Boolean, nullable=False, default=True, server_default=text('1'))
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )

    bookings = relationship('Booking', back_populates='facility')
    hours = relationship(
        'FacilityHours',
        back_populates='facility',
        cascade='all, delete-orphan',
        order_by='FacilityHours.day_of_week',
    )


class FacilityHours(Base):
    __tablename__ = 'facility_hours'
    __table_args__ = (
        UniqueConstraint('facility_id', 'day_of_week'),
    )

    id = Column(Integer, primary_key=True)
    facility_id = Column(ForeignKey('facilities.id', ondelete='CASCADE'), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0 = Monday
    open_time = Column(Text, nullable=False)
    close_time = Column(Text, nullable=False)
    is_open = Column(Boolean, nullable=False, default=True, server_default=text('1'))

    facility = relationship('Facility', back_populates='hours')


class Booking(Base):
    __tablename__ = 'bookings'

    id = Column(Integer, primary_key=True)
    facility_id = Column(ForeignKey('facilities.id'), nullable=False, index=True)
    customer_name = Column(Text, nullable=False)
    customer_email = Column(Text, nullable=False)
    customer_phone = Column(Text)
    event_title = Column(Text, nullable=False)
    event_description = Column(Text)
    # naive UTC instants
    start_date_time = Column(DateTime, nullable=False, index=True)
    end_date_time = Column(DateTime, nullable=False)
    total_hours = Column(Numeric(10, 4), nullable=False)
    hourly_rate = Column(Numeric(10, 2))
    total_cost = Column(Numeric(10, 2))
    status = Column(
        Enum(*BOOKING_STATUSES, name='booking_status', native_enum=False),
        nullable=False,
        server_default=text("'pending'"),
    )
    notes = Column(Text)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )

    facility = relationship('Facility', back_populates='bookings')


class SiteSetting(Base):
    __tablename__ = 'site_settings'

    id = Column(Integer, primary_key=True)
    key = Column(Text, nullable=False, unique=True)
    value = Column(Text)
    type = Column(Text, nullable=False, server_default=text("'string'"))
    description = Column(Text)
    updated_at = Column(
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )


class Program(Base):
    __tablename__ = 'programs'

    id = Column(Integer, primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text)
    category = Column(Text)
    age_group = Column(Text)
    price = Column(Text)
    booking_info = Column(Text)
    instructor = Column(Text)
    contact_email = Column(Text)
    contact_phone = Column(Text)
    contact_website = Column(Text)
    image_url = Column(Text)
    active = Column(Boolean, nullable=False, default=True, server_default=text('1'))
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
    )

    schedules = relationship(
        'ProgramSchedule',
        back_populates='program',
        cascade='all, delete-orphan',
        order_by='ProgramSchedule.id',
    )


class ProgramSchedule(Base):
    __tablename__ = 'program_schedules'

    id = Column(Integer, primary_key=True)
    program_id = Column(ForeignKey('programs.id', ondelete='CASCADE'), nullable=False)
    description = Column(Text, nullable=False)
    day_of_week = Column(Text)
    start_time = Column(Text)
    end_time = Column(Text)
    active = Column(Boolean, nullable=False, default=True, server_default=text('1'))

    program = relationship('Program', back_populates='schedules')


class Testimonial(Base):
    __tablename__ = 'testimonials'

    id = Column(Integer, primary_key=True)
    quote = Column(Text, nullable=False)
    author_name = Column(Text, nullable=False)
    author_title = Column(Text)
    avatar_url = Column(Text)
    display_order = Column(Integer, nullable=False, default=0, server_default=text('0'))
    active = Column(Boolean, nullable=False, default=True, server_default=text('1'))
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())


class FaqItem(Base):
    __tablename__ = 'faq_items'

    id = Column(Integer, primary_key=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    category = Column(Text)
    image_url = Column(Text)
    display_order = Column(Integer, nullable=False, default=0, server_default=text('0'))
    active = Column(Boolean, nullable=False, default=True, server_default=text('1'))
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())


class ContactInfo(Base):
    __tablename__ = 'contact_info'

    id = Column(Integer, primary_key=True)
    type = Column(Text, nullable=False)  # email, phone, website, address
    label = Column(Text, nullable=False)
    value = Column(Text, nullable=False)
    description = Column(Text)
    display_order = Column(Integer, nullable=False, default=0, server_default=text('0'))
    active = Column(Boolean, nullable=False, default=True, server_default=text('1'))
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())


class OpeningHours(Base):
    __tablename__ = 'opening_hours'

    id = Column(Integer, primary_key=True)
    title = Column(Text, nullable=False)
    schedule = Column(JSON, nullable=False, default=list)  # display lines
    description = Column(Text)
    type = Column(Text)  # centre, office
    active = Column(Boolean, nullable=False, default=True, server_default=text('1'))
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
