from sqlalchemy import (
    Column, String, Integer, Boolean, DateTime, Date, Time, Text, Numeric, Float,
    ForeignKey, UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime

from zootel.core.database import Base
from zootel.utils.ids import new_uuid, new_employee_id

MYSQL_TABLE_ARGS = {"mysql_engine": "InnoDB", "mysql_charset": "utf8mb4", "mysql_collate": "utf8mb4_unicode_ci"}

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")
ACTIVE_BOOKING_STATUSES = ("pending", "confirmed")
WAITLIST_TYPES = ("mobile_app", "business_app", "general")


class Company(Base):
    """
    A tenant. The primary key is the uid of the company's authenticated
    principal, so every tenant-owned row is filtered by ``company_id == uid``.
    """
    __tablename__ = "companies"
    __table_args__ = (MYSQL_TABLE_ARGS,)

    id = Column(String(255), primary_key=True, index=True)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), unique=True, nullable=True)
    phone = Column(String(50), default="")
    address = Column(Text, nullable=True)
    city = Column(String(100), default="")
    state = Column(String(100), default="")
    zip_code = Column(String(20), default="")
    description = Column(Text, nullable=True)
    business_hours = Column(Text, nullable=True)  # JSON object: weekday -> {open, close} | {closed}
    logo_url = Column(String(500), default="")
    images = Column(Text, nullable=True)  # JSON array of URLs
    verified = Column(Boolean, default=False, nullable=False)
    subscription_plan = Column(String(50), default="basic")
    subscription_status = Column(String(50), default="active")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    services = relationship("Service", back_populates="company", cascade="all, delete-orphan", passive_deletes=True)
    employees = relationship("Employee", back_populates="company", cascade="all, delete-orphan", passive_deletes=True)
    bookings = relationship("Booking", back_populates="company", passive_deletes=True)
    reviews = relationship("Review", back_populates="company", passive_deletes=True)


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (MYSQL_TABLE_ARGS,)

    id = Column(String(255), primary_key=True, index=True, default=new_uuid)
    company_id = Column(String(255), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    duration = Column(Integer, nullable=False, default=60)  # minutes
    category = Column(String(100), default="")
    image_url = Column(String(500), default="")
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    company = relationship("Company", back_populates="services")


class Employee(Base):
    __tablename__ = "employees"
    __table_args__ = (
        UniqueConstraint("company_id", "email", name="unique_company_email"),
        MYSQL_TABLE_ARGS,
    )

    id = Column(String(255), primary_key=True, index=True, default=new_employee_id)
    company_id = Column(String(255), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), default="")
    position = Column(String(100), default="")
    specialties = Column(Text, nullable=True)  # JSON array
    working_hours = Column(Text, nullable=True)  # JSON object
    emergency_contact_name = Column(String(255), default="")
    emergency_contact_phone = Column(String(50), default="")
    notes = Column(Text, nullable=True)
    active = Column(Boolean, default=True, nullable=False)  # soft delete flag
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    company = relationship("Company", back_populates="employees")
    bookings = relationship("Booking", back_populates="employee", passive_deletes=True)


class PetOwner(Base):
    __tablename__ = "pet_owners"
    __table_args__ = (MYSQL_TABLE_ARGS,)

    id = Column(String(255), primary_key=True, index=True, default=new_uuid)
    name = Column(String(255), default="")
    email = Column(String(255), nullable=False)
    phone = Column(String(50), default="")
    address = Column(Text, nullable=True)
    emergency_contact_name = Column(String(255), default="")
    emergency_contact_phone = Column(String(50), default="")
    emergency_contact_relationship = Column(String(100), default="")
    preferences = Column(Text, nullable=True)  # JSON object
    last_active_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    pets = relationship("Pet", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)
    bookings = relationship("Booking", back_populates="pet_owner", passive_deletes=True)


class Pet(Base):
    __tablename__ = "pets"
    __table_args__ = (MYSQL_TABLE_ARGS,)

    id = Column(String(255), primary_key=True, index=True, default=new_uuid)
    owner_id = Column(String(255), ForeignKey("pet_owners.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    breed = Column(String(100), default="")
    age = Column(Integer, default=0)
    weight = Column(Numeric(5, 2), default=0)
    gender = Column(String(20), default="")
    color = Column(String(100), default="")
    microchip_id = Column(String(100), default="")
    photos = Column(Text, nullable=True)  # JSON array
    medical_info = Column(Text, nullable=True)  # JSON object
    behavior_notes = Column(Text, nullable=True)
    special_needs = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    owner = relationship("PetOwner", back_populates="pets")


class Booking(Base):
    """Central fact table for every analytics aggregation"""
    __tablename__ = "bookings"
    __table_args__ = (MYSQL_TABLE_ARGS,)

    id = Column(String(255), primary_key=True, index=True, default=new_uuid)
    company_id = Column(String(255), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(String(255), ForeignKey("services.id", ondelete="CASCADE"), nullable=False)
    pet_owner_id = Column(String(255), ForeignKey("pet_owners.id", ondelete="CASCADE"), nullable=False, index=True)
    pet_id = Column(String(255), ForeignKey("pets.id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(String(255), ForeignKey("employees.id", ondelete="SET NULL"), nullable=True, index=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)
    status = Column(String(50), default="pending", nullable=False)  # pending, confirmed, completed, cancelled
    notes = Column(Text, nullable=True)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    company = relationship("Company", back_populates="bookings")
    service = relationship("Service")
    pet_owner = relationship("PetOwner", back_populates="bookings")
    pet = relationship("Pet")
    employee = relationship("Employee", back_populates="bookings")
    review = relationship("Review", back_populates="booking", uselist=False, passive_deletes=True)


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
        MYSQL_TABLE_ARGS,
    )

    id = Column(String(255), primary_key=True, index=True, default=new_uuid)
    company_id = Column(String(255), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    pet_owner_id = Column(String(255), ForeignKey("pet_owners.id", ondelete="CASCADE"), nullable=False)
    booking_id = Column(String(255), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, unique=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    company = relationship("Company", back_populates="reviews")
    pet_owner = relationship("PetOwner")
    booking = relationship("Booking", back_populates="review")


class WaitlistEntry(Base):
    __tablename__ = "waitlist"
    __table_args__ = (
        UniqueConstraint("email", "type", name="unique_email_type"),
        MYSQL_TABLE_ARGS,
    )

    id = Column(String(255), primary_key=True, index=True, default=new_uuid)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), default="")
    type = Column(String(50), nullable=False, default="mobile_app")  # mobile_app, business_app, general
    status = Column(String(50), default="active")
    created_at = Column(DateTime, default=datetime.utcnow, index=True)


class Currency(Base):
    """
    Supported display currencies. ``exchange_rate`` is the number of units of
    this currency per one unit of the base currency.
    """
    __tablename__ = "currencies"
    __table_args__ = (MYSQL_TABLE_ARGS,)

    id = Column(String(255), primary_key=True, index=True, default=new_uuid)
    code = Column(String(3), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    symbol = Column(String(10), nullable=False)
    flag_emoji = Column(String(10), default="")
    is_active = Column(Boolean, default=True, nullable=False)
    is_base = Column(Boolean, default=False, nullable=False)
    exchange_rate = Column(Float, nullable=False, default=1.0)
    last_updated = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
