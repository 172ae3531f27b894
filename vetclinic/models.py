from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Time,
    UniqueConstraint,
    event,
)
from sqlalchemy.orm import relationship

from .database import Base


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = (CheckConstraint("pin BETWEEN 1000 AND 9999", name="ck_customers_pin_4_digits"),)

    id = Column(Integer, primary_key=True, index=True)
    pin = Column(Integer, nullable=False)
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)

    # Owning side lives on Appointment; no cascade from customer
    appointments = relationship("Appointment", back_populates="customer", lazy="noload")


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(50), nullable=False)
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)

    visit_details = relationship(
        "VisitDetails", back_populates="doctor", uselist=False, cascade="all, delete-orphan"
    )
    appointments = relationship("Appointment", back_populates="doctor", lazy="noload")


class VisitDetails(Base):
    """Timing profile and pricing of a doctor's visits"""

    __tablename__ = "visit_details"
    __table_args__ = (
        CheckConstraint(
            "visit_duration_minutes > 0 AND visit_duration_minutes <= 1440",
            name="ck_visit_details_duration",
        ),
        CheckConstraint("visit_price >= 0", name="ck_visit_details_price"),
    )

    id = Column(Integer, primary_key=True, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), unique=True, nullable=False)
    visit_duration_minutes = Column(Integer, nullable=False)
    opening_at = Column(Time, nullable=False)
    closing_at = Column(Time, nullable=False)
    visit_price = Column(Numeric(10, 2), nullable=False)

    doctor = relationship("Doctor", back_populates="visit_details")


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # Guards the non-atomic availability check + insert in booking
        UniqueConstraint("doctor_id", "timestamp", name="uq_appointments_doctor_timestamp"),
    )

    id = Column(Integer, primary_key=True, index=True)
    note = Column(Text, nullable=True)
    scheduled_date = Column(Date, nullable=False, index=True)
    scheduled_time = Column(Time, nullable=False)
    # combine(scheduled_date, scheduled_time); used for every comparison
    timestamp = Column(DateTime, nullable=False, index=True)

    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False, index=True)

    customer = relationship("Customer", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="appointments")


@event.listens_for(Appointment, "before_insert")
@event.listens_for(Appointment, "before_update")
def sync_appointment_timestamp(_mapper, _connection, target: Appointment) -> None:
    """Keep `timestamp` equal to combine(scheduled_date, scheduled_time)"""
    target.timestamp = datetime.combine(target.scheduled_date, target.scheduled_time)
