"""
Demo data for a fresh database

Customers, doctors and visit details are managed administratively; this
module provides the initial set used in development and tests.
"""

import logging
from datetime import time
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from .config import APPOINTMENT_DURATION_MINUTES
from .exceptions import InvalidArgumentError
from .models import Customer, Doctor, VisitDetails
from .shared.validators import validate_pin, validate_timing_profile

logger = logging.getLogger(__name__)

DEMO_DOCTORS = [
    {"title": "DVM", "name": "Anna", "surname": "Kowalska", "opening_at": time(8, 0), "closing_at": time(16, 0), "visit_price": Decimal("120.00")},
    {"title": "DVM", "name": "Piotr", "surname": "Nowak", "opening_at": time(10, 0), "closing_at": time(18, 0), "visit_price": Decimal("150.00")},
    {"title": "Prof.", "name": "Maria", "surname": "Wisniewska", "opening_at": time(12, 0), "closing_at": time(20, 0), "visit_price": Decimal("250.00")},
]

DEMO_CUSTOMERS = [
    {"pin": 1234, "name": "Jan", "surname": "Zielinski"},
    {"pin": 4321, "name": "Ewa", "surname": "Wojcik"},
    {"pin": 5678, "name": "Tomasz", "surname": "Kaminski"},
]


def add_doctor(
    db: Session,
    title: str,
    name: str,
    surname: str,
    opening_at: time,
    closing_at: time,
    visit_price: Decimal,
    visit_duration_minutes: int = APPOINTMENT_DURATION_MINUTES,
) -> Doctor:
    """Create a doctor together with their visit details"""
    validate_timing_profile(visit_duration_minutes, opening_at, closing_at, visit_price)
    doctor = Doctor(title=title, name=name, surname=surname)
    doctor.visit_details = VisitDetails(
        visit_duration_minutes=visit_duration_minutes,
        opening_at=opening_at,
        closing_at=closing_at,
        visit_price=visit_price,
    )
    db.add(doctor)
    return doctor


def add_customer(db: Session, pin: int, name: str, surname: str) -> Customer:
    """Create a customer with a 4-digit PIN"""
    try:
        validate_pin(pin)
    except ValueError as e:
        raise InvalidArgumentError(str(e)) from e
    customer = Customer(pin=pin, name=name, surname=surname)
    db.add(customer)
    return customer


def seed_demo_data(db: Session, visit_duration_minutes: Optional[int] = None) -> bool:
    """
    Insert demo doctors and customers into an empty database.

    Returns:
        True if data was inserted, False if the database already had doctors
    """
    if db.query(Doctor.id).first() is not None:
        logger.info("ℹ️ Demo data already present, skipping")
        return False

    duration = visit_duration_minutes or APPOINTMENT_DURATION_MINUTES
    for doctor in DEMO_DOCTORS:
        add_doctor(db, visit_duration_minutes=duration, **doctor)
    for customer in DEMO_CUSTOMERS:
        add_customer(db, **customer)
    db.commit()

    logger.info(
        f"✅ Seeded {len(DEMO_DOCTORS)} doctors and {len(DEMO_CUSTOMERS)} customers "
        f"(visit duration {duration} min)"
    )
    return True
