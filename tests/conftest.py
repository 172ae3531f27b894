"""
Shared pytest fixtures for all tests.

This module provides an in-memory database, a fresh cache per test,
seeded doctors and customers, the service layer and an HTTP client.
"""

import os
from datetime import date, time, timedelta
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure test environment before the package reads its configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from vetclinic import models  # noqa: E402
from vetclinic.cache import Cache, MemoryCacheBackend, get_cache  # noqa: E402
from vetclinic.database import Base, get_db  # noqa: E402
from vetclinic.domain.appointments.service import AppointmentService  # noqa: E402
from vetclinic.domain.booking.service import BookingService  # noqa: E402
from vetclinic.domain.customers.service import CustomerService  # noqa: E402
from vetclinic.domain.doctors.service import DoctorService  # noqa: E402
from vetclinic.domain.visit_details.service import VisitDetailsService  # noqa: E402
from vetclinic.seed import add_customer, add_doctor  # noqa: E402

VISIT_DURATION = 30
CUSTOMER_PIN = 1234


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# ============================================================================
# CACHE FIXTURES
# ============================================================================


@pytest.fixture
def cache() -> Cache:
    """Fresh in-memory cache per test."""
    return Cache(MemoryCacheBackend(), ttl=0)


# ============================================================================
# TEST DATA FIXTURES
# ============================================================================


@pytest.fixture
def doctor(db_session) -> models.Doctor:
    """Doctor seeing 30-minute visits between 06:00 and 16:00."""
    doctor = add_doctor(
        db_session,
        title="DR",
        name="DOCTOR1",
        surname="SURNAME1",
        opening_at=time(6, 0),
        closing_at=time(16, 0),
        visit_price=Decimal("10.00"),
        visit_duration_minutes=VISIT_DURATION,
    )
    db_session.commit()
    return doctor


@pytest.fixture
def customer(db_session) -> models.Customer:
    customer = add_customer(db_session, pin=CUSTOMER_PIN, name="CUSTOMER1", surname="SURNAME1")
    db_session.commit()
    return customer


@pytest.fixture
def tomorrow() -> date:
    return date.today() + timedelta(days=1)


# ============================================================================
# SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def customer_service(db_session, cache) -> CustomerService:
    return CustomerService(db_session, cache)


@pytest.fixture
def doctor_service(db_session, cache) -> DoctorService:
    return DoctorService(db_session, cache)


@pytest.fixture
def visit_details_service(db_session, cache) -> VisitDetailsService:
    return VisitDetailsService(db_session, cache)


@pytest.fixture
def appointment_service(db_session, cache, visit_details_service, doctor_service) -> AppointmentService:
    return AppointmentService(
        db_session,
        cache,
        visit_details_service=visit_details_service,
        doctor_service=doctor_service,
    )


@pytest.fixture
def booking_service(db_session, cache, customer_service, doctor_service, appointment_service) -> BookingService:
    return BookingService(
        db_session,
        cache,
        customer_service=customer_service,
        doctor_service=doctor_service,
        appointment_service=appointment_service,
    )


# ============================================================================
# API FIXTURES
# ============================================================================


@pytest.fixture
def client(session_factory, cache) -> Generator[TestClient, None, None]:
    """HTTP client wired to the test database and cache."""
    from vetclinic.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    yield TestClient(app)
    app.dependency_overrides.clear()
