"""Tests for demo data seeding and profile validation."""

from datetime import time
from decimal import Decimal

import pytest

import seed_data
from vetclinic.exceptions import InvalidArgumentError
from vetclinic.models import Customer, Doctor, VisitDetails
from vetclinic.seed import DEMO_CUSTOMERS, DEMO_DOCTORS, add_customer, add_doctor, seed_demo_data


def test_seed_demo_data_is_idempotent(db_session):
    assert seed_demo_data(db_session) is True
    assert seed_demo_data(db_session) is False

    assert db_session.query(Doctor).count() == len(DEMO_DOCTORS)
    assert db_session.query(Customer).count() == len(DEMO_CUSTOMERS)
    assert db_session.query(VisitDetails).count() == len(DEMO_DOCTORS)


def test_seed_with_custom_visit_duration(db_session):
    seed_demo_data(db_session, visit_duration_minutes=45)

    durations = {d.visit_duration_minutes for d in db_session.query(VisitDetails).all()}
    assert durations == {45}


@pytest.mark.parametrize(
    "overrides",
    [
        {"visit_duration_minutes": 0},
        {"visit_duration_minutes": 1441},
        {"opening_at": time(16, 0)},
        {"closing_at": time(2, 0)},
        {"closing_at": time(8, 20)},
        {"opening_at": time(0, 0), "closing_at": time(0, 30), "visit_duration_minutes": 60},
        {"visit_price": Decimal("-1")},
    ],
)
def test_invalid_timing_profile(db_session, overrides):
    profile = {
        "title": "DR",
        "name": "DOCTOR1",
        "surname": "SURNAME1",
        "opening_at": time(8, 0),
        "closing_at": time(16, 0),
        "visit_price": Decimal("10.00"),
        "visit_duration_minutes": 30,
    }
    profile.update(overrides)

    with pytest.raises(InvalidArgumentError):
        add_doctor(db_session, **profile)


@pytest.mark.parametrize("pin", [999, 10000, -1234])
def test_invalid_customer_pin(db_session, pin):
    with pytest.raises(InvalidArgumentError):
        add_customer(db_session, pin=pin, name="CUSTOMER1", surname="SURNAME1")


def test_seed_script(engine, session_factory, monkeypatch):
    monkeypatch.setattr(seed_data, "engine", engine)
    monkeypatch.setattr(seed_data, "SessionLocal", session_factory)

    assert seed_data.main(["seed_data.py", "20"]) == 0

    db = session_factory()
    try:
        assert {d.visit_duration_minutes for d in db.query(VisitDetails).all()} == {20}
    finally:
        db.close()
