"""Appointment repository - Database operations for appointments"""

from datetime import date, datetime

from sqlalchemy import and_, exists, or_
from sqlalchemy.orm import Session, joinedload

from ...models import Appointment
from ...shared.pagination import Page, PageRequest, paginate

SORTABLE_FIELDS = {
    "id": Appointment.id,
    "timestamp": Appointment.timestamp,
    "scheduledDate": Appointment.scheduled_date,
    "scheduledTime": Appointment.scheduled_time,
}


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def page_by_doctor(db: Session, doctor_id: int, page_request: PageRequest) -> Page:
        """Get a page of a doctor's appointments"""
        query = (
            db.query(Appointment)
            .options(joinedload(Appointment.customer))
            .filter(Appointment.doctor_id == doctor_id)
        )
        return paginate(query, page_request, SORTABLE_FIELDS, Appointment.timestamp.asc())

    @staticmethod
    def page_by_doctor_and_date(
        db: Session, doctor_id: int, scheduled_date: date, page_request: PageRequest
    ) -> Page:
        """Get a page of a doctor's appointments on one day"""
        query = (
            db.query(Appointment)
            .options(joinedload(Appointment.customer))
            .filter(Appointment.doctor_id == doctor_id, Appointment.scheduled_date == scheduled_date)
        )
        return paginate(query, page_request, SORTABLE_FIELDS, Appointment.timestamp.asc())

    @staticmethod
    def list_by_customer(db: Session, customer_id: int) -> list[Appointment]:
        """Get all appointments of a customer, soonest first"""
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.doctor))
            .filter(Appointment.customer_id == customer_id)
            .order_by(Appointment.timestamp.asc())
            .all()
        )

    @staticmethod
    def list_by_doctor(db: Session, doctor_id: int) -> list[Appointment]:
        """Get all appointments of a doctor, soonest first"""
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.customer))
            .filter(Appointment.doctor_id == doctor_id)
            .order_by(Appointment.timestamp.asc())
            .all()
        )

    @staticmethod
    def save(db: Session, appointment: Appointment) -> Appointment:
        """Insert an appointment; rolls back and re-raises on constraint violations"""
        db.add(appointment)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(appointment)
        return appointment

    @staticmethod
    def delete_by_customer_and_timestamp(db: Session, customer_id: int, timestamp: datetime) -> int:
        """Delete a customer's appointment starting at `timestamp`"""
        deleted = (
            db.query(Appointment)
            .filter(Appointment.customer_id == customer_id, Appointment.timestamp == timestamp)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted

    @staticmethod
    def exists_by_doctor_and_timestamp(db: Session, doctor_id: int, timestamp: datetime) -> bool:
        return db.query(
            exists().where(Appointment.doctor_id == doctor_id, Appointment.timestamp == timestamp)
        ).scalar()

    @staticmethod
    def exists_by_customer_and_timestamp(db: Session, customer_id: int, timestamp: datetime) -> bool:
        return db.query(
            exists().where(Appointment.customer_id == customer_id, Appointment.timestamp == timestamp)
        ).scalar()

    @staticmethod
    def is_slot_available(
        db: Session, doctor_id: int, start_ts: datetime, end_ts: datetime, at_ts: datetime
    ) -> bool:
        """
        True when the doctor has no appointment starting strictly between
        `start_ts` and `end_ts`, nor exactly at `at_ts`.
        """
        conflict = db.query(
            exists().where(
                Appointment.doctor_id == doctor_id,
                or_(
                    and_(Appointment.timestamp > start_ts, Appointment.timestamp < end_ts),
                    Appointment.timestamp == at_ts,
                ),
            )
        ).scalar()
        return not conflict
