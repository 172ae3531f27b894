"""Appointment service - Availability decisions, booking persistence and schedule pages"""

import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...cache import DOCTOR_APPOINTMENTS_PAGE, Cache, cached
from ...exceptions import NotFoundError, RemovalFailureError
from ...models import Appointment
from ...shared.pagination import PageDTO, PageRequest, to_page_dto
from ..doctors.service import DoctorService
from ..visit_details.service import VisitDetailsService
from .availability import (
    TIMESTAMP_FORMAT,
    check_is_open,
    conflict_window,
    ensure_available,
    slot_taken,
)
from .repository import AppointmentRepository
from .schemas import AppointmentDTO, AppointmentRequest

logger = logging.getLogger(__name__)


def _doctor_appointments_key(doctor_id: int, scheduled_date: Optional[date], page_request: PageRequest) -> str:
    day = scheduled_date.isoformat() if scheduled_date else "all"
    return f"{doctor_id}:{day}:{page_request.cache_key()}"


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(
        self,
        db: Session,
        cache: Cache,
        visit_details_service: Optional[VisitDetailsService] = None,
        doctor_service: Optional[DoctorService] = None,
    ):
        self.db = db
        self.cache = cache
        self.repo = AppointmentRepository()
        self.visit_details_service = visit_details_service or VisitDetailsService(db, cache)
        self.doctor_service = doctor_service or DoctorService(db, cache)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @cached(
        DOCTOR_APPOINTMENTS_PAGE,
        model=PageDTO[AppointmentDTO],
        key_builder=_doctor_appointments_key,
    )
    def list_doctor_appointments(
        self, doctor_id: int, scheduled_date: Optional[date], page_request: PageRequest
    ) -> PageDTO[AppointmentDTO]:
        """Get a page of a doctor's appointments, optionally limited to one day"""
        if not self.doctor_service.exists(doctor_id):
            raise NotFoundError(f"Doctor with id '{doctor_id}' not found.")
        if scheduled_date is None:
            return self.get_appointments_page_by_doctor(page_request, doctor_id)
        return self.get_appointments_page_by_doctor_for_date(page_request, doctor_id, scheduled_date)

    def get_appointments_page_by_doctor(
        self, page_request: PageRequest, doctor_id: int
    ) -> PageDTO[AppointmentDTO]:
        page = self.repo.page_by_doctor(self.db, doctor_id, page_request)
        page.content = [AppointmentDTO.for_doctor(a) for a in page.content]
        return to_page_dto(page, AppointmentDTO)

    def get_appointments_page_by_doctor_for_date(
        self, page_request: PageRequest, doctor_id: int, scheduled_date: date
    ) -> PageDTO[AppointmentDTO]:
        page = self.repo.page_by_doctor_and_date(self.db, doctor_id, scheduled_date, page_request)
        page.content = [AppointmentDTO.for_doctor(a) for a in page.content]
        return to_page_dto(page, AppointmentDTO)

    def get_customer_appointments(self, customer_id: int) -> list[AppointmentDTO]:
        """Get every appointment a customer has booked"""
        return [AppointmentDTO.for_customer(a) for a in self.repo.list_by_customer(self.db, customer_id)]

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def check_date_availability_for_doctor(self, request: AppointmentRequest) -> None:
        """
        Raise UnavailableDateError unless the requested slot can be booked.

        Opening hours are checked first so that the store is only queried
        for slots the doctor could take at all.
        """
        timing = self.visit_details_service.get_timing_details(request.doctor_id)
        check_is_open(timing, request.time)

        start_ts, end_ts, at_ts = conflict_window(request.date, request.time, timing.visit_duration_minutes)
        is_available = self.repo.is_slot_available(self.db, request.doctor_id, start_ts, end_ts, at_ts)
        if not is_available:
            logger.warning(f"⚠️ Doctor {request.doctor_id} is not available at {at_ts.strftime(TIMESTAMP_FORMAT)}")
        ensure_available(is_available, at_ts)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_appointment(self, appointment: Appointment) -> AppointmentDTO:
        """Persist a new appointment and evict cached schedule pages"""
        at_ts = datetime.combine(appointment.scheduled_date, appointment.scheduled_time)
        try:
            saved = self.repo.save(self.db, appointment)
        except IntegrityError as e:
            if not self.repo.exists_by_doctor_and_timestamp(self.db, appointment.doctor_id, at_ts):
                logger.error(f"❌ Failed to save appointment for doctor {appointment.doctor_id} at {at_ts}: {e.orig}")
                raise
            # Another booking took the same doctor and start time first
            logger.warning(f"⚠️ Concurrent booking for doctor {appointment.doctor_id} at {at_ts}: {e.orig}")
            raise slot_taken(at_ts) from e
        finally:
            self.cache.evict_namespace(DOCTOR_APPOINTMENTS_PAGE)

        logger.info(f"✅ Appointment {saved.id} booked for doctor {saved.doctor_id} at {saved.timestamp}")
        return AppointmentDTO.for_customer(saved)

    def delete_appointment(self, customer_id: int, timestamp: datetime) -> None:
        """Delete a customer's appointment and verify it is gone"""
        try:
            deleted = self.repo.delete_by_customer_and_timestamp(self.db, customer_id, timestamp)
            logger.info(f"🗑️ Deleted {deleted} appointment(s) of customer {customer_id} at {timestamp}")

            if self.repo.exists_by_customer_and_timestamp(self.db, customer_id, timestamp):
                logger.error(f"❌ Appointment of customer {customer_id} at {timestamp} still exists after delete")
                raise RemovalFailureError("Appointment cancellation has failed!")
        finally:
            self.cache.evict_namespace(DOCTOR_APPOINTMENTS_PAGE)
