"""
Booking service - End-to-end booking and cancellation of appointments

Booking runs, failing fast at each step:
1. past-time check
2. customer fetch and PIN check
3. availability decision (opening hours, then conflicting appointments)
4. doctor fetch and persistence

The PIN is checked before the doctor's schedule is consulted so a caller
with a wrong PIN learns nothing about which slots are taken.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ...cache import Cache
from ...exceptions import InvalidPinError
from ...models import Appointment
from ..appointments.availability import ensure_not_in_past
from ..appointments.schemas import AppointmentDTO, AppointmentRequest
from ..appointments.service import AppointmentService
from ..customers.service import CustomerService
from ..doctors.service import DoctorService

logger = logging.getLogger(__name__)


class BookingService:
    """Orchestrates customer-facing booking and cancellation"""

    def __init__(
        self,
        db: Session,
        cache: Cache,
        customer_service: Optional[CustomerService] = None,
        doctor_service: Optional[DoctorService] = None,
        appointment_service: Optional[AppointmentService] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.customer_service = customer_service or CustomerService(db, cache)
        self.doctor_service = doctor_service or DoctorService(db, cache)
        self.appointment_service = appointment_service or AppointmentService(
            db, cache, doctor_service=self.doctor_service
        )
        self.clock = clock

    def make_appointment(self, request: AppointmentRequest, customer_id: int) -> AppointmentDTO:
        """Book an appointment for a customer"""
        logger.info(
            f"📥 Booking request from customer {customer_id} for doctor {request.doctor_id} "
            f"at {request.date} {request.time}"
        )
        ensure_not_in_past(request, self.clock())

        customer = self.customer_service.get_customer(customer_id)
        self._validate_customer_pin(customer.pin, request.customer_pin, customer_id)

        self.appointment_service.check_date_availability_for_doctor(request)
        doctor = self.doctor_service.get_doctor(request.doctor_id)

        appointment = Appointment(
            customer_id=customer.id,
            doctor_id=doctor.id,
            note=request.note,
            scheduled_date=request.date,
            scheduled_time=request.time,
            timestamp=datetime.combine(request.date, request.time),
        )
        return self.appointment_service.add_appointment(appointment)

    def cancel_appointment(self, request: AppointmentRequest, customer_id: int) -> None:
        """Cancel a customer's appointment identified by its start date and time"""
        valid_pin = self.customer_service.get_pin(customer_id)
        self._validate_customer_pin(valid_pin, request.customer_pin, customer_id)

        appointment_timestamp = datetime.combine(request.date, request.time)
        self.appointment_service.delete_appointment(customer_id, appointment_timestamp)
        logger.info(f"✅ Customer {customer_id} cancelled appointment at {appointment_timestamp}")

    @staticmethod
    def _validate_customer_pin(valid_pin: int, pin: int, customer_id: int) -> None:
        if valid_pin != pin:
            logger.warning(f"⚠️ Invalid PIN for customer {customer_id}")
            raise InvalidPinError("Given pin is invalid.")
