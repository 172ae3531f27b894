"""Appointment domain schemas - Pydantic models for validation"""

from datetime import date, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...models import Appointment
from ...shared.validators import validate_pin


class AppointmentRequest(BaseModel):
    """Schema for booking or cancelling an appointment"""

    customer_pin: int
    doctor_id: int = Field(gt=0)
    note: Optional[str] = Field(default=None, max_length=500)
    date: date
    time: time

    @field_validator("customer_pin")
    @classmethod
    def validate_customer_pin(cls, v):
        return validate_pin(v)


class AppointmentDTO(BaseModel):
    """
    Appointment as returned to API callers.

    `person_name` / `person_surname` describe the other party: the doctor
    when a customer looks at their booking, the customer when a doctor
    looks at their schedule.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    note: Optional[str] = None
    scheduled_date: date
    scheduled_time: time
    person_name: str
    person_surname: str

    @classmethod
    def for_customer(cls, appointment: Appointment) -> "AppointmentDTO":
        return cls(
            id=appointment.id,
            note=appointment.note,
            scheduled_date=appointment.scheduled_date,
            scheduled_time=appointment.scheduled_time,
            person_name=appointment.doctor.name,
            person_surname=appointment.doctor.surname,
        )

    @classmethod
    def for_doctor(cls, appointment: Appointment) -> "AppointmentDTO":
        return cls(
            id=appointment.id,
            note=appointment.note,
            scheduled_date=appointment.scheduled_date,
            scheduled_time=appointment.scheduled_time,
            person_name=appointment.customer.name,
            person_surname=appointment.customer.surname,
        )
