"""Booking router - FastAPI endpoints for booking and cancelling appointments"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...cache import Cache, get_cache
from ...database import get_db
from ..appointments.schemas import AppointmentDTO, AppointmentRequest
from .service import BookingService

router = APIRouter(prefix="/customers", tags=["Appointments"])


def get_booking_service(db: Session = Depends(get_db), cache: Cache = Depends(get_cache)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db, cache)


@router.post(
    "/{customer_id}/appointments",
    response_model=AppointmentDTO,
    status_code=status.HTTP_201_CREATED,
)
def make_appointment(
    customer_id: int,
    data: AppointmentRequest,
    service: BookingService = Depends(get_booking_service),
):
    """Book an appointment with a doctor"""
    return service.make_appointment(data, customer_id)


@router.delete("/{customer_id}/appointments", status_code=status.HTTP_204_NO_CONTENT)
def cancel_appointment(
    customer_id: int,
    data: AppointmentRequest,
    service: BookingService = Depends(get_booking_service),
):
    """Cancel an appointment identified by its date and time"""
    service.cancel_appointment(data, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router", "make_appointment", "cancel_appointment"]
