"""Doctor router - FastAPI endpoints for doctors and their schedules"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...cache import Cache, get_cache
from ...database import get_db
from ...shared.pagination import PageDTO, PageRequest, get_page_request
from ..appointments.schemas import AppointmentDTO
from ..appointments.service import AppointmentService
from .schemas import DoctorDTO
from .service import DoctorService

router = APIRouter(prefix="/doctors", tags=["Doctors"])


def get_doctor_service(db: Session = Depends(get_db), cache: Cache = Depends(get_cache)) -> DoctorService:
    """Dependency injection for DoctorService"""
    return DoctorService(db, cache)


def get_appointment_service(
    db: Session = Depends(get_db), cache: Cache = Depends(get_cache)
) -> AppointmentService:
    return AppointmentService(db, cache)


@router.get("", response_model=PageDTO[DoctorDTO])
def get_doctors(
    page_request: PageRequest = Depends(get_page_request),
    service: DoctorService = Depends(get_doctor_service),
):
    """Get a page of doctors"""
    return service.list_doctors(page_request)


@router.get("/{doctor_id}", response_model=DoctorDTO)
def get_doctor(doctor_id: int, service: DoctorService = Depends(get_doctor_service)):
    """Get a specific doctor"""
    return service.get_doctor(doctor_id)


@router.get("/{doctor_id}/appointments", response_model=PageDTO[AppointmentDTO])
def get_doctor_appointments(
    doctor_id: int,
    day: Optional[date] = Query(None, alias="date", description="Only appointments on this day (YYYY-MM-DD)"),
    page_request: PageRequest = Depends(get_page_request),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Get a page of a doctor's appointments, optionally for a single day"""
    return service.list_doctor_appointments(doctor_id, day, page_request)


__all__ = ["router", "get_doctors", "get_doctor", "get_doctor_appointments"]
