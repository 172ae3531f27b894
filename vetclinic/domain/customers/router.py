"""Customer router - FastAPI endpoints for browsing customers"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...cache import Cache, get_cache
from ...database import get_db
from ...shared.pagination import PageDTO, PageRequest, get_page_request
from ..appointments.schemas import AppointmentDTO
from ..appointments.service import AppointmentService
from .schemas import CustomerResponse
from .service import CustomerService

router = APIRouter(prefix="/customers", tags=["Customers"])


def get_customer_service(
    db: Session = Depends(get_db), cache: Cache = Depends(get_cache)
) -> CustomerService:
    """Dependency injection for CustomerService"""
    return CustomerService(db, cache)


def get_appointment_service(
    db: Session = Depends(get_db), cache: Cache = Depends(get_cache)
) -> AppointmentService:
    return AppointmentService(db, cache)


@router.get("", response_model=PageDTO[CustomerResponse])
def get_customers(
    page_request: PageRequest = Depends(get_page_request),
    service: CustomerService = Depends(get_customer_service),
):
    """Get a page of customers"""
    return service.list_customers(page_request)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int, service: CustomerService = Depends(get_customer_service)):
    """Get a specific customer"""
    customer = service.get_customer(customer_id)
    return CustomerResponse(id=customer.id, name=customer.name, surname=customer.surname)


@router.get("/{customer_id}/appointments", response_model=list[AppointmentDTO])
def get_customer_appointments(
    customer_id: int,
    customer_service: CustomerService = Depends(get_customer_service),
    appointment_service: AppointmentService = Depends(get_appointment_service),
):
    """Get every appointment booked by a customer"""
    customer_service.get_customer(customer_id)
    return appointment_service.get_customer_appointments(customer_id)


__all__ = ["router", "get_customers", "get_customer", "get_customer_appointments"]
