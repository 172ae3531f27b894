"""Doctor service - Doctor lookups and listing"""

from sqlalchemy.orm import Session

from ...cache import DOCTOR, DOCTORS_PAGE, Cache, cached
from ...exceptions import NotFoundError
from ...shared.pagination import PageDTO, PageRequest, to_page_dto
from .repository import DoctorRepository
from .schemas import DoctorDTO


class DoctorService:
    """Service layer for doctor lookups"""

    def __init__(self, db: Session, cache: Cache):
        self.db = db
        self.cache = cache
        self.repo = DoctorRepository()

    @cached(DOCTOR, model=DoctorDTO)
    def get_doctor(self, doctor_id: int) -> DoctorDTO:
        """Get a doctor, raising NotFoundError if missing"""
        doctor = self.repo.find_by_id(self.db, doctor_id)
        if not doctor:
            raise NotFoundError(f"Doctor with id '{doctor_id}' not found.")
        return DoctorDTO.model_validate(doctor)

    def exists(self, doctor_id: int) -> bool:
        return self.repo.exists_by_id(self.db, doctor_id)

    @cached(DOCTORS_PAGE, model=PageDTO[DoctorDTO], key_builder=PageRequest.cache_key)
    def list_doctors(self, page_request: PageRequest) -> PageDTO[DoctorDTO]:
        """Get a page of doctors"""
        page = self.repo.page(self.db, page_request)
        page.content = [DoctorDTO.model_validate(d) for d in page.content]
        return to_page_dto(page, DoctorDTO)
