"""Visit details service - Timing profile lookups"""

from sqlalchemy.orm import Session

from ...cache import DOCTOR_TIME_DETAILS, Cache, cached
from ...exceptions import NotFoundError
from .repository import VisitDetailsRepository
from .schemas import TimingDetailsDTO


class VisitDetailsService:
    def __init__(self, db: Session, cache: Cache):
        self.db = db
        self.cache = cache
        self.repo = VisitDetailsRepository()

    @cached(DOCTOR_TIME_DETAILS, model=TimingDetailsDTO)
    def get_timing_details(self, doctor_id: int) -> TimingDetailsDTO:
        """Get a doctor's timing profile, raising NotFoundError if missing"""
        visit_details = self.repo.find_by_doctor_id(self.db, doctor_id)
        if not visit_details:
            raise NotFoundError(f"Timing details not found for doctor with id '{doctor_id}'.")
        return TimingDetailsDTO.model_validate(visit_details)
