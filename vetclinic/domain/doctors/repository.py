"""Doctor repository - Database operations for doctors"""

from typing import Optional

from sqlalchemy import exists
from sqlalchemy.orm import Session

from ...models import Doctor
from ...shared.pagination import Page, PageRequest, paginate

SORTABLE_FIELDS = {
    "id": Doctor.id,
    "title": Doctor.title,
    "name": Doctor.name,
    "surname": Doctor.surname,
}


class DoctorRepository:
    """Repository for doctor database operations"""

    @staticmethod
    def find_by_id(db: Session, doctor_id: int) -> Optional[Doctor]:
        """Get a doctor by ID"""
        return db.query(Doctor).filter(Doctor.id == doctor_id).first()

    @staticmethod
    def exists_by_id(db: Session, doctor_id: int) -> bool:
        return db.query(exists().where(Doctor.id == doctor_id)).scalar()

    @staticmethod
    def page(db: Session, page_request: PageRequest) -> Page:
        """Get a page of doctors"""
        return paginate(db.query(Doctor), page_request, SORTABLE_FIELDS, Doctor.id.asc())
