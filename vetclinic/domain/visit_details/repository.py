"""Visit details repository - Database operations for doctors' timing profiles"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import VisitDetails


class VisitDetailsRepository:
    """Repository for visit details database operations"""

    @staticmethod
    def find_by_doctor_id(db: Session, doctor_id: int) -> Optional[VisitDetails]:
        """Get the visit details owned by a doctor"""
        return db.query(VisitDetails).filter(VisitDetails.doctor_id == doctor_id).first()
