"""Customer repository - Database operations for customers"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Customer
from ...shared.pagination import Page, PageRequest, paginate

SORTABLE_FIELDS = {
    "id": Customer.id,
    "name": Customer.name,
    "surname": Customer.surname,
}


class CustomerRepository:
    """Repository for customer database operations"""

    @staticmethod
    def find_by_id(db: Session, customer_id: int) -> Optional[Customer]:
        """Get a customer by ID"""
        return db.query(Customer).filter(Customer.id == customer_id).first()

    @staticmethod
    def find_pin_by_id(db: Session, customer_id: int) -> Optional[int]:
        """Get only the stored PIN of a customer"""
        return db.query(Customer.pin).filter(Customer.id == customer_id).scalar()

    @staticmethod
    def page(db: Session, page_request: PageRequest) -> Page:
        """Get a page of customers"""
        return paginate(db.query(Customer), page_request, SORTABLE_FIELDS, Customer.id.asc())
