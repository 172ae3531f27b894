"""Customer service - Customer lookups and listing"""

import logging

from sqlalchemy.orm import Session

from ...cache import CUSTOMER, CUSTOMERS_PAGE, Cache, cached
from ...exceptions import NotFoundError
from ...shared.pagination import PageDTO, PageRequest, to_page_dto
from .repository import CustomerRepository
from .schemas import CustomerDTO, CustomerResponse

logger = logging.getLogger(__name__)


def customer_not_found(customer_id: int) -> NotFoundError:
    return NotFoundError(f"Customer with id '{customer_id}' not found.")


class CustomerService:
    """Service layer for customer lookups"""

    def __init__(self, db: Session, cache: Cache):
        self.db = db
        self.cache = cache
        self.repo = CustomerRepository()

    @cached(CUSTOMER, model=CustomerDTO)
    def get_customer(self, customer_id: int) -> CustomerDTO:
        """Get a customer, raising NotFoundError if missing"""
        customer = self.repo.find_by_id(self.db, customer_id)
        if not customer:
            raise customer_not_found(customer_id)
        return CustomerDTO.model_validate(customer)

    def get_pin(self, customer_id: int) -> int:
        """Get the stored PIN of a customer, raising NotFoundError if missing"""
        pin = self.repo.find_pin_by_id(self.db, customer_id)
        if pin is None:
            raise customer_not_found(customer_id)
        return pin

    @cached(CUSTOMERS_PAGE, model=PageDTO[CustomerResponse], key_builder=PageRequest.cache_key)
    def list_customers(self, page_request: PageRequest) -> PageDTO[CustomerResponse]:
        """Get a page of customers"""
        page = self.repo.page(self.db, page_request)
        page.content = [CustomerResponse.model_validate(c) for c in page.content]
        return to_page_dto(page, CustomerResponse)
