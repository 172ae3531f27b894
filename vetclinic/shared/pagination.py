"""Pagination primitives shared by every listing endpoint"""

import math
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from fastapi import Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Query as OrmQuery

from ..config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..exceptions import InvalidArgumentError

T = TypeVar("T")


class PageRequest(BaseModel):
    """Zero-based page index, page size and optional sort ("field" or "field,desc")"""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0)
    size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    sort: Optional[str] = None

    def cache_key(self) -> str:
        return f"{self.page}:{self.size}:{self.sort or 'unsorted'}"


@dataclass
class Page(Generic[T]):
    """A page as returned by a repository"""

    content: list[T]
    page: int
    size: int
    total_elements: int


class PageDTO(BaseModel, Generic[T]):
    """Immutable snapshot of a query page"""

    model_config = ConfigDict(frozen=True)

    total_pages: int
    total_elements: int
    first: bool
    last: bool
    empty: bool
    content: tuple[T, ...]


def to_page_dto(page: Page, item_type: Optional[type] = None) -> PageDTO:
    """Map a repository page to its DTO; `item_type` parametrizes PageDTO"""
    dto_cls = PageDTO[item_type] if item_type is not None else PageDTO
    total_pages = math.ceil(page.total_elements / page.size) if page.size else 1
    return dto_cls(
        total_pages=total_pages,
        total_elements=page.total_elements,
        first=page.page == 0,
        last=page.page + 1 >= total_pages,
        empty=not page.content,
        content=tuple(page.content),
    )


def parse_sort(sort: Optional[str], allowed: dict) -> list:
    """
    Turn a sort expression into ORDER BY clauses.

    Args:
        sort: "field" or "field,asc" / "field,desc"
        allowed: mapping of public field names to mapped columns

    Raises:
        InvalidArgumentError: unknown field or direction
    """
    if not sort:
        return []

    field_name, _, direction = sort.partition(",")
    field_name = field_name.strip()
    direction = (direction.strip() or "asc").lower()

    column = allowed.get(field_name)
    if column is None:
        raise InvalidArgumentError(
            f"Cannot sort by '{field_name}'. Allowed fields: {', '.join(sorted(allowed))}."
        )
    if direction not in ("asc", "desc"):
        raise InvalidArgumentError(f"Sort direction must be 'asc' or 'desc', got '{direction}'.")

    return [column.desc() if direction == "desc" else column.asc()]


def paginate(query: OrmQuery, page_request: PageRequest, allowed_sort: dict, default_order) -> Page:
    """Apply sorting, offset and limit to `query` and count its total rows"""
    order_by = parse_sort(page_request.sort, allowed_sort) or [default_order]
    total = query.order_by(None).count()
    rows = (
        query.order_by(*order_by)
        .offset(page_request.page * page_request.size)
        .limit(page_request.size)
        .all()
    )
    return Page(content=rows, page=page_request.page, size=page_request.size, total_elements=total)


def get_page_request(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
    sort: Optional[str] = Query(None, description="Sort field, optionally followed by ',asc' or ',desc'"),
) -> PageRequest:
    """Dependency building a PageRequest from query parameters"""
    return PageRequest(page=page, size=size, sort=sort)
