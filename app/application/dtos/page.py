"""Paged response DTO."""

from typing import Generic, TypeVar

from app.application.dtos.base import DTO
from app.application.queries.pagination import Page

T = TypeVar("T")


class PageResponse(DTO, Generic[T]):
    """Serialized page: {items, pageNumber, pageSize, totalElements, totalPages}."""

    items: list[T]
    page_number: int
    page_size: int
    total_elements: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page[T]) -> "PageResponse[T]":
        return cls(
            items=page.items,
            page_number=page.page_number,
            page_size=page.page_size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
        )
