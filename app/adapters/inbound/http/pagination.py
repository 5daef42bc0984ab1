"""Query parameters shared by paged endpoints."""

from fastapi import Query

from app.application.queries.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PageRequest


def page_request_params(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
    sort: list[str] = Query(default=[], description="field[,asc|desc], repeatable"),
) -> PageRequest:
    """Build a PageRequest from ?page=&size=&sort= query parameters."""
    return PageRequest.of(page, size, tuple(sort))
