"""Paged query execution."""

from typing import Callable, TypeVar

from sqlalchemy.orm import Query

from app.adapters.outbound.persistence.predicate_translator import to_order_by
from app.application.queries.pagination import Page, PageRequest

T = TypeVar("T")


def paginate(
    query: Query,
    model,
    page_request: PageRequest,
    sortable_fields: dict[str, str],
    to_entity: Callable[[object], T],
) -> Page[T]:
    """
    Run a query for one page and count the full result set.

    Args:
        query: Filtered query over the model
        model: ORM model class (used for ordering)
        page_request: Window and ordering
        sortable_fields: Whitelist of sortable fields
        to_entity: Model-to-entity converter

    Returns:
        Page of entities
    """
    order_by = to_order_by(model, page_request.sort, sortable_fields)
    total = query.order_by(None).count()
    rows = query.order_by(*order_by).offset(page_request.offset).limit(page_request.size).all()
    return Page(
        items=[to_entity(row) for row in rows],
        page_number=page_request.page,
        page_size=page_request.size,
        total_elements=total,
    )


def sortable(*attributes: str) -> dict[str, str]:
    """Build a sort whitelist accepting snake_case and camelCase names."""
    fields = {}
    for attribute in attributes:
        head, *tail = attribute.split("_")
        fields[attribute] = attribute
        fields[head + "".join(part.capitalize() for part in tail)] = attribute
    return fields
