"""Pagination primitives shared by repositories and services."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Generic, TypeVar

from app.domain.exceptions import InvalidArgumentError

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 500


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class SortOrder:
    """Ordering on a single entity field."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def parse(cls, expression: str) -> "SortOrder":
        """
        Parse a "field[,asc|desc]" expression.

        Args:
            expression: Sort expression, e.g. "name,desc"

        Returns:
            SortOrder instance

        Raises:
            InvalidArgumentError: If the expression is empty or the direction is unknown
        """
        parts = [part.strip() for part in expression.split(",")]
        if not parts[0]:
            raise InvalidArgumentError(f"Critère de tri invalide: '{expression}'")
        if len(parts) == 1:
            return cls(parts[0])
        try:
            direction = SortDirection(parts[1].upper())
        except ValueError as exc:
            raise InvalidArgumentError(f"Direction de tri invalide: '{parts[1]}'") from exc
        return cls(parts[0], direction)


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page window with optional ordering."""

    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: tuple[SortOrder, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise InvalidArgumentError("Le numéro de page ne peut pas être négatif")
        if self.size < 1 or self.size > MAX_PAGE_SIZE:
            raise InvalidArgumentError(
                f"La taille de page doit être comprise entre 1 et {MAX_PAGE_SIZE}"
            )

    @property
    def offset(self) -> int:
        return self.page * self.size

    @classmethod
    def of(
        cls, page: int = 0, size: int = DEFAULT_PAGE_SIZE, sort: tuple[str, ...] = ()
    ) -> "PageRequest":
        """Build a page request from raw query values."""
        return cls(page, size, tuple(SortOrder.parse(expression) for expression in sort))

    def with_default_sort(self, *orders: SortOrder) -> "PageRequest":
        """Return a copy ordered by the given fields when no order was requested."""
        if self.sort:
            return self
        return PageRequest(self.page, self.size, tuple(orders))


@dataclass(frozen=True)
class Page(Generic[T]):
    """Window over a larger result set."""

    items: list[T]
    page_number: int
    page_size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_elements / self.page_size)

    def map(self, func: Callable[[T], R]) -> "Page[R]":
        """Transform every item, keeping the window metadata."""
        return Page(
            [func(item) for item in self.items],
            self.page_number,
            self.page_size,
            self.total_elements,
        )
