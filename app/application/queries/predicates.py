"""Composable query predicates.

Predicates are plain values describing a filter over an entity. They carry no
database knowledge: a persistence adapter translates them into its own query
language. Field and relation names are entity attribute names
(``fuel_type``, ``vehicles``...).
"""

from dataclasses import dataclass
from typing import Any

COMPARISON_OPERATORS = ("<", "<=", "==", "!=", ">=", ">")


class Predicate:
    """Base class of every predicate."""

    def __and__(self, other: "Predicate") -> "Predicate":
        return conjunction(self, other)


@dataclass(frozen=True)
class Always(Predicate):
    """Neutral predicate matching every row."""


@dataclass(frozen=True)
class Equals(Predicate):
    """Field equality, optionally case-insensitive for strings."""

    field: str
    value: Any
    ignore_case: bool = False


@dataclass(frozen=True)
class Contains(Predicate):
    """Case-insensitive substring match on a string field."""

    field: str
    value: str


@dataclass(frozen=True)
class In(Predicate):
    """Field membership in a fixed set of values."""

    field: str
    values: tuple


@dataclass(frozen=True)
class Join(Predicate):
    """Match rows having at least one related row satisfying a predicate.

    Each matching row is returned once, however many related rows match.
    """

    relation: str
    predicate: Predicate


@dataclass(frozen=True)
class SizeCompare(Predicate):
    """Compare the number of related rows with a constant."""

    relation: str
    operator: str
    value: int

    def __post_init__(self) -> None:
        if self.operator not in COMPARISON_OPERATORS:
            raise ValueError(f"Unsupported comparison operator: {self.operator}")


@dataclass(frozen=True)
class And(Predicate):
    """Conjunction of predicates."""

    predicates: tuple


def conjunction(*predicates: Predicate) -> Predicate:
    """
    Combine predicates with AND, dropping neutral ones.

    Args:
        *predicates: Predicates to combine

    Returns:
        Always() when nothing remains, the single remaining predicate, or an And
    """
    flattened: list[Predicate] = []
    for predicate in predicates:
        if isinstance(predicate, Always):
            continue
        if isinstance(predicate, And):
            flattened.extend(predicate.predicates)
        else:
            flattened.append(predicate)

    if not flattened:
        return Always()
    if len(flattened) == 1:
        return flattened[0]
    return And(tuple(flattened))


def is_blank(value: Any) -> bool:
    """Check if an optional filter value is absent."""
    return value is None or (isinstance(value, str) and not value.strip())
