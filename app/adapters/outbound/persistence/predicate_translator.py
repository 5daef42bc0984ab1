"""Translation of query predicates into SQLAlchemy expressions."""

import operator

from sqlalchemy import and_, func, select, true
from sqlalchemy.orm import RelationshipProperty

from app.application.queries.pagination import SortDirection, SortOrder
from app.application.queries.predicates import (
    Always,
    And,
    Contains,
    Equals,
    In,
    Join,
    Predicate,
    SizeCompare,
)
from app.domain.exceptions import InvalidArgumentError

_OPERATORS = {
    "<": operator.lt,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
    ">=": operator.ge,
    ">": operator.gt,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _column(model, field: str):
    attribute = getattr(model, field, None)
    if attribute is None or isinstance(getattr(attribute, "property", None), RelationshipProperty):
        raise InvalidArgumentError(f"Champ de recherche inconnu: '{field}'")
    return attribute


def _relationship(model, relation: str):
    attribute = getattr(model, relation, None)
    if attribute is None or not isinstance(
        getattr(attribute, "property", None), RelationshipProperty
    ):
        raise InvalidArgumentError(f"Relation inconnue: '{relation}'")
    return attribute


def to_sql(model, predicate: Predicate):
    """
    Render a predicate as a boolean SQL expression over an ORM model.

    Joins become EXISTS sub-queries so each root row appears once, and size
    comparisons become correlated COUNT sub-queries.

    Args:
        model: ORM model class the predicate applies to
        predicate: Predicate to render

    Returns:
        SQLAlchemy boolean expression
    """
    if isinstance(predicate, Always):
        return true()

    if isinstance(predicate, And):
        return and_(*(to_sql(model, part) for part in predicate.predicates))

    if isinstance(predicate, Equals):
        column = _column(model, predicate.field)
        if predicate.ignore_case and isinstance(predicate.value, str):
            return func.lower(column) == predicate.value.lower()
        return column == predicate.value

    if isinstance(predicate, Contains):
        pattern = f"%{_escape_like(predicate.value.lower())}%"
        return func.lower(_column(model, predicate.field)).like(pattern, escape="\\")

    if isinstance(predicate, In):
        return _column(model, predicate.field).in_(list(predicate.values))

    if isinstance(predicate, Join):
        relation = _relationship(model, predicate.relation)
        target = relation.property.mapper.class_
        condition = to_sql(target, predicate.predicate)
        if relation.property.uselist:
            return relation.any(condition)
        return relation.has(condition)

    if isinstance(predicate, SizeCompare):
        relation = _relationship(model, predicate.relation)
        target = relation.property.mapper.class_
        count = (
            select(func.count())
            .select_from(target)
            .where(relation.property.primaryjoin)
            .correlate(model)
            .scalar_subquery()
        )
        return _OPERATORS[predicate.operator](count, predicate.value)

    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")


def to_order_by(model, orders: tuple[SortOrder, ...], sortable_fields: dict[str, str]) -> list:
    """
    Render sort orders, accepting only whitelisted fields.

    Args:
        model: ORM model class
        orders: Requested sort orders (field names as exposed in JSON)
        sortable_fields: Mapping from exposed field name to model attribute

    Returns:
        List of ORDER BY clauses, always ending with the primary key for stable pages

    Raises:
        InvalidArgumentError: If a field is not sortable
    """
    clauses = []
    for order in orders:
        attribute_name = sortable_fields.get(order.field)
        if attribute_name is None:
            raise InvalidArgumentError(f"Propriété de tri inconnue: '{order.field}'")
        column = getattr(model, attribute_name)
        clauses.append(column.desc() if order.direction == SortDirection.DESC else column.asc())
    clauses.append(model.id.asc())
    return clauses
