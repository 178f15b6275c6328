"""
Filter criteria as a small expression tree.

    where("tracking_code").contains("AB") & where("invoice_id").is_null()

Criteria never carry SQL text. `CriteriaTranslator` renders them into
SQLAlchemy expressions bound to one (aliased) table, converting each value to
the column's declared type on the way.
"""

import enum
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from pydantic.alias_generators import to_snake
from sqlalchemy import Table, and_, or_

from store.errors import InvalidCriteriaError
from store.repositories.converter import ColumnConverter, converter as default_converter


class Operator(str, enum.Enum):
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    IN = "in"
    NOT_IN = "notIn"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesNotContain"
    SPECIFIED = "specified"

    @classmethod
    def parse(cls, name: str) -> "Operator":
        for op in cls:
            if op.value.lower() == (name or "").lower():
                return op
        raise InvalidCriteriaError(f"Unknown filter operator: {name!r}")


class Criteria:
    def __and__(self, other: "Criteria") -> "Criteria":
        return Group("and", (self, other))

    def __or__(self, other: "Criteria") -> "Criteria":
        return Group("or", (self, other))


@dataclass(frozen=True)
class Criterion(Criteria):
    field: str
    operator: Operator
    value: Any = None


@dataclass(frozen=True)
class Group(Criteria):
    combinator: str
    parts: Tuple[Criteria, ...]


def all_of(*parts: Criteria) -> Optional[Criteria]:
    parts = tuple(p for p in parts if p is not None)
    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]
    return Group("and", parts)


class FieldCriteria:
    def __init__(self, field: str):
        self.field = field

    def _c(self, op: Operator, value=None) -> Criterion:
        return Criterion(self.field, op, value)

    def is_(self, value):
        return self._c(Operator.EQUALS, value)

    def not_(self, value):
        return self._c(Operator.NOT_EQUALS, value)

    def greater_than(self, value):
        return self._c(Operator.GREATER_THAN, value)

    def greater_than_or_equal(self, value):
        return self._c(Operator.GREATER_THAN_OR_EQUAL, value)

    def less_than(self, value):
        return self._c(Operator.LESS_THAN, value)

    def less_than_or_equal(self, value):
        return self._c(Operator.LESS_THAN_OR_EQUAL, value)

    def in_(self, *values):
        return self._c(Operator.IN, tuple(values))

    def not_in(self, *values):
        return self._c(Operator.NOT_IN, tuple(values))

    def contains(self, value: str):
        return self._c(Operator.CONTAINS, value)

    def does_not_contain(self, value: str):
        return self._c(Operator.DOES_NOT_CONTAIN, value)

    def is_null(self):
        return self._c(Operator.SPECIFIED, False)

    def is_not_null(self):
        return self._c(Operator.SPECIFIED, True)


def where(field: str) -> FieldCriteria:
    return FieldCriteria(field)


def column_name(field: str) -> str:
    """Accept both `trackingCode` and `tracking_code`."""
    return to_snake(field.strip())


class CriteriaTranslator:
    def __init__(
        self,
        table: Table,
        column_types: Mapping[str, type],
        converter: Optional[ColumnConverter] = None,
    ):
        self.table = table
        self.column_types = column_types
        self.converter = converter or default_converter

    def column(self, field: str):
        name = column_name(field)
        if name not in self.column_types:
            raise InvalidCriteriaError(f"Unknown field: {field!r}")
        return self.table.c[name]

    def translate(self, criteria: Optional[Criteria]):
        """Return a WHERE clause, or None when there is nothing to filter on."""
        if criteria is None:
            return None
        if isinstance(criteria, Group):
            clauses = [c for c in (self.translate(p) for p in criteria.parts) if c is not None]
            if not clauses:
                return None
            if len(clauses) == 1:
                return clauses[0]
            return and_(*clauses) if criteria.combinator == "and" else or_(*clauses)
        if isinstance(criteria, Criterion):
            return self._criterion(criteria)
        raise InvalidCriteriaError(f"Unsupported criteria: {criteria!r}")

    def _value(self, field: str, value):
        target = self.column_types[column_name(field)]
        try:
            return self.converter.convert(value, target)
        except (TypeError, ValueError, ArithmeticError) as exc:
            raise InvalidCriteriaError(f"Invalid value for {field!r}: {value!r}") from exc

    def _criterion(self, c: Criterion):
        col = self.column(c.field)
        op = c.operator
        if op is Operator.SPECIFIED:
            specified = self.converter.convert(c.value, bool)
            return col.is_not(None) if specified else col.is_(None)
        if op in (Operator.IN, Operator.NOT_IN):
            values = [self._value(c.field, v) for v in (c.value or ())]
            return col.in_(values) if op is Operator.IN else col.not_in(values)
        if op in (Operator.CONTAINS, Operator.DOES_NOT_CONTAIN):
            if self.column_types[column_name(c.field)] is not str:
                raise InvalidCriteriaError(
                    f"{op.value} only applies to text fields, not {c.field!r}"
                )
            if c.value is None:
                raise InvalidCriteriaError(f"{op.value} needs a value for {c.field!r}")
            clause = col.contains(str(c.value), autoescape=True)
            return clause if op is Operator.CONTAINS else ~clause
        value = self._value(c.field, c.value)
        if value is None:
            return col.is_(None) if op is Operator.EQUALS else col.is_not(None)
        if op is Operator.EQUALS:
            return col == value
        if op is Operator.NOT_EQUALS:
            return col != value
        if op is Operator.GREATER_THAN:
            return col > value
        if op is Operator.GREATER_THAN_OR_EQUAL:
            return col >= value
        if op is Operator.LESS_THAN:
            return col < value
        if op is Operator.LESS_THAN_OR_EQUAL:
            return col <= value
        raise InvalidCriteriaError(f"Unsupported operator: {op!r}")
