from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Sequence


@dataclass(frozen=True)
class Predicate:
    """A filter on one named column.

    ``op`` is one of ``eq``, ``gte``, ``lte``, ``is_null`` or ``or``; for
    ``or`` the operands live in ``value`` as a tuple of predicates and
    ``column`` is empty.
    """

    column: str
    op: str
    value: Any = None


def eq(column: str, value: Any) -> Predicate:
    return Predicate(column, "eq", value)


def gte(column: str, value: Any) -> Predicate:
    return Predicate(column, "gte", value)


def lte(column: str, value: Any) -> Predicate:
    return Predicate(column, "lte", value)


def is_null(column: str) -> Predicate:
    return Predicate(column, "is_null")


def any_of(*predicates: Predicate) -> Predicate:
    return Predicate("", "or", tuple(predicates))


def comparable_value(value: Any) -> Any:
    # Dates and timestamps are compared on their ISO text so rows holding
    # strings and rows holding date objects order the same way.
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def matches(row: Mapping[str, Any], predicate: Predicate) -> bool:
    if predicate.op == "or":
        return any(matches(row, p) for p in predicate.value)

    current = row.get(predicate.column)
    if predicate.op == "is_null":
        return current is None
    if predicate.op == "eq":
        return current == predicate.value or (
            current is not None and comparable_value(current) == comparable_value(predicate.value)
        )
    if current is None:
        return False
    if predicate.op == "gte":
        return comparable_value(current) >= comparable_value(predicate.value)
    if predicate.op == "lte":
        return comparable_value(current) <= comparable_value(predicate.value)
    raise ValueError(f"Unsupported predicate op: {predicate.op!r}")


class RowStore(Protocol):
    """Generic access to the external relational store.

    Every method raises ``StoreError`` when the backend fails.
    """

    def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[dict]:
        """Insert rows and return them with their generated ``id``."""

        raise NotImplementedError

    def update(self, table: str, filters: Sequence[Predicate], patch: Mapping[str, Any]) -> int:
        """Apply ``patch`` to matching rows; returns the number of rows changed."""

        raise NotImplementedError
