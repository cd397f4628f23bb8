from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall, quote_identifier
from .store import Predicate, RowStore

logger = logging.getLogger(__name__)

_COMPARATORS = {"eq": "=", "gte": ">=", "lte": "<="}


def build_where(filters: Sequence[Predicate]) -> tuple[str, list[Any]]:
    """Translate predicates into a parameterized WHERE clause (without the keyword)."""

    clauses: list[str] = []
    params: list[Any] = []

    for predicate in filters:
        clause, clause_params = _build_clause(predicate)
        clauses.append(clause)
        params.extend(clause_params)

    return " AND ".join(clauses), params


def _build_clause(predicate: Predicate) -> tuple[str, list[Any]]:
    if predicate.op == "or":
        parts: list[str] = []
        params: list[Any] = []
        for inner in predicate.value:
            clause, inner_params = _build_clause(inner)
            parts.append(clause)
            params.extend(inner_params)
        return "(" + " OR ".join(parts) + ")", params

    column = quote_identifier(predicate.column)
    if predicate.op == "is_null":
        return f"{column} IS NULL", []

    comparator = _COMPARATORS.get(predicate.op)
    if comparator is None:
        raise ValueError(f"Unsupported predicate op: {predicate.op!r}")
    return f"{column}{comparator}%s", [predicate.value]


class MySQLRowStore(RowStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        sql = f"SELECT * FROM {quote_identifier(table)}"
        where, params = build_where(filters)
        if where:
            sql += f" WHERE {where}"
        if order_by:
            sql += f" ORDER BY {quote_identifier(order_by)} {'DESC' if descending else 'ASC'}"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(sql, tuple(params))
                return fetchall(cur)
        except mysql.connector.Error as e:
            logger.error("select from %s failed: %s", table, e)
            raise StoreError(f"Could not load {table}") from e

    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[dict]:
        inserted: list[dict] = []
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                for row in rows:
                    columns = ", ".join(quote_identifier(c) for c in row)
                    placeholders = ", ".join(["%s"] * len(row))
                    cur.execute(
                        f"INSERT INTO {quote_identifier(table)}({columns}) VALUES({placeholders})",
                        tuple(row.values()),
                    )
                    saved = dict(row)
                    if "id" not in saved and cur.lastrowid:
                        saved["id"] = int(cur.lastrowid)
                    inserted.append(saved)
        except mysql.connector.Error as e:
            logger.error("insert into %s failed: %s", table, e)
            raise StoreError(f"Could not save {table}") from e
        return inserted

    def update(self, table: str, filters: Sequence[Predicate], patch: Mapping[str, Any]) -> int:
        if not patch:
            return 0
        if not filters:
            raise ValueError("Refusing to update without filters")

        assignments = ", ".join(f"{quote_identifier(c)}=%s" for c in patch)
        where, params = build_where(filters)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE {quote_identifier(table)} SET {assignments} WHERE {where}",
                    tuple(patch.values()) + tuple(params),
                )
                return int(cur.rowcount)
        except mysql.connector.Error as e:
            logger.error("update of %s failed: %s", table, e)
            raise StoreError(f"Could not update {table}") from e
