from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence

from .memory_views import DEFAULT_VIEWS
from .store import Predicate, RowStore, comparable_value, matches


class InMemoryRowStore(RowStore):
    """Dict-backed row store used by the testing configuration.

    Tables are created on first write; ``id`` values are assigned per table
    when a row does not bring its own. Views are computed from the tables on
    every select and are read-only.
    """

    def __init__(
        self,
        tables: Optional[dict[str, list[dict]]] = None,
        *,
        views: Optional[dict[str, Callable[["InMemoryRowStore"], list[dict]]]] = None,
    ):
        self._tables: dict[str, list[dict]] = {name: [dict(r) for r in rows] for name, rows in (tables or {}).items()}
        self._views = dict(DEFAULT_VIEWS if views is None else views)
        self._next_id: dict[str, int] = {}

    def rows(self, table: str) -> list[dict]:
        return self._tables.setdefault(table, [])

    def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        source = self._views[table](self) if table in self._views else self.rows(table)
        found = [dict(r) for r in source if all(matches(r, p) for p in filters)]
        if order_by:
            # NULLs first ascending, like MySQL.
            found.sort(
                key=lambda r: (r.get(order_by) is not None, comparable_value(r.get(order_by)) if r.get(order_by) is not None else ""),
                reverse=descending,
            )
        if limit is not None:
            found = found[: int(limit)]
        return found

    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[dict]:
        self._require_table(table)
        stored = self.rows(table)
        inserted: list[dict] = []
        for row in rows:
            saved = dict(row)
            if "id" not in saved:
                saved["id"] = self._allocate_id(table)
            stored.append(saved)
            inserted.append(dict(saved))
        return inserted

    def update(self, table: str, filters: Sequence[Predicate], patch: Mapping[str, Any]) -> int:
        self._require_table(table)
        if not filters:
            raise ValueError("Refusing to update without filters")
        changed = 0
        for row in self.rows(table):
            if all(matches(row, p) for p in filters):
                row.update(patch)
                changed += 1
        return changed

    def _require_table(self, table: str) -> None:
        if table in self._views:
            raise ValueError(f"{table} is a read-only view")

    def _allocate_id(self, table: str) -> int:
        if table not in self._next_id:
            existing = [int(r["id"]) for r in self.rows(table) if isinstance(r.get("id"), int)]
            self._next_id[table] = max(existing, default=0) + 1
        value = self._next_id[table]
        self._next_id[table] = value + 1
        return value
