from __future__ import annotations

from typing import Iterable, Sequence

from .model import Employee

ROSTER_FIELDS = ("name", "email", "department", "position")
REPORT_FIELDS = ("name", "email", "department")


def matches_query(employee: Employee, query: str, *, fields: Sequence[str] = REPORT_FIELDS) -> bool:
    """Case-insensitive substring match on any of ``fields``; blank query matches all."""

    q = (query or "").strip().lower()
    if not q:
        return True
    return any(q in (getattr(employee, f) or "").lower() for f in fields)


def sort_by_name(employees: Iterable[Employee]) -> list[Employee]:
    return sorted(employees, key=lambda e: (e.name or "").lower())
