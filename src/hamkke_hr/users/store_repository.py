from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..core.enums import EmployeeState, Role
from ..database.store import RowStore, any_of, eq, is_null
from .model import Employee
from .repository import EmployeeRepository

TABLE = "users"

# Rows flagged deleted never leave this module.
_ACTIVE = any_of(is_null("deleted"), eq("deleted", False))


def _role(value) -> Role:
    try:
        return Role(value or Role.EMPLOYEE.value)
    except ValueError:
        return Role.EMPLOYEE


def _to_employee(row: dict) -> Employee:
    hire_date = row.get("hire_date")
    return Employee(
        user_id=int(row["id"]),
        name=row.get("name"),
        email=row.get("email") or "",
        department=row.get("department"),
        role=_role(row.get("role")),
        position=row.get("position"),
        hire_date=coerce_date(hire_date) if hire_date else None,
        state=EmployeeState.DELETED if row.get("deleted") else EmployeeState.ACTIVE,
    )


class StoreEmployeeRepository(EmployeeRepository):
    def __init__(self, store: RowStore):
        self._store = store

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        rows = self._store.select(TABLE, [eq("id", int(user_id)), _ACTIVE], limit=1)
        return _to_employee(rows[0]) if rows else None

    def list_active(self) -> Sequence[Employee]:
        return [_to_employee(r) for r in self._store.select(TABLE, [_ACTIVE], order_by="name")]

    def set_role(self, user_id: int, role: Role) -> bool:
        return self._store.update(TABLE, [eq("id", int(user_id)), _ACTIVE], {"role": role.value}) > 0

    def mark_deleted(self, user_id: int) -> bool:
        return self._store.update(TABLE, [eq("id", int(user_id)), _ACTIVE], {"deleted": True}) > 0
