from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import EmployeeState, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object; soft deletion is the ``state`` tag, set once when
    rows are read from the store.
    """

    user_id: int
    name: Optional[str]
    email: str
    department: Optional[str]
    role: Role
    position: Optional[str] = None
    hire_date: Optional[date] = None
    state: EmployeeState = EmployeeState.ACTIVE

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def display_name(self) -> str:
        return self.name or self.email
