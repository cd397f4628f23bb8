from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Implementations only ever return active employees.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        raise NotImplementedError

    def set_role(self, user_id: int, role: Role) -> bool:
        raise NotImplementedError

    def mark_deleted(self, user_id: int) -> bool:
        raise NotImplementedError
