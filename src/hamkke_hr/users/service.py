from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Employee
from .repository import EmployeeRepository
from .search import ROSTER_FIELDS, matches_query, sort_by_name

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: employee roster and role management (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get_profile(self, user_id: int) -> Employee:
        employee = self._employees.get_by_id(int(user_id))
        if not employee:
            raise ValidationError("Employee not found")
        return employee

    def roster(self, *, search: str = "") -> list[Employee]:
        found = [e for e in self._employees.list_active() if matches_query(e, search, fields=ROSTER_FIELDS)]
        return sort_by_name(found)

    def change_role(self, *, current_role: Role, user_id: int, new_role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can change roles")

        try:
            role = Role(new_role)
        except ValueError:
            raise ValidationError(f"Unknown role: {new_role}")

        self.get_profile(user_id)
        if not self._employees.set_role(int(user_id), role):
            raise ValidationError("Role change failed")
        logger.info("role of user=%s set to %s", user_id, role.value)

    def delete_employee(self, *, current_role: Role, user_id: int, acting_user_id: Optional[int] = None) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can delete employees")

        employee = self.get_profile(user_id)
        if employee.is_admin:
            raise ValidationError("Admin accounts cannot be deleted")

        if not self._employees.mark_deleted(int(user_id)):
            raise ValidationError("Delete failed")
        logger.info("user=%s soft-deleted by user=%s", user_id, acting_user_id)
