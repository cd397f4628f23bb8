from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today_local
from ..core.enums import Role
from ..leave.repository import LeaveRequestRepository
from ..notifications.repository import NotificationRepository
from ..users.repository import EmployeeRepository


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    today_attendance: int
    pending_leaves: int
    unread_notifications: int

    def to_dict(self) -> dict:
        return asdict(self)


class DashboardService:
    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRequestRepository,
        notifications: NotificationRepository,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._notifications = notifications

    def stats(self, *, user_id: int, role: Role, today: Optional[date] = None) -> DashboardStats:
        unread = self._notifications.count_unread(int(user_id))
        if role == Role.ADMIN:
            return DashboardStats(
                total_employees=len(self._employees.list_active()),
                today_attendance=self._attendance.count_for_date(today or today_local()),
                pending_leaves=self._leaves.count_pending(),
                unread_notifications=unread,
            )
        return DashboardStats(
            total_employees=0,
            today_attendance=0,
            pending_leaves=self._leaves.count_pending(user_id=int(user_id)),
            unread_notifications=unread,
        )
