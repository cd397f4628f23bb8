from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import span_days
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    start_date: date
    end_date: date
    status: LeaveStatus
    reason: Optional[str]
    requested_at: Optional[datetime]
    approved_at: Optional[datetime] = None
    approved_by: Optional[int] = None
    employee_name: Optional[str] = None

    @property
    def days(self) -> int:
        return span_days(self.start_date, self.end_date)


@dataclass(frozen=True)
class LeaveBalance:
    """Read-model over tenure accrual plus the leave ledger.

    Totals are derived by ``leave.accrual``; the remaining figure is never
    read from or written to the store.
    """

    user_id: int
    name: Optional[str]
    hire_date: Optional[date]
    total_months: int
    earned_days: int
    bonus_days: int
    used_days: int


@dataclass(frozen=True)
class LeaveCalendarEntry:
    user_id: int
    name: str
