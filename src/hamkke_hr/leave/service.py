from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..common.datetime_utils import coerce_date, date_span, month_bounds, now_local
from ..common.validators import require_int, require_non_empty
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .accrual import back_solve_earned_days, remaining, total_earned
from .model import LeaveBalance, LeaveCalendarEntry, LeaveRequest
from .projector import project_leave_calendar
from .repository import LeaveBalanceReader, LeaveLedgerWriter, LeaveRequestRepository

logger = logging.getLogger(__name__)

DateInput = Union[date, str, None]


@dataclass(frozen=True)
class LeaveCalendarMonth:
    year: int
    month: int
    days: dict[str, list[LeaveCalendarEntry]]


def balance_to_dict(balance: LeaveBalance) -> dict:
    return {
        "user_id": balance.user_id,
        "name": balance.name,
        "hire_date": balance.hire_date.isoformat() if balance.hire_date else None,
        "total_months": balance.total_months,
        "earned_days": balance.earned_days,
        "bonus_days": balance.bonus_days,
        "used_days": balance.used_days,
        "total_earned_days": total_earned(balance),
        "remaining_days": remaining(balance),
    }


class LeaveService:
    """Use cases around leave requests and the leave ledger.

    Ledger writes go through three separate entry points so that the admin
    check sits in one obvious place per operation.
    """

    def __init__(
        self,
        requests: LeaveRequestRepository,
        balances: LeaveBalanceReader,
        ledger: LeaveLedgerWriter,
    ):
        self._requests = requests
        self._balances = balances
        self._ledger = ledger

    @staticmethod
    def _parse_date(value: DateInput, field_name: str) -> date:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{field_name} is required")
        try:
            return coerce_date(value)
        except ValueError:
            raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")

    # Requests

    def submit_request(
        self,
        *,
        user_id: int,
        start_date: DateInput,
        end_date: DateInput,
        reason: Optional[str],
        now: Optional[datetime] = None,
    ) -> int:
        start = self._parse_date(start_date, "Start date")
        end = self._parse_date(end_date, "End date")
        if start > end:
            raise ValidationError("Start date cannot be after the end date")

        reason = require_non_empty(reason, "Reason")
        request_id = self._requests.create(
            user_id=int(user_id),
            start_date=start,
            end_date=end,
            reason=reason,
            requested_at=now or now_local(),
        )
        logger.info("leave request %s submitted by user=%s (%s..%s)", request_id, user_id, start, end)
        return request_id

    def _decide(self, *, current_role: Role, admin_user_id: int, request_id: int, status: LeaveStatus, now: Optional[datetime]) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can decide leave requests")

        req = self._requests.get_by_id(int(request_id))
        if not req:
            raise ValidationError("Leave request not found")
        if req.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been decided")

        ok = self._requests.decide(
            request_id=int(request_id),
            status=status,
            decided_by=int(admin_user_id),
            decided_at=now or now_local(),
        )
        if not ok:
            raise ValidationError("Leave request has already been decided")
        logger.info("leave request %s %s by user=%s", request_id, status.value, admin_user_id)

    def approve(self, *, current_role: Role, admin_user_id: int, request_id: int, now: Optional[datetime] = None) -> None:
        self._decide(
            current_role=current_role,
            admin_user_id=admin_user_id,
            request_id=request_id,
            status=LeaveStatus.APPROVED,
            now=now,
        )

    def deny(self, *, current_role: Role, admin_user_id: int, request_id: int, now: Optional[datetime] = None) -> None:
        self._decide(
            current_role=current_role,
            admin_user_id=admin_user_id,
            request_id=request_id,
            status=LeaveStatus.DENIED,
            now=now,
        )

    def list_my_requests(self, user_id: int) -> list[LeaveRequest]:
        return list(self._requests.list_for_user(int(user_id)))

    def list_admin_view(self, *, search: str = "") -> list[LeaveRequest]:
        q = (search or "").strip().lower()

        def hit(req: LeaveRequest) -> bool:
            if not q:
                return True
            return (
                q in (req.employee_name or "").lower()
                or q in str(req.user_id)
                or q in (req.reason or "").lower()
            )

        found = [r for r in self._requests.list_all() if hit(r)]
        found.sort(key=lambda r: (r.employee_name or "").lower())
        return found

    # Balances and ledger

    def list_balances(self, *, search: str = "") -> list[LeaveBalance]:
        q = (search or "").strip().lower()
        return [b for b in self._balances.list_balances() if not q or q in (b.name or "").lower()]

    def get_balance(self, user_id: int) -> LeaveBalance:
        balance = self._balances.get_balance(int(user_id))
        if not balance:
            raise ValidationError("No leave balance for this employee")
        return balance

    def set_total_earned_days(self, *, current_role: Role, user_id: int, requested_total) -> int:
        """Admin edits the total; only the earned_days component is persisted."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can change leave days")

        requested_total = require_int(requested_total, "Total leave days")
        balance = self.get_balance(user_id)
        earned = back_solve_earned_days(
            requested_total,
            total_months=balance.total_months,
            bonus_days=balance.bonus_days,
        )
        self._ledger.set_earned_days(int(user_id), earned)
        logger.info("ledger: user=%s earned_days=%s (total %s)", user_id, earned, requested_total)
        return earned

    def set_bonus_days(self, *, current_role: Role, user_id: int, bonus_days) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can change leave days")

        bonus_days = require_int(bonus_days, "Bonus days")
        self._ledger.set_bonus_days(int(user_id), bonus_days)
        logger.info("ledger: user=%s bonus_days=%s", user_id, bonus_days)

    def reset_bonus_days(self, *, current_role: Role, user_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can change leave days")

        self._ledger.set_bonus_days(int(user_id), 0)
        logger.info("ledger: user=%s bonus_days reset", user_id)

    # Calendar

    def calendar_for_month(self, year: int, month: int) -> LeaveCalendarMonth:
        try:
            first, last = month_bounds(int(year), int(month))
        except ValueError:
            raise ValidationError("Invalid month")

        requests = self._requests.list_approved_overlapping(start_date=first, end_date=last)
        days: dict[str, list[LeaveCalendarEntry]] = {day: [] for day in date_span(first, last)}
        for day, entries in project_leave_calendar(requests).items():
            if day in days:
                days[day].extend(entries)
        return LeaveCalendarMonth(year=int(year), month=int(month), days=days)
