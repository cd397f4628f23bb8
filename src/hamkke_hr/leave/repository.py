from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveBalance, LeaveRequest


class LeaveRequestRepository(Protocol):
    def create(self, *, user_id: int, start_date: date, end_date: date, reason: str, requested_at: datetime) -> int:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        """Newest request first."""

        raise NotImplementedError

    def list_all(self) -> Sequence[LeaveRequest]:
        """Every request with ``employee_name`` filled in."""

        raise NotImplementedError

    def list_approved_overlapping(self, *, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def count_pending(self, *, user_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def decide(self, *, request_id: int, status: LeaveStatus, decided_by: int, decided_at: datetime) -> bool:
        """Move a pending request to ``status``; False if it was not pending."""

        raise NotImplementedError


class LeaveBalanceReader(Protocol):
    def list_balances(self) -> Sequence[LeaveBalance]:
        raise NotImplementedError

    def get_balance(self, user_id: int) -> Optional[LeaveBalance]:
        raise NotImplementedError


class LeaveLedgerWriter(Protocol):
    """The only write access to the leave ledger."""

    def set_earned_days(self, user_id: int, days: int) -> None:
        raise NotImplementedError

    def set_bonus_days(self, user_id: int, days: int) -> None:
        raise NotImplementedError
