from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date, coerce_datetime, to_iso_date
from ..core.enums import LeaveStatus
from ..database.store import RowStore, eq, gte, lte
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveBalanceReader, LeaveLedgerWriter, LeaveRequestRepository

REQUESTS_TABLE = "leave_requests"
BALANCE_VIEW = "remaining_leaves"
LEDGER_TABLE = "leave_days"


def _status(value) -> LeaveStatus:
    # Older rows used 'rejected' for a denial.
    if value == "rejected":
        return LeaveStatus.DENIED
    return LeaveStatus(value or LeaveStatus.PENDING.value)


def _to_request(row: dict, names: Optional[dict[int, Optional[str]]] = None) -> LeaveRequest:
    approved_by = row.get("approved_by")
    user_id = int(row["user_id"])
    return LeaveRequest(
        request_id=int(row["id"]),
        user_id=user_id,
        start_date=coerce_date(row["start_date"]),
        end_date=coerce_date(row["end_date"]),
        status=_status(row.get("status")),
        reason=row.get("reason"),
        requested_at=coerce_datetime(row.get("requested_at")),
        approved_at=coerce_datetime(row.get("approved_at")),
        approved_by=int(approved_by) if approved_by is not None else None,
        employee_name=(names or {}).get(user_id),
    )


class StoreLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, store: RowStore):
        self._store = store

    def _names(self) -> dict[int, Optional[str]]:
        # The store has no joins; names are attached client-side.
        return {int(r["id"]): r.get("name") for r in self._store.select("users")}

    def create(self, *, user_id: int, start_date: date, end_date: date, reason: str, requested_at: datetime) -> int:
        saved = self._store.insert(
            REQUESTS_TABLE,
            [
                {
                    "user_id": int(user_id),
                    "start_date": to_iso_date(start_date),
                    "end_date": to_iso_date(end_date),
                    "reason": reason,
                    "status": LeaveStatus.PENDING.value,
                    "requested_at": requested_at,
                }
            ],
        )
        return int(saved[0]["id"])

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        rows = self._store.select(REQUESTS_TABLE, [eq("id", int(request_id))], limit=1)
        return _to_request(rows[0]) if rows else None

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        rows = self._store.select(
            REQUESTS_TABLE,
            [eq("user_id", int(user_id))],
            order_by="requested_at",
            descending=True,
        )
        return [_to_request(r) for r in rows]

    def list_all(self) -> Sequence[LeaveRequest]:
        names = self._names()
        rows = self._store.select(REQUESTS_TABLE, order_by="start_date", descending=True)
        return [_to_request(r, names) for r in rows]

    def list_approved_overlapping(self, *, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        names = self._names()
        rows = self._store.select(
            REQUESTS_TABLE,
            [
                eq("status", LeaveStatus.APPROVED.value),
                lte("start_date", to_iso_date(end_date)),
                gte("end_date", to_iso_date(start_date)),
            ],
            order_by="start_date",
        )
        return [_to_request(r, names) for r in rows]

    def count_pending(self, *, user_id: Optional[int] = None) -> int:
        filters = [eq("status", LeaveStatus.PENDING.value)]
        if user_id is not None:
            filters.append(eq("user_id", int(user_id)))
        return len(self._store.select(REQUESTS_TABLE, filters))

    def decide(self, *, request_id: int, status: LeaveStatus, decided_by: int, decided_at: datetime) -> bool:
        changed = self._store.update(
            REQUESTS_TABLE,
            [eq("id", int(request_id)), eq("status", LeaveStatus.PENDING.value)],
            {"status": status.value, "approved_by": int(decided_by), "approved_at": decided_at},
        )
        return changed > 0


def _to_balance(row: dict) -> LeaveBalance:
    hire_date = row.get("hire_date")
    return LeaveBalance(
        user_id=int(row["user_id"]),
        name=row.get("name"),
        hire_date=coerce_date(hire_date) if hire_date else None,
        total_months=int(row.get("total_months") or 0),
        earned_days=int(row.get("earned_days") or 0),
        bonus_days=int(row.get("bonus_days") or 0),
        used_days=int(row.get("used_days") or 0),
    )


class StoreLeaveBalanceReader(LeaveBalanceReader):
    """Reads the ``remaining_leaves`` view; its remaining column is ignored."""

    def __init__(self, store: RowStore):
        self._store = store

    def list_balances(self) -> Sequence[LeaveBalance]:
        return [_to_balance(r) for r in self._store.select(BALANCE_VIEW, order_by="name")]

    def get_balance(self, user_id: int) -> Optional[LeaveBalance]:
        rows = self._store.select(BALANCE_VIEW, [eq("user_id", int(user_id))], limit=1)
        return _to_balance(rows[0]) if rows else None


class StoreLeaveLedgerWriter(LeaveLedgerWriter):
    def __init__(self, store: RowStore):
        self._store = store

    def set_earned_days(self, user_id: int, days: int) -> None:
        self._write(user_id, {"earned_days": int(days)})

    def set_bonus_days(self, user_id: int, days: int) -> None:
        self._write(user_id, {"bonus_days": int(days)})

    def _write(self, user_id: int, patch: dict) -> None:
        # MySQL reports 0 changed rows when the value is unchanged, so look
        # for the ledger row first instead of trusting the update count.
        key = [eq("user_id", int(user_id))]
        if self._store.select(LEDGER_TABLE, key, limit=1):
            self._store.update(LEDGER_TABLE, key, patch)
        else:
            self._store.insert(LEDGER_TABLE, [{"user_id": int(user_id), "earned_days": 0, "bonus_days": 0, **patch}])
