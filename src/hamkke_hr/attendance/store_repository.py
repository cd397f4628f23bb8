from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date, coerce_datetime, to_iso_date
from ..database.store import RowStore, eq, gte, is_null, lte
from .model import AttendanceRecord
from .repository import AttendanceRepository

TABLE = "attendance"


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["id"]),
        user_id=int(row["user_id"]),
        work_date=coerce_date(row["date"]),
        clock_in=coerce_datetime(row.get("clock_in")),
        clock_out=coerce_datetime(row.get("clock_out")),
    )


class StoreAttendanceRepository(AttendanceRepository):
    def __init__(self, store: RowStore):
        self._store = store

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        rows = self._store.select(TABLE, [eq("user_id", int(user_id))], order_by="date", descending=True, limit=int(limit))
        return [_to_record(r) for r in rows]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        rows = self._store.select(TABLE, [eq("user_id", int(user_id)), eq("date", to_iso_date(work_date))], limit=1)
        return _to_record(rows[0]) if rows else None

    def get_latest_before(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        rows = self._store.select(
            TABLE,
            [eq("user_id", int(user_id)), lte("date", to_iso_date(work_date - timedelta(days=1)))],
            order_by="date",
            descending=True,
            limit=1,
        )
        return _to_record(rows[0]) if rows else None

    def list_between(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Sequence[AttendanceRecord]:
        filters = []
        if start_date is not None:
            filters.append(gte("date", to_iso_date(start_date)))
        if end_date is not None:
            filters.append(lte("date", to_iso_date(end_date)))
        rows = self._store.select(TABLE, filters, order_by="date")
        return [_to_record(r) for r in rows]

    def count_for_date(self, work_date: date) -> int:
        return len(self._store.select(TABLE, [eq("date", to_iso_date(work_date))]))

    def create_clock_in(self, *, user_id: int, work_date: date, clock_in: datetime) -> AttendanceRecord:
        saved = self._store.insert(
            TABLE,
            [{"user_id": int(user_id), "date": to_iso_date(work_date), "clock_in": clock_in}],
        )
        return _to_record(saved[0])

    def set_clock_out(self, *, attendance_id: int, clock_out: datetime) -> bool:
        changed = self._store.update(
            TABLE,
            [eq("id", int(attendance_id)), is_null("clock_out")],
            {"clock_out": clock_out},
        )
        return changed > 0
