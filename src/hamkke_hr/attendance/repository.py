from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_latest_before(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        """Most recent record strictly before ``work_date``."""

        raise NotImplementedError

    def list_between(self, *, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Sequence[AttendanceRecord]:
        """Records in the inclusive window; an open bound means no limit."""

        raise NotImplementedError

    def count_for_date(self, work_date: date) -> int:
        raise NotImplementedError

    def create_clock_in(self, *, user_id: int, work_date: date, clock_in: datetime) -> AttendanceRecord:
        raise NotImplementedError

    def set_clock_out(self, *, attendance_id: int, clock_out: datetime) -> bool:
        """Set clock_out only while it is still empty."""

        raise NotImplementedError
