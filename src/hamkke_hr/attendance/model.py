from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day."""

    attendance_id: int
    user_id: int
    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]

    @property
    def is_open(self) -> bool:
        return self.clock_in is not None and self.clock_out is None


@dataclass(frozen=True)
class ClockResult:
    """What a clock action did, plus any correction applied to an earlier day."""

    action: str
    record: AttendanceRecord
    corrected_clock_out: Optional[datetime] = None
