from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord

STATUS_LABELS = {
    AttendanceStatus.ABSENT: "X",
    AttendanceStatus.IN_PROGRESS: "No clock-out",
    AttendanceStatus.COMPLETE: "O",
}


def classify(record: Optional[AttendanceRecord]) -> AttendanceStatus:
    # A row without a clock-in (even one with a stray clock-out) shows as absent.
    if record is None or record.clock_in is None:
        return AttendanceStatus.ABSENT
    if record.clock_out is None:
        return AttendanceStatus.IN_PROGRESS
    return AttendanceStatus.COMPLETE
