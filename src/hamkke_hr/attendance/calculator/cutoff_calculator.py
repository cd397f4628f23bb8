from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ...core.constants import WORKDAY_CUTOFF
from .base import WorkDurationCalculator
from .standard_calculator import work_minutes


def cap_clock_out(
    clock_in: Optional[datetime],
    clock_out: Optional[datetime],
    *,
    cutoff: time = WORKDAY_CUTOFF,
) -> Optional[datetime]:
    """Effective clock-out for reporting: no later than the cutoff of the shift's day."""

    if clock_in is None or clock_out is None:
        return clock_out
    limit = datetime.combine(clock_in.date(), cutoff)
    return min(clock_out, limit)


class CutoffWorkCalculator(WorkDurationCalculator):
    """Reporting rule: time after the end-of-day cutoff is not counted."""

    def __init__(self, cutoff: time = WORKDAY_CUTOFF):
        self._cutoff = cutoff

    def worked_minutes(self, clock_in: Optional[datetime], clock_out: Optional[datetime]) -> int:
        return work_minutes(clock_in, cap_clock_out(clock_in, clock_out, cutoff=self._cutoff))
