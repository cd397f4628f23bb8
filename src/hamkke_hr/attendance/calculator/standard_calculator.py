from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from .base import WorkDurationCalculator


def work_minutes(clock_in: Optional[datetime], clock_out: Optional[datetime]) -> int:
    """Whole minutes between two punches, rounded half up, never negative.

    A missing punch is not an error: an incomplete shift counts as 0.
    """

    if clock_in is None or clock_out is None:
        return 0
    minutes = math.floor((clock_out - clock_in).total_seconds() / 60 + 0.5)
    return max(minutes, 0)


class StandardWorkCalculator(WorkDurationCalculator):
    """Standard rule: (out - in), not below 0."""

    def worked_minutes(self, clock_in: Optional[datetime], clock_out: Optional[datetime]) -> int:
        return work_minutes(clock_in, clock_out)
