from __future__ import annotations

from datetime import datetime, time

from ...core.constants import NORMALIZED_CLOCK_IN
from .base import ClockInDecision, ClockInStrategy


class GraceWindowStrategy(ClockInStrategy):
    """Early arrival inside the grace window: store the official start time."""

    def __init__(self, normalized: time = NORMALIZED_CLOCK_IN):
        self._normalized = normalized

    def decide_clock_in(self, *, now: datetime) -> ClockInDecision:
        return ClockInDecision(
            clock_in=datetime.combine(now.date(), self._normalized),
            note=f"normalized from {now:%H:%M:%S}",
        )
