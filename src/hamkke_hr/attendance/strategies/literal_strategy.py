from __future__ import annotations

from datetime import datetime

from .base import ClockInDecision, ClockInStrategy


class LiteralStrategy(ClockInStrategy):
    """Store the actual punch time."""

    def decide_clock_in(self, *, now: datetime) -> ClockInDecision:
        return ClockInDecision(clock_in=now)
