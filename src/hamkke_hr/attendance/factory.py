from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.constants import GRACE_WINDOW_END, GRACE_WINDOW_START, NORMALIZED_CLOCK_IN
from .strategies.base import ClockInStrategy
from .strategies.grace_strategy import GraceWindowStrategy
from .strategies.literal_strategy import LiteralStrategy


@dataclass
class ClockInStrategyFactory:
    """Factory Pattern: choose the clock-in strategy from the punch time."""

    window_start: time = GRACE_WINDOW_START
    window_end: time = GRACE_WINDOW_END
    normalized: time = NORMALIZED_CLOCK_IN

    def in_grace_window(self, now: datetime) -> bool:
        # Minute precision: 09:00:59 still counts as 09:00.
        punched = now.time().replace(second=0, microsecond=0)
        return self.window_start <= punched <= self.window_end

    def for_clock_in(self, *, now: datetime) -> ClockInStrategy:
        if self.in_grace_window(now):
            return GraceWindowStrategy(self.normalized)
        return LiteralStrategy()
