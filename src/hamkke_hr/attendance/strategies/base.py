from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ClockInDecision:
    clock_in: datetime
    note: Optional[str] = None


class ClockInStrategy(ABC):
    """Strategy Pattern: encapsulate which clock-in time gets stored."""

    @abstractmethod
    def decide_clock_in(self, *, now: datetime) -> ClockInDecision:
        raise NotImplementedError
