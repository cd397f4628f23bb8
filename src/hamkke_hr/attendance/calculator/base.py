from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class WorkDurationCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_minutes(self, clock_in: Optional[datetime], clock_out: Optional[datetime]) -> int:
        raise NotImplementedError
