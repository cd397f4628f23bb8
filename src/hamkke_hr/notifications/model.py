from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Notification:
    notification_id: int
    user_id: Optional[int]
    message: str
    read: bool
    created_at: Optional[datetime]
    type: Optional[str] = None

    @property
    def is_global(self) -> bool:
        """Announcements are stored once with no recipient."""
        return self.user_id is None
