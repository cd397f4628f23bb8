from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def create(self, *, user_id: Optional[int], message: str, type: Optional[str], read: bool, created_at: datetime) -> int:
        raise NotImplementedError

    def create_many(self, *, user_ids: Sequence[int], message: str, type: Optional[str], created_at: datetime) -> int:
        raise NotImplementedError

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_visible_to(self, user_id: int) -> Sequence[Notification]:
        """The user's own rows plus global announcements, newest first."""

        raise NotImplementedError

    def list_for_user_with_message(self, *, user_id: int, message: str) -> Sequence[Notification]:
        raise NotImplementedError

    def count_unread(self, user_id: int) -> int:
        raise NotImplementedError

    def mark_read(self, *, notification_id: int, user_id: int) -> bool:
        raise NotImplementedError

    def mark_read_by_message(self, *, user_id: int, message: str) -> int:
        raise NotImplementedError
