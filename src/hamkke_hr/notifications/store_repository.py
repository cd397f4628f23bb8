from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_datetime
from ..database.store import RowStore, any_of, eq, is_null
from .model import Notification
from .repository import NotificationRepository

TABLE = "notifications"


def _to_notification(row: dict) -> Notification:
    user_id = row.get("user_id")
    return Notification(
        notification_id=int(row["id"]),
        user_id=int(user_id) if user_id is not None else None,
        message=row["message"],
        read=bool(row.get("read")),
        created_at=coerce_datetime(row.get("created_at")),
        type=row.get("type"),
    )


class StoreNotificationRepository(NotificationRepository):
    def __init__(self, store: RowStore):
        self._store = store

    def create(self, *, user_id: Optional[int], message: str, type: Optional[str], read: bool, created_at: datetime) -> int:
        saved = self._store.insert(
            TABLE,
            [{"user_id": user_id, "message": message, "type": type, "read": read, "created_at": created_at}],
        )
        return int(saved[0]["id"])

    def create_many(self, *, user_ids: Sequence[int], message: str, type: Optional[str], created_at: datetime) -> int:
        if not user_ids:
            return 0
        rows = [
            {"user_id": int(uid), "message": message, "type": type, "read": False, "created_at": created_at}
            for uid in user_ids
        ]
        return len(self._store.insert(TABLE, rows))

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        rows = self._store.select(TABLE, [eq("id", int(notification_id))], limit=1)
        return _to_notification(rows[0]) if rows else None

    def list_visible_to(self, user_id: int) -> Sequence[Notification]:
        rows = self._store.select(
            TABLE,
            [any_of(eq("user_id", int(user_id)), is_null("user_id"))],
            order_by="created_at",
            descending=True,
        )
        return [_to_notification(r) for r in rows]

    def list_for_user_with_message(self, *, user_id: int, message: str) -> Sequence[Notification]:
        rows = self._store.select(TABLE, [eq("user_id", int(user_id)), eq("message", message)])
        return [_to_notification(r) for r in rows]

    def count_unread(self, user_id: int) -> int:
        return len(self._store.select(TABLE, [eq("user_id", int(user_id)), eq("read", False)]))

    def mark_read(self, *, notification_id: int, user_id: int) -> bool:
        changed = self._store.update(
            TABLE,
            [eq("id", int(notification_id)), eq("user_id", int(user_id)), eq("read", False)],
            {"read": True},
        )
        return changed > 0

    def mark_read_by_message(self, *, user_id: int, message: str) -> int:
        return self._store.update(
            TABLE,
            [eq("user_id", int(user_id)), eq("message", message), eq("read", False)],
            {"read": True},
        )
