from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.repository import EmployeeRepository
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifications: NotificationRepository, employees: EmployeeRepository):
        self._notifications = notifications
        self._employees = employees

    def notify(self, *, user_id: int, message: str, type: Optional[str] = None, now: Optional[datetime] = None) -> int:
        return self._notifications.create(
            user_id=int(user_id),
            message=message,
            type=type,
            read=False,
            created_at=now or now_local(),
        )

    def broadcast(self, *, current_role: Role, message: str, now: Optional[datetime] = None) -> int:
        """Send an announcement to every active employee; returns how many were sent."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can send announcements")

        message = require_non_empty(message, "Message")
        user_ids = [e.user_id for e in self._employees.list_active()]
        sent = self._notifications.create_many(
            user_ids=user_ids,
            message=message,
            type="notice",
            created_at=now or now_local(),
        )
        logger.info("announcement sent to %d employees", sent)
        return sent

    def list_for_user(self, user_id: int) -> list[Notification]:
        return list(self._notifications.list_visible_to(int(user_id)))

    def unread_count(self, user_id: int) -> int:
        # Global rows are excluded: each user's copy carries the read flag.
        return self._notifications.count_unread(int(user_id))

    def mark_read(self, *, user_id: int, notification_id: int, now: Optional[datetime] = None) -> None:
        notif = self._notifications.get_by_id(int(notification_id))
        if not notif:
            raise ValidationError("Notification not found")

        if not notif.is_global:
            if notif.user_id != int(user_id):
                raise AuthorizationError("Not your notification")
            self._notifications.mark_read(notification_id=notif.notification_id, user_id=int(user_id))
            return

        own_copies = self._notifications.list_for_user_with_message(user_id=int(user_id), message=notif.message)
        if own_copies:
            self._notifications.mark_read_by_message(user_id=int(user_id), message=notif.message)
        else:
            self._notifications.create(
                user_id=int(user_id),
                message=notif.message,
                type=notif.type,
                read=True,
                created_at=now or now_local(),
            )
