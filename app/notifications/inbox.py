import uuid

from app.models.notification import Notification
from app.notifications.store import SqlNotificationStore

MAX_LIST_LIMIT = 50

class NotificationInbox:
    """Read-state transitions over a single user's notifications."""

    def __init__(self, store: SqlNotificationStore):
        self._store = store

    def mark_all_read(self, user_id: uuid.UUID) -> int:
        # one UPDATE ... WHERE user_id = :u AND read = false; repeats return 0
        return self._store.update_many(
            [Notification.user_id == user_id, Notification.read.is_(False)],
            {"read": True},
        )

    def mark_read(self, user_id: uuid.UUID, notification_id: uuid.UUID) -> Notification | None:
        n = self._store.get(notification_id)
        if n is None or n.user_id != user_id:
            return None
        if not n.read:
            self._store.update_many(
                [Notification.id == notification_id, Notification.user_id == user_id],
                {"read": True},
            )
        return n

    def list(self, user_id: uuid.UUID, unread_only: bool = False, limit: int = 20) -> tuple[list[Notification], int]:
        limit = max(1, min(limit, MAX_LIST_LIMIT))
        rows = self._store.list_for_user(user_id, unread_only=unread_only, limit=limit)
        return rows, self._store.count_unread(user_id)
