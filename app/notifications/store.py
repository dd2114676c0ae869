import logging
import uuid
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import StoreError
from app.models.notification import Notification

logger = logging.getLogger(__name__)

class SqlNotificationStore:
    """Notification persistence on top of a request-scoped SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def insert(self, notification: Notification) -> Notification:
        # either committed with an id, or rolled back and raised
        owner = notification.user_id
        try:
            self.db.add(notification)
            self.db.commit()
            self.db.refresh(notification)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("notification insert failed for user %s", owner)
            raise StoreError("failed to create notification") from e
        return notification

    def update_many(self, where: list[Any], patch: dict[str, Any]) -> int:
        stmt = update(Notification).where(*where).values(**patch).execution_options(synchronize_session=False)
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("notification bulk update failed")
            raise StoreError("failed to update notifications") from e
        return result.rowcount or 0

    def get(self, notification_id: uuid.UUID) -> Notification | None:
        return self.db.get(Notification, notification_id)

    def list_for_user(self, user_id: uuid.UUID, unread_only: bool = False, limit: int = 20) -> list[Notification]:
        q = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            q = q.where(Notification.read.is_(False))
        q = q.order_by(Notification.created_at.desc()).limit(limit)
        return list(self.db.scalars(q).all())

    def count_unread(self, user_id: uuid.UUID) -> int:
        q = (
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, Notification.read.is_(False))
        )
        return self.db.scalar(q) or 0
