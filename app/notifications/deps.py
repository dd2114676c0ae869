from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.db import get_db
from app.notifications.inbox import NotificationInbox
from app.notifications.service import NotificationService
from app.notifications.store import SqlNotificationStore

def get_notification_service(request: Request, db: Session = Depends(get_db)) -> NotificationService:
    return NotificationService(SqlNotificationStore(db), request.app.state.slack)

def get_inbox(db: Session = Depends(get_db)) -> NotificationInbox:
    return NotificationInbox(SqlNotificationStore(db))
