import uuid

from fastapi import APIRouter, Depends, HTTPException, Query

from app.auth.deps import get_current_user
from app.models.user import User
from app.notifications.deps import get_inbox
from app.notifications.inbox import MAX_LIST_LIMIT, NotificationInbox
from app.schemas.notifications import MarkAllReadOut, NotificationListOut, NotificationOut

router = APIRouter(prefix="/notifications", tags=["notifications"])

@router.get("", response_model=NotificationListOut)
def list_notifications(
    unread_only: bool = Query(default=False, alias="unreadOnly"),
    limit: int = Query(default=20, ge=1),
    user: User = Depends(get_current_user),
    inbox: NotificationInbox = Depends(get_inbox),
) -> NotificationListOut:
    rows, unread = inbox.list(user.id, unread_only=unread_only, limit=min(limit, MAX_LIST_LIMIT))
    return NotificationListOut(
        notifications=[NotificationOut.from_model(n) for n in rows],
        unread_count=unread,
    )

@router.post("/mark-all-read", response_model=MarkAllReadOut)
def mark_all_read(
    user: User = Depends(get_current_user),
    inbox: NotificationInbox = Depends(get_inbox),
) -> MarkAllReadOut:
    return MarkAllReadOut(marked_read=inbox.mark_all_read(user.id))

@router.patch("/{notification_id}", response_model=NotificationOut)
def mark_read(
    notification_id: uuid.UUID,
    user: User = Depends(get_current_user),
    inbox: NotificationInbox = Depends(get_inbox),
) -> NotificationOut:
    n = inbox.mark_read(user.id, notification_id)
    if n is None:
        # same answer for "missing" and "someone else's"
        raise HTTPException(status_code=404, detail="notification not found")
    return NotificationOut.from_model(n)
