import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.notification import Notification
from app.notifications.inbox import NotificationInbox
from app.notifications.service import NotificationService
from app.notifications.store import SqlNotificationStore
from conftest import make_user

def seed_notifications(db: Session, user_id: uuid.UUID, n: int) -> list[Notification]:
    svc = NotificationService(SqlNotificationStore(db))
    return [svc.create_notification(user_id, "system", f"t{i}", f"m{i}") for i in range(n)]

def test_mark_all_read_counts_then_is_idempotent(db_session: Session):
    user = make_user(db_session)
    seed_notifications(db_session, user.id, 3)
    inbox = NotificationInbox(SqlNotificationStore(db_session))

    assert inbox.mark_all_read(user.id) == 3
    assert inbox.mark_all_read(user.id) == 0

    rows = db_session.scalars(select(Notification).where(Notification.user_id == user.id)).all()
    assert len(rows) == 3
    assert all(r.read for r in rows)

def test_mark_all_read_only_touches_owner(db_session: Session):
    me = make_user(db_session, "me")
    other = make_user(db_session, "other")
    seed_notifications(db_session, me.id, 2)
    seed_notifications(db_session, other.id, 2)
    inbox = NotificationInbox(SqlNotificationStore(db_session))

    assert inbox.mark_all_read(me.id) == 2
    _, unread = inbox.list(other.id)
    assert unread == 2

def test_mark_all_read_skips_already_read(db_session: Session):
    user = make_user(db_session)
    first, _, _ = seed_notifications(db_session, user.id, 3)
    inbox = NotificationInbox(SqlNotificationStore(db_session))

    assert inbox.mark_read(user.id, first.id).read is True
    assert inbox.mark_all_read(user.id) == 2

def test_mark_read_rejects_other_users(db_session: Session):
    owner = make_user(db_session, "owner")
    intruder = make_user(db_session, "intruder")
    (n,) = seed_notifications(db_session, owner.id, 1)
    inbox = NotificationInbox(SqlNotificationStore(db_session))

    assert inbox.mark_read(intruder.id, n.id) is None
    assert inbox.mark_read(owner.id, uuid.uuid4()) is None
    db_session.refresh(n)
    assert n.read is False

def test_list_caps_limit_and_filters_unread(db_session: Session):
    user = make_user(db_session)
    seed_notifications(db_session, user.id, 3)
    inbox = NotificationInbox(SqlNotificationStore(db_session))

    rows, unread = inbox.list(user.id, limit=2)
    assert len(rows) == 2
    assert unread == 3

    inbox.mark_all_read(user.id)
    rows, unread = inbox.list(user.id, unread_only=True, limit=500)
    assert rows == []
    assert unread == 0
