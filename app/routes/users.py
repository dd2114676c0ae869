import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db import get_db
from app.errors import AuthorizationError, StoreError
from app.models.enums import NotificationType
from app.models.user import User
from app.notifications.deps import get_notification_service
from app.notifications.service import CreateNotificationParams, NotificationService
from app.rbac.deps import require_perm
from app.rbac.perms import can_assign_permission, coerce_permission
from app.schemas.users import PermissionUpdateIn, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=list[UserOut])
def list_users(
    actor: User = Depends(require_perm("users:read")),
    db: Session = Depends(get_db),
) -> list[UserOut]:
    rows = db.scalars(select(User).order_by(User.email)).all()
    return [UserOut.from_model(u) for u in rows]

@router.patch("/{user_id}/permission", response_model=UserOut)
def update_permission(
    user_id: uuid.UUID,
    payload: PermissionUpdateIn,
    actor: User = Depends(require_perm("users:update_permission")),
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> UserOut:
    if actor.id == user_id:
        raise AuthorizationError("cannot change own permission")

    target = db.get(User, user_id)
    if target is None:
        raise HTTPException(status_code=404, detail="user not found")

    # can't grant above yourself, and can't touch someone who already outranks you
    if not can_assign_permission(actor.permission, payload.permission):
        raise AuthorizationError(payload.permission.value)
    current = coerce_permission(target.permission)
    if current is not None and not can_assign_permission(actor.permission, current):
        raise AuthorizationError(current.value)

    if target.permission == payload.permission.value:
        return UserOut.from_model(target)

    previous = target.permission
    target.permission = payload.permission.value
    db.add(target)
    db.commit()
    db.refresh(target)
    logger.info("user %s permission %s -> %s by %s", target.id, previous, target.permission, actor.id)
    out = UserOut.from_model(target)

    # the tier change is already durable; a failed notice is logged, not reported as a failed change
    try:
        notifications.create_notification_with_slack_dm(
            CreateNotificationParams(
                user_id=target.id,
                type=NotificationType.permission_changed.value,
                title="Your permission changed",
                message=f"Your permission is now {out.permission}",
                data={"previous": previous, "current": out.permission, "changedBy": str(actor.id)},
            ),
            out.slack_user_id,
        )
    except StoreError:
        logger.exception("permission_changed notification for user %s was not stored", out.id)
    return out
