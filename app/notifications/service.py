"""Notification creation with an optional best-effort Slack DM.

The in-app notification is the primary write and must succeed. The DM is a
side channel: it's attempted only after the primary write commits, and its
result is logged and dropped so that a slow or broken Slack never fails the
call or touches the stored record.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from app.models.enums import NotificationType
from app.models.notification import Notification
from app.notifications.slack import DispatchResult, SecondaryChannel
from app.review.approvers import ResolvedApprover

logger = logging.getLogger(__name__)

class NotificationStore(Protocol):
    def insert(self, notification: Notification) -> Notification:  # pragma: no cover - Protocol
        ...

@dataclass
class CreateNotificationParams:
    user_id: uuid.UUID
    type: str
    title: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)

class NotificationService:
    def __init__(self, store: NotificationStore, channel: SecondaryChannel | None = None) -> None:
        self._store = store
        self._channel = channel

    def create_notification(
        self,
        user_id: uuid.UUID,
        type: str,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> Notification:
        """Persist an unread notification. StoreError propagates."""
        n = Notification(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            data=dict(data or {}),
            read=False,
        )
        return self._store.insert(n)

    def create_notification_with_slack_dm(
        self,
        params: CreateNotificationParams,
        secondary_recipient_id: str | None = None,
    ) -> Notification:
        notification = self.create_notification(
            params.user_id, params.type, params.title, params.message, params.data
        )

        if secondary_recipient_id and self._channel is not None:
            result = self._forward(secondary_recipient_id, params.message)
            if result is not None and not result.ok:
                logger.warning(
                    "slack dm to %s failed for notification %s: %s",
                    secondary_recipient_id,
                    notification.id,
                    result.error,
                )

        return notification

    def _forward(self, recipient_id: str, text: str) -> DispatchResult | None:
        """Attempt the DM. None means the channel is not configured and nothing was sent."""
        # channels are expected to return failures, but nothing may escape here
        try:
            if not self._channel.is_configured():
                return None
            result = self._channel.send(recipient_id, text)
        except Exception as e:  # noqa: BLE001
            logger.exception("secondary channel raised instead of returning a result")
            return DispatchResult.failure(f"{e.__class__.__name__}: {e}")

        if not isinstance(result, DispatchResult):
            return DispatchResult.failure(f"unexpected channel result: {result!r}")
        return result

    def notify_approvers(
        self,
        approvers: Iterable[ResolvedApprover],
        *,
        project_id: uuid.UUID,
        project_name: str,
        requested_by: str,
        slack_ids: dict[str, str | None] | None = None,
        note: str | None = None,
    ) -> list[Notification]:
        """Send a review request to every resolved approver, in resolution order.

        Approvers whose user id is not a UUID can't own a notification and are
        skipped with a warning.
        """
        slack_ids = slack_ids or {}
        created: list[Notification] = []

        for approver in approvers:
            try:
                owner = uuid.UUID(approver.user_id)
            except (TypeError, ValueError):
                logger.warning("skipping approver with invalid user id %r", approver.user_id)
                continue

            message = f"{requested_by} requested a {approver.role.value} review on {project_name}"
            if note:
                message = f"{message}: {note}"
            params = CreateNotificationParams(
                user_id=owner,
                type=NotificationType.review_requested.value,
                title=f"Review requested: {project_name}",
                message=message,
                data={
                    "projectId": str(project_id),
                    "approverRole": approver.role.value,
                    "roleName": approver.role_name,
                },
            )
            created.append(
                self.create_notification_with_slack_dm(params, slack_ids.get(approver.user_id))
            )

        return created
