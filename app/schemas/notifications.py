import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.notification import Notification

class NotificationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    user_id: uuid.UUID = Field(alias="userId")
    type: str
    title: str
    message: str
    data: dict[str, Any]
    read: bool
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_model(cls, n: Notification) -> "NotificationOut":
        return cls(
            id=n.id,
            user_id=n.user_id,
            type=n.type,
            title=n.title,
            message=n.message,
            data=n.data or {},
            read=n.read,
            created_at=n.created_at,
        )

class NotificationListOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    notifications: list[NotificationOut]
    unread_count: int = Field(alias="unreadCount")

class MarkAllReadOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    marked_read: int = Field(alias="markedRead")
