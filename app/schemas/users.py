import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.enums import Permission
from app.models.user import User

class UserOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    email: EmailStr
    name: str | None
    permission: str
    slack_user_id: str | None = Field(default=None, alias="slackUserId")

    @classmethod
    def from_model(cls, u: User) -> "UserOut":
        return cls(id=u.id, email=u.email, name=u.name, permission=u.permission, slack_user_id=u.slack_user_id)

class PermissionUpdateIn(BaseModel):
    permission: Permission
