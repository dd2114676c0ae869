import uuid

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ApproverRole

class RoleAssignmentIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    role_name: str | None = Field(default=None, alias="roleName")

class RoleAssignmentsIn(BaseModel):
    assignments: list[RoleAssignmentIn]

class ProjectOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    name: str
    role_assignments: list[dict] = Field(alias="roleAssignments")

class ApproverOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: ApproverRole
    user_id: str = Field(alias="userId")
    role_name: str = Field(alias="roleName")

class ReviewRequestIn(BaseModel):
    note: str | None = None
    role: ApproverRole | None = None

class ReviewRequestOut(BaseModel):
    notified: int
    skipped: int = 0
