import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.deps import get_current_user
from app.db import get_db
from app.models.project import Project
from app.models.user import User
from app.notifications.deps import get_notification_service
from app.notifications.service import NotificationService
from app.rbac.deps import require_perm
from app.review.approvers import approvers_for_role, resolve_approvers
from app.schemas.projects import (
    ApproverOut,
    ProjectOut,
    ReviewRequestIn,
    ReviewRequestOut,
    RoleAssignmentsIn,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])

def _get_project(db: Session, project_id: uuid.UUID) -> Project:
    p = db.get(Project, project_id)
    if p is None:
        raise HTTPException(status_code=404, detail="project not found")
    return p

def _parse_uuid(raw: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(raw)
    except ValueError:
        return None

@router.get("/{project_id}/approvers", response_model=list[ApproverOut])
def list_approvers(
    project_id: uuid.UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[ApproverOut]:
    p = _get_project(db, project_id)
    return [
        ApproverOut(role=a.role, user_id=a.user_id, role_name=a.role_name)
        for a in resolve_approvers(p.role_assignments or [])
    ]

@router.put("/{project_id}/role-assignments", response_model=ProjectOut)
def update_role_assignments(
    project_id: uuid.UUID,
    payload: RoleAssignmentsIn,
    user: User = Depends(require_perm("projects:update_roles")),
    db: Session = Depends(get_db),
) -> ProjectOut:
    p = _get_project(db, project_id)
    # stored in the same camelCase shape the resolver reads
    p.role_assignments = [
        {"userId": a.user_id, "roleName": a.role_name} for a in payload.assignments
    ]
    db.add(p)
    db.commit()
    db.refresh(p)
    return ProjectOut(id=p.id, name=p.name, role_assignments=p.role_assignments)

@router.post("/{project_id}/review-requests", response_model=ReviewRequestOut)
def request_review(
    project_id: uuid.UUID,
    payload: ReviewRequestIn,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service),
) -> ReviewRequestOut:
    p = _get_project(db, project_id)

    approvers = resolve_approvers(p.role_assignments or [])
    if payload.role is not None:
        approvers = approvers_for_role(approvers, payload.role)

    # approvers pointing at unknown users are dropped, not errored
    ids = {a.user_id: _parse_uuid(a.user_id) for a in approvers}
    known = {
        str(u.id): u
        for u in db.scalars(select(User).where(User.id.in_([i for i in ids.values() if i is not None])))
    }
    deliverable = [a for a in approvers if ids[a.user_id] is not None and str(ids[a.user_id]) in known]
    skipped = len(approvers) - len(deliverable)
    if skipped:
        logger.info("review request on project %s skipped %d unknown approvers", p.id, skipped)

    created = notifications.notify_approvers(
        deliverable,
        project_id=p.id,
        project_name=p.name,
        requested_by=user.name or user.email,
        slack_ids={a.user_id: known[str(ids[a.user_id])].slack_user_id for a in deliverable},
        note=payload.note,
    )
    return ReviewRequestOut(notified=len(created), skipped=skipped)
