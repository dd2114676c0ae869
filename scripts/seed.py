import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import settings
from app.db import Database
from app.models.enums import Permission
from app.models.project import Project
from app.models.user import User

@dataclass
class SeedResult:
    super_admin_email: str
    admin_email: str
    po_email: str
    lead_email: str
    project_id: uuid.UUID

def get_or_create_user(
    db: Session,
    email: str,
    name: str | None = None,
    permission: Permission = Permission.USER,
) -> User:
    email = email.lower().strip()
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        u = User(email=email, name=name, permission=permission.value)
        db.add(u)
        db.flush()
    elif u.permission != permission.value:
        u.permission = permission.value
        db.add(u)
        db.flush()
    return u

def get_or_create_project(db: Session, name: str, role_assignments: list[dict]) -> Project:
    p = db.scalar(select(Project).where(Project.name == name))
    if p is None:
        p = Project(name=name, role_assignments=role_assignments)
        db.add(p)
        db.flush()
    else:
        # keep it stable if you re-run seed
        p.role_assignments = role_assignments
        db.add(p)
        db.flush()
    return p

def seed(database: Database) -> SeedResult:
    db = database.session()
    try:
        root = get_or_create_user(db, "root@example.com", "root", Permission.SUPER_ADMIN)
        admin = get_or_create_user(db, "admin@example.com", "admin", Permission.ADMIN)
        po = get_or_create_user(db, "po@example.com", "po")
        lead = get_or_create_user(db, "lead@example.com", "lead")

        project = get_or_create_project(
            db,
            "seeded project",
            [
                {"userId": str(po.id), "roleName": "Product Owner"},
                {"userId": str(lead.id), "roleName": "Lead Programmer"},
                {"userId": str(admin.id), "roleName": "Programmer Leader"},
                {"userId": None, "roleName": "Lead Artist"},
            ],
        )

        db.commit()

        return SeedResult(
            super_admin_email=root.email,
            admin_email=admin.email,
            po_email=po.email,
            lead_email=lead.email,
            project_id=project.id,
        )
    finally:
        db.close()

if __name__ == "__main__":
    database = Database(settings.database_url)
    try:
        r = seed(database)
    finally:
        database.dispose()
    print("seed complete")
    print(f"project_id={r.project_id}")
    print("users:")
    print(f"  super admin: {r.super_admin_email}")
    print(f"  admin:       {r.admin_email}")
    print(f"  po:          {r.po_email}")
    print(f"  lead:        {r.lead_email}")
