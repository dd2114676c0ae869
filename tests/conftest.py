import os
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.tokens import issue_access_token
from app.config import Settings
from app.db import get_db
from app.main import create_app
from app.models.base import Base
from app.models.enums import Permission
from app.models.user import User
from app.notifications.slack import DispatchResult

class FakeSlack:
    """Stand-in secondary channel; records sends and can be told to fail."""

    def __init__(self, configured: bool = True):
        self.configured = configured
        self.fail_with: str | None = None
        self.raise_exc: Exception | None = None
        self.sent: list[tuple[str, str]] = []

    def is_configured(self) -> bool:
        return self.configured

    def send(self, recipient_id: str, text: str) -> DispatchResult:
        if self.raise_exc is not None:
            raise self.raise_exc
        self.sent.append((recipient_id, text))
        if self.fail_with:
            return DispatchResult.failure(self.fail_with)
        return DispatchResult.success()

    def status(self) -> dict:
        return {"configured": self.configured, "workspace": None, "checks": {}}

    def post_message(self, channel_id: str, text: str) -> None:
        self.sent.append((channel_id, text))

@pytest.fixture()
def db_session() -> Session:
    database_url = os.environ.get("DATABASE_URL", "sqlite+pysqlite://")

    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    else:
        engine = create_engine(database_url, pool_pre_ping=True)
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()

@pytest.fixture()
def fake_slack() -> FakeSlack:
    return FakeSlack()

@pytest.fixture()
def client(db_session: Session, fake_slack: FakeSlack) -> TestClient:
    app = create_app(
        Settings(
            database_url="sqlite+pysqlite://",
            rate_limit_enabled=False,
            slack_bot_token=None,
        )
    )
    app.state.slack = fake_slack

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

def make_user(
    db: Session,
    prefix: str = "user",
    permission: Permission | str = Permission.USER,
    slack_user_id: str | None = None,
) -> User:
    value = permission.value if isinstance(permission, Permission) else permission
    # unique per test to avoid collisions when DATABASE_URL points at a shared db
    u = User(
        email=f"{prefix}+{uuid.uuid4().hex[:8]}@example.com",
        name=prefix,
        permission=value,
        slack_user_id=slack_user_id,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u

def auth(user: User) -> dict[str, str]:
    return {"authorization": f"bearer {issue_access_token(user.id)}"}
