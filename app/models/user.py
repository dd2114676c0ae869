import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base

class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(sa.Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(sa.String(320), unique=True, index=True, nullable=False)
    name: Mapped[str | None] = mapped_column(sa.String(200), nullable=True)

    # stored as plain text; PermissionModel treats unknown values as below USER
    permission: Mapped[str] = mapped_column(sa.String(32), nullable=False, default="USER", server_default="USER")

    slack_user_id: Mapped[str | None] = mapped_column(sa.String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )
