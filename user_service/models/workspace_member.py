"""WorkspaceMember: (user, workspace, role) membership record."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from user_service.db.session import Base


class WorkspaceMember(Base):
    """User membership in a workspace. Deactivated, never deleted."""

    __tablename__ = "workspace_members"

    __table_args__ = (
        Index(
            "uq_workspace_members_active_user",
            "workspace_id",
            "user_id",
            unique=True,
            postgresql_where=text("is_active = true"),
            sqlite_where=text("is_active = 1"),
        ),
        Index(
            "uq_workspace_members_active_owner",
            "workspace_id",
            unique=True,
            postgresql_where=text("is_active = true AND role = 'OWNER'"),
            sqlite_where=text("is_active = 1 AND role = 'OWNER'"),
        ),
        Index(
            "uq_workspace_members_default",
            "user_id",
            unique=True,
            postgresql_where=text("is_active = true AND is_default = true"),
            sqlite_where=text("is_active = 1 AND is_default = 1"),
        ),
        Index("ix_workspace_members_user_id", "user_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workspace_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("workspaces.workspace_id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )
