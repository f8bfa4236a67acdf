"""Workspace lookups and soft-delete writes."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from user_service.models.workspace import Workspace
from user_service.store import LIKE_ESCAPE, contains_pattern


def find_by_id(db: Session, workspace_id: uuid.UUID) -> Workspace | None:
    """Return the workspace regardless of active flag."""
    return db.get(Workspace, workspace_id)


def save(db: Session, workspace: Workspace) -> Workspace:
    """Stage an insert or update; caller commits."""
    db.add(workspace)
    return workspace


def soft_delete_by_id(db: Session, workspace_id: uuid.UUID) -> int:
    result = db.execute(
        update(Workspace)
        .where(Workspace.workspace_id == workspace_id)
        .values(is_active=False, deleted_at=datetime.now(UTC))
    )
    return result.rowcount


def reactivate_by_id(db: Session, workspace_id: uuid.UUID) -> int:
    result = db.execute(
        update(Workspace)
        .where(Workspace.workspace_id == workspace_id)
        .values(is_active=True, deleted_at=None)
    )
    return result.rowcount


def find_all_active(db: Session) -> list[Workspace]:
    return (
        db.query(Workspace)
        .filter(Workspace.is_active == True)
        .order_by(Workspace.created_at.desc())
        .all()
    )


def find_active_by_name(db: Session, name: str) -> list[Workspace]:
    """Active workspaces whose name contains *name*, newest first."""
    pattern = contains_pattern(name)
    return (
        db.query(Workspace)
        .filter(Workspace.is_active == True, Workspace.name.ilike(pattern, escape=LIKE_ESCAPE))
        .order_by(Workspace.created_at.desc())
        .all()
    )
