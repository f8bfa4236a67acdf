"""WorkspaceMember lookups and writes."""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from user_service.models.workspace_member import WorkspaceMember
from user_service.schemas.workspace import WorkspaceRole


def find_by_id(
    db: Session, member_id: uuid.UUID, *, for_update: bool = False
) -> WorkspaceMember | None:
    query = db.query(WorkspaceMember).filter(WorkspaceMember.id == member_id)
    if for_update:
        query = query.with_for_update()
    return query.first()


def find_by_workspace_id_and_user_id(
    db: Session,
    workspace_id: uuid.UUID,
    user_id: uuid.UUID,
    *,
    for_update: bool = False,
) -> WorkspaceMember | None:
    """Return the user's active membership in the workspace, if any."""
    query = db.query(WorkspaceMember).filter(
        WorkspaceMember.workspace_id == workspace_id,
        WorkspaceMember.user_id == user_id,
        WorkspaceMember.is_active == True,
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def exists_by_workspace_id_and_user_id(
    db: Session, workspace_id: uuid.UUID, user_id: uuid.UUID
) -> bool:
    return find_by_workspace_id_and_user_id(db, workspace_id, user_id) is not None


def find_owner_by_workspace_id(
    db: Session, workspace_id: uuid.UUID, *, for_update: bool = False
) -> WorkspaceMember | None:
    query = db.query(WorkspaceMember).filter(
        WorkspaceMember.workspace_id == workspace_id,
        WorkspaceMember.role == WorkspaceRole.OWNER.value,
        WorkspaceMember.is_active == True,
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def find_all_by_workspace_id(db: Session, workspace_id: uuid.UUID) -> list[WorkspaceMember]:
    """All memberships of the workspace, inactive included, oldest first."""
    return (
        db.query(WorkspaceMember)
        .filter(WorkspaceMember.workspace_id == workspace_id)
        .order_by(WorkspaceMember.joined_at.asc())
        .all()
    )


def find_active_by_user_id(
    db: Session, user_id: uuid.UUID, *, for_update: bool = False
) -> list[WorkspaceMember]:
    query = (
        db.query(WorkspaceMember)
        .filter(WorkspaceMember.user_id == user_id, WorkspaceMember.is_active == True)
        .order_by(WorkspaceMember.joined_at.asc())
    )
    if for_update:
        query = query.with_for_update()
    return query.all()


def clear_defaults_for_user(db: Session, user_id: uuid.UUID) -> int:
    """Unset is_default on the user's active memberships. Bulk UPDATE, issued immediately."""
    updated = (
        db.query(WorkspaceMember)
        .filter(
            WorkspaceMember.user_id == user_id,
            WorkspaceMember.is_active == True,
            WorkspaceMember.is_default == True,
        )
        .update({"is_default": False}, synchronize_session="fetch")
    )
    return updated


def save(db: Session, member: WorkspaceMember) -> WorkspaceMember:
    db.add(member)
    return member
