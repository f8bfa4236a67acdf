"""WorkspaceJoinRequest lookups and writes."""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from user_service.models.workspace_join_request import WorkspaceJoinRequest


def find_by_id(
    db: Session, request_id: uuid.UUID, *, for_update: bool = False
) -> WorkspaceJoinRequest | None:
    query = db.query(WorkspaceJoinRequest).filter(
        WorkspaceJoinRequest.join_request_id == request_id
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def find_by_workspace_id_and_user_id_and_status(
    db: Session,
    workspace_id: uuid.UUID,
    user_id: uuid.UUID,
    status: str,
    *,
    for_update: bool = False,
) -> WorkspaceJoinRequest | None:
    query = db.query(WorkspaceJoinRequest).filter(
        WorkspaceJoinRequest.workspace_id == workspace_id,
        WorkspaceJoinRequest.user_id == user_id,
        WorkspaceJoinRequest.status == status,
    )
    if for_update:
        query = query.with_for_update()
    return query.first()


def find_by_workspace_id(
    db: Session, workspace_id: uuid.UUID, status: str | None = None
) -> list[WorkspaceJoinRequest]:
    """Join requests for the workspace, newest first, optionally filtered by status."""
    query = db.query(WorkspaceJoinRequest).filter(
        WorkspaceJoinRequest.workspace_id == workspace_id
    )
    if status is not None:
        query = query.filter(WorkspaceJoinRequest.status == status)
    return query.order_by(WorkspaceJoinRequest.requested_at.desc()).all()


def save(db: Session, request: WorkspaceJoinRequest) -> WorkspaceJoinRequest:
    db.add(request)
    return request
