"""Workspace access control.

Resolves a caller's active membership and enforces the minimum role an
operation needs. Read-only: every check runs before the calling operation
writes anything. Mutation paths pass for_update=True so the caller's
membership row stays locked until their transaction ends.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from user_service.models.user import User
from user_service.models.workspace_member import WorkspaceMember
from user_service.schemas.workspace import WorkspaceRole
from user_service.services.errors import ForbiddenError, NotAMemberError
from user_service.store import workspace_members

logger = logging.getLogger(__name__)


def _to_uuid(value: str | UUID) -> UUID:
    return UUID(str(value)) if isinstance(value, str) else value


def user_has_access_to_workspace(
    db: Session,
    user: User,
    workspace_id: str | UUID | None,
) -> bool:
    """Return True if user holds an active membership in the workspace.

    None workspace_id: returns False (no workspace context).
    """
    if workspace_id is None:
        return False
    return workspace_members.exists_by_workspace_id_and_user_id(
        db, _to_uuid(workspace_id), user.user_id
    )


def require_member(
    db: Session,
    workspace_id: UUID,
    user_id: UUID,
    *,
    for_update: bool = False,
) -> WorkspaceMember:
    """Return the caller's active membership or raise NotAMemberError."""
    member = workspace_members.find_by_workspace_id_and_user_id(
        db, workspace_id, user_id, for_update=for_update
    )
    if member is None:
        logger.warning(
            "User is not a member of workspace: workspace_id=%s, user_id=%s",
            workspace_id,
            user_id,
        )
        raise NotAMemberError()
    return member


def require_role(
    db: Session,
    workspace_id: UUID,
    user_id: UUID,
    allowed: frozenset[WorkspaceRole],
    detail: str,
    *,
    for_update: bool = False,
) -> WorkspaceMember:
    """Return the caller's membership if its role is in *allowed*, else raise ForbiddenError."""
    member = require_member(db, workspace_id, user_id, for_update=for_update)
    if WorkspaceRole(member.role) not in allowed:
        logger.warning(
            "User role %s not permitted: workspace_id=%s, user_id=%s",
            member.role,
            workspace_id,
            user_id,
        )
        raise ForbiddenError(detail)
    return member


def require_owner(
    db: Session, workspace_id: UUID, user_id: UUID, *, for_update: bool = False
) -> WorkspaceMember:
    return require_role(
        db,
        workspace_id,
        user_id,
        frozenset({WorkspaceRole.OWNER}),
        "Only workspace owner can perform this action",
        for_update=for_update,
    )


def require_admin_or_owner(
    db: Session, workspace_id: UUID, user_id: UUID, *, for_update: bool = False
) -> WorkspaceMember:
    return require_role(
        db,
        workspace_id,
        user_id,
        frozenset({WorkspaceRole.OWNER, WorkspaceRole.ADMIN}),
        "Only workspace owner or admin can perform this action",
        for_update=for_update,
    )
