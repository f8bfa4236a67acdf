"""Workspace membership: reads, default workspace, roles, removal and leaving."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from user_service.models.workspace_member import WorkspaceMember
from user_service.schemas.workspace import (
    WorkspaceMemberResponse,
    WorkspaceResponse,
    WorkspaceRole,
)
from user_service.services.errors import (
    CannotDemoteOwnerError,
    CannotRemoveOwnerError,
    CannotRemoveSelfError,
    MemberNotFoundError,
    MemberWorkspaceMismatchError,
)
from user_service.services.workspace_access import (
    require_admin_or_owner,
    require_member,
    require_owner,
)
from user_service.services.workspace_views import (
    to_member_response,
    to_member_responses,
    to_workspace_response,
)
from user_service.services.workspaces import get_active_workspace_or_raise
from user_service.store import workspace_members, workspaces

logger = logging.getLogger(__name__)


def get_workspace(
    db: Session, workspace_id: uuid.UUID, requester_id: uuid.UUID
) -> WorkspaceResponse:
    """Return the workspace view (members only)."""
    logger.debug("Fetching workspace: workspace_id=%s", workspace_id)
    require_member(db, workspace_id, requester_id)
    return to_workspace_response(db, get_active_workspace_or_raise(db, workspace_id))


def get_user_workspaces(db: Session, user_id: uuid.UUID) -> list[WorkspaceResponse]:
    """Return every active workspace the user is an active member of.

    Each view carries is_default for the user's membership.
    """
    logger.debug("Fetching workspaces for user: user_id=%s", user_id)
    result: list[WorkspaceResponse] = []
    for member in workspace_members.find_active_by_user_id(db, user_id):
        workspace = workspaces.find_by_id(db, member.workspace_id)
        if workspace is None or not workspace.is_active:
            continue
        view = to_workspace_response(db, workspace)
        view.is_default = member.is_default
        result.append(view)
    return result


def set_default_workspace(db: Session, workspace_id: uuid.UUID, user_id: uuid.UUID) -> None:
    """Make workspace_id the user's only default workspace.

    Clearing and setting happen in one transaction; the clear is issued first
    so no reader ever sees two defaults.
    """
    logger.info("Setting default workspace: workspace_id=%s, user_id=%s", workspace_id, user_id)

    member = require_member(db, workspace_id, user_id, for_update=True)
    get_active_workspace_or_raise(db, workspace_id)

    # lock every membership row of this user for the clear-then-set sequence
    workspace_members.find_active_by_user_id(db, user_id, for_update=True)
    workspace_members.clear_defaults_for_user(db, user_id)
    member.is_default = True
    db.commit()
    logger.info("Default workspace set: workspace_id=%s, user_id=%s", workspace_id, user_id)


def get_workspace_members(
    db: Session, workspace_id: uuid.UUID, requester_id: uuid.UUID
) -> list[WorkspaceMemberResponse]:
    """List all members (inactive included) with display identity."""
    logger.debug("Fetching workspace members: workspace_id=%s", workspace_id)
    require_member(db, workspace_id, requester_id)
    get_active_workspace_or_raise(db, workspace_id)
    return to_member_responses(db, workspace_members.find_all_by_workspace_id(db, workspace_id))


def _get_workspace_member_or_raise(
    db: Session, workspace_id: uuid.UUID, member_id: uuid.UUID
) -> WorkspaceMember:
    member = workspace_members.find_by_id(db, member_id, for_update=True)
    if member is None or not member.is_active:
        logger.warning("Member not found: %s", member_id)
        raise MemberNotFoundError()
    if member.workspace_id != workspace_id:
        logger.warning(
            "Member does not belong to workspace: member_id=%s, workspace_id=%s",
            member_id,
            workspace_id,
        )
        raise MemberWorkspaceMismatchError()
    return member


def update_member_role(
    db: Session,
    workspace_id: uuid.UUID,
    member_id: uuid.UUID,
    new_role: str | WorkspaceRole,
    requester_id: uuid.UUID,
) -> WorkspaceMemberResponse:
    """Change a member's role (OWNER only).

    The OWNER membership's role cannot be changed directly. Promoting another
    member to OWNER transfers ownership: the current OWNER becomes ADMIN.
    """
    logger.info(
        "Updating member role: workspace_id=%s, member_id=%s, new_role=%s, requester=%s",
        workspace_id,
        member_id,
        new_role,
        requester_id,
    )

    owner_member = require_owner(db, workspace_id, requester_id, for_update=True)
    role = WorkspaceRole.parse(new_role)
    workspace = get_active_workspace_or_raise(db, workspace_id)
    member = _get_workspace_member_or_raise(db, workspace_id, member_id)

    current = WorkspaceRole(member.role)
    if current == role:
        return to_member_response(db, member)
    if current == WorkspaceRole.OWNER:
        logger.warning("Cannot change owner role: member_id=%s", member_id)
        raise CannotDemoteOwnerError()

    if role == WorkspaceRole.OWNER:
        owner_member.role = WorkspaceRole.ADMIN.value
        db.flush()  # at most one active OWNER row at any time
        member.role = WorkspaceRole.OWNER.value
        workspace.owner_id = member.user_id
        logger.info(
            "Ownership transferred: workspace_id=%s, from=%s, to=%s",
            workspace_id,
            owner_member.user_id,
            member.user_id,
        )
    else:
        member.role = role.value

    db.commit()
    db.refresh(member)
    return to_member_response(db, member)


def remove_member(
    db: Session,
    workspace_id: uuid.UUID,
    member_id: uuid.UUID,
    requester_id: uuid.UUID,
) -> None:
    """Deactivate a member (OWNER or ADMIN). Owners and the requester cannot be removed."""
    logger.info(
        "Removing member: workspace_id=%s, member_id=%s, requester=%s",
        workspace_id,
        member_id,
        requester_id,
    )

    require_admin_or_owner(db, workspace_id, requester_id, for_update=True)
    get_active_workspace_or_raise(db, workspace_id)
    member = _get_workspace_member_or_raise(db, workspace_id, member_id)

    if member.role == WorkspaceRole.OWNER.value:
        logger.warning("Cannot remove workspace owner: member_id=%s", member_id)
        raise CannotRemoveOwnerError()
    if member.user_id == requester_id:
        logger.warning("User cannot remove themselves: user_id=%s", requester_id)
        raise CannotRemoveSelfError()

    member.is_active = False
    member.is_default = False
    db.commit()
    logger.info("Member removed: workspace_id=%s, member_id=%s", workspace_id, member_id)


def leave_workspace(db: Session, workspace_id: uuid.UUID, user_id: uuid.UUID) -> None:
    """Deactivate the caller's own membership. The OWNER cannot leave."""
    logger.info("Leaving workspace: workspace_id=%s, user_id=%s", workspace_id, user_id)

    member = require_member(db, workspace_id, user_id, for_update=True)
    get_active_workspace_or_raise(db, workspace_id)
    if member.role == WorkspaceRole.OWNER.value:
        logger.warning("Workspace owner cannot leave: workspace_id=%s", workspace_id)
        raise CannotRemoveOwnerError("Workspace owner cannot leave; transfer ownership first")

    member.is_active = False
    member.is_default = False
    db.commit()
    logger.info("Member left workspace: workspace_id=%s, user_id=%s", workspace_id, user_id)
