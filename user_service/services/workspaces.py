"""Workspace lifecycle: create, update, settings, soft delete, reactivate, search."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from user_service.models.workspace import Workspace
from user_service.models.workspace_member import WorkspaceMember
from user_service.schemas.workspace import (
    UpdateWorkspaceRequest,
    WorkspaceResponse,
    WorkspaceRole,
    WorkspaceSettingsResponse,
)
from user_service.services.errors import UserNotFoundError, WorkspaceNotFoundError
from user_service.services.workspace_access import (
    require_admin_or_owner,
    require_member,
    require_owner,
)
from user_service.services.workspace_views import to_settings_response, to_workspace_response
from user_service.store import users, workspace_members, workspaces

logger = logging.getLogger(__name__)


def get_active_workspace_or_raise(db: Session, workspace_id: uuid.UUID) -> Workspace:
    """Return the workspace if it exists and is not soft-deleted."""
    workspace = workspaces.find_by_id(db, workspace_id)
    if workspace is None or not workspace.is_active:
        logger.warning("Workspace not found: %s", workspace_id)
        raise WorkspaceNotFoundError()
    return workspace


def _apply_partial_update(workspace: Workspace, fields: UpdateWorkspaceRequest) -> None:
    """Overwrite only supplied values. None or "" means leave unchanged."""
    if fields.name:
        workspace.name = fields.name
    if fields.description:
        workspace.description = fields.description
    if fields.is_public is not None:
        workspace.is_public = fields.is_public
    if fields.need_approved is not None:
        workspace.need_approved = fields.need_approved


def create_workspace(
    db: Session,
    name: str,
    description: str | None,
    creator_id: uuid.UUID,
) -> WorkspaceResponse:
    """Create a workspace with the creator as its OWNER (one commit).

    The OWNER membership becomes the creator's default workspace; any previous
    default is cleared in the same transaction.
    """
    logger.info("Creating workspace: name=%s, creator=%s", name, creator_id)

    if users.find_active_by_id(db, creator_id) is None:
        logger.warning("User not found: %s", creator_id)
        raise UserNotFoundError()

    workspace = Workspace(
        workspace_id=uuid.uuid4(),
        name=name,
        description=description,
        owner_id=creator_id,
        is_public=False,
        need_approved=True,
        is_active=True,
    )
    workspaces.save(db, workspace)
    db.flush()

    workspace_members.clear_defaults_for_user(db, creator_id)
    workspace_members.save(
        db,
        WorkspaceMember(
            id=uuid.uuid4(),
            workspace_id=workspace.workspace_id,
            user_id=creator_id,
            role=WorkspaceRole.OWNER.value,
            is_default=True,
            is_active=True,
        ),
    )
    db.commit()
    db.refresh(workspace)
    logger.info(
        "Workspace created with OWNER: workspace_id=%s, user_id=%s",
        workspace.workspace_id,
        creator_id,
    )
    return to_workspace_response(db, workspace)


def update_workspace(
    db: Session,
    workspace_id: uuid.UUID,
    fields: UpdateWorkspaceRequest,
    requester_id: uuid.UUID,
) -> WorkspaceResponse:
    """Partial update of workspace fields (OWNER only)."""
    logger.info("Updating workspace: workspace_id=%s, requester=%s", workspace_id, requester_id)

    require_owner(db, workspace_id, requester_id, for_update=True)
    workspace = get_active_workspace_or_raise(db, workspace_id)

    _apply_partial_update(workspace, fields)
    db.commit()
    db.refresh(workspace)
    logger.info("Workspace updated: workspace_id=%s", workspace_id)
    return to_workspace_response(db, workspace)


def get_workspace_settings(
    db: Session, workspace_id: uuid.UUID, requester_id: uuid.UUID
) -> WorkspaceSettingsResponse:
    logger.debug(
        "Fetching workspace settings: workspace_id=%s, requester=%s", workspace_id, requester_id
    )
    require_member(db, workspace_id, requester_id)
    return to_settings_response(get_active_workspace_or_raise(db, workspace_id))


def update_workspace_settings(
    db: Session,
    workspace_id: uuid.UUID,
    fields: UpdateWorkspaceRequest,
    requester_id: uuid.UUID,
) -> WorkspaceSettingsResponse:
    """Partial update of operational settings (OWNER or ADMIN)."""
    logger.info(
        "Updating workspace settings: workspace_id=%s, requester=%s", workspace_id, requester_id
    )

    require_admin_or_owner(db, workspace_id, requester_id, for_update=True)
    workspace = get_active_workspace_or_raise(db, workspace_id)

    _apply_partial_update(workspace, fields)
    db.commit()
    db.refresh(workspace)
    logger.info("Workspace settings updated: workspace_id=%s", workspace_id)
    return to_settings_response(workspace)


def delete_workspace(db: Session, workspace_id: uuid.UUID, requester_id: uuid.UUID) -> None:
    """Soft-delete (OWNER only). Memberships and join requests are kept as history."""
    logger.info("Deleting workspace: workspace_id=%s, requester=%s", workspace_id, requester_id)

    require_owner(db, workspace_id, requester_id, for_update=True)
    workspace = get_active_workspace_or_raise(db, workspace_id)

    workspaces.soft_delete_by_id(db, workspace.workspace_id)
    db.commit()
    logger.info("Workspace deleted: workspace_id=%s", workspace_id)


def reactivate_workspace(db: Session, workspace_id: uuid.UUID) -> WorkspaceResponse:
    """Undo a soft delete. Privileged: no membership check."""
    logger.info("Reactivating workspace: workspace_id=%s", workspace_id)

    if workspaces.reactivate_by_id(db, workspace_id) == 0:
        logger.warning("Workspace not found: %s", workspace_id)
        raise WorkspaceNotFoundError()
    db.commit()

    workspace = workspaces.find_by_id(db, workspace_id)
    logger.info("Workspace reactivated: workspace_id=%s", workspace_id)
    return to_workspace_response(db, workspace)


def search_workspaces(db: Session, name: str | None = None) -> list[WorkspaceResponse]:
    """List public active workspaces, optionally by name substring, newest first.

    Private workspaces are only reachable by id.
    """
    logger.debug("Searching workspaces: name=%s", name)
    rows = (
        workspaces.find_active_by_name(db, name.strip())
        if name and name.strip()
        else workspaces.find_all_active(db)
    )
    return [to_workspace_response(db, ws) for ws in rows if ws.is_public]
