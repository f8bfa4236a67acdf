"""Workspace API routes: lifecycle, settings, membership and join requests.

Domain errors raised by the services are mapped to HTTP responses by the
application-level handler registered in create_app().
"""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from user_service.api.deps import get_db, require_auth
from user_service.models.user import User
from user_service.schemas.workspace import (
    CreateWorkspaceRequest,
    JoinRequestResponse,
    UpdateJoinRequestRequest,
    UpdateMemberRoleRequest,
    UpdateWorkspaceRequest,
    UpdateWorkspaceSettingsRequest,
    WorkspaceMemberResponse,
    WorkspaceResponse,
    WorkspaceSettingsResponse,
)
from user_service.services import join_requests, membership, workspaces

router = APIRouter()


@router.post("", response_model=WorkspaceResponse, status_code=201)
def api_create_workspace(
    data: CreateWorkspaceRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> WorkspaceResponse:
    """Create a workspace; the caller becomes its OWNER."""
    return workspaces.create_workspace(db, data.name, data.description, current_user.user_id)


@router.get("", response_model=list[WorkspaceResponse])
def api_list_my_workspaces(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> list[WorkspaceResponse]:
    """Workspaces the caller is an active member of."""
    return membership.get_user_workspaces(db, current_user.user_id)


@router.get("/search", response_model=list[WorkspaceResponse])
def api_search_workspaces(
    name: Optional[str] = Query(None, max_length=50),
    db: Session = Depends(get_db),
    _auth: User = Depends(require_auth),
) -> list[WorkspaceResponse]:
    """Public active workspaces, optionally filtered by name substring."""
    return workspaces.search_workspaces(db, name)


@router.get("/{workspace_id}", response_model=WorkspaceResponse)
def api_get_workspace(
    workspace_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> WorkspaceResponse:
    return membership.get_workspace(db, workspace_id, current_user.user_id)


@router.put("/{workspace_id}", response_model=WorkspaceResponse)
def api_update_workspace(
    workspace_id: uuid.UUID,
    data: UpdateWorkspaceRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> WorkspaceResponse:
    return workspaces.update_workspace(db, workspace_id, data, current_user.user_id)


@router.delete("/{workspace_id}", status_code=204)
def api_delete_workspace(
    workspace_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> None:
    workspaces.delete_workspace(db, workspace_id, current_user.user_id)


# ── Settings ────────────────────────────────────────────────────────


@router.get("/{workspace_id}/settings", response_model=WorkspaceSettingsResponse)
def api_get_workspace_settings(
    workspace_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> WorkspaceSettingsResponse:
    return workspaces.get_workspace_settings(db, workspace_id, current_user.user_id)


@router.put("/{workspace_id}/settings", response_model=WorkspaceSettingsResponse)
def api_update_workspace_settings(
    workspace_id: uuid.UUID,
    data: UpdateWorkspaceSettingsRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> WorkspaceSettingsResponse:
    return workspaces.update_workspace_settings(db, workspace_id, data, current_user.user_id)


@router.put("/{workspace_id}/default", status_code=204)
def api_set_default_workspace(
    workspace_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> None:
    membership.set_default_workspace(db, workspace_id, current_user.user_id)


# ── Members ─────────────────────────────────────────────────────────


@router.get("/{workspace_id}/members", response_model=list[WorkspaceMemberResponse])
def api_list_members(
    workspace_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> list[WorkspaceMemberResponse]:
    return membership.get_workspace_members(db, workspace_id, current_user.user_id)


@router.put(
    "/{workspace_id}/members/{member_id}/role", response_model=WorkspaceMemberResponse
)
def api_update_member_role(
    workspace_id: uuid.UUID,
    member_id: uuid.UUID,
    data: UpdateMemberRoleRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> WorkspaceMemberResponse:
    """Change a member's role (OWNER only). Promoting to OWNER transfers ownership."""
    return membership.update_member_role(
        db, workspace_id, member_id, data.role_name, current_user.user_id
    )


@router.delete("/{workspace_id}/members/{member_id}", status_code=204)
def api_remove_member(
    workspace_id: uuid.UUID,
    member_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> None:
    membership.remove_member(db, workspace_id, member_id, current_user.user_id)


@router.post("/{workspace_id}/leave", status_code=204)
def api_leave_workspace(
    workspace_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> None:
    membership.leave_workspace(db, workspace_id, current_user.user_id)


# ── Join requests ───────────────────────────────────────────────────


@router.post(
    "/{workspace_id}/join-requests", response_model=JoinRequestResponse, status_code=201
)
def api_create_join_request(
    workspace_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> JoinRequestResponse:
    """File a join request for the caller."""
    return join_requests.create_join_request(db, workspace_id, current_user.user_id)


@router.get("/{workspace_id}/join-requests", response_model=list[JoinRequestResponse])
def api_list_join_requests(
    workspace_id: uuid.UUID,
    status: Optional[str] = Query(None, max_length=20),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> list[JoinRequestResponse]:
    """List join requests (OWNER or ADMIN), optionally filtered by status."""
    return join_requests.get_join_requests(db, workspace_id, current_user.user_id, status)


@router.post(
    "/{workspace_id}/join-requests/{user_id}/approve", response_model=JoinRequestResponse
)
def api_approve_join_request(
    workspace_id: uuid.UUID,
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> JoinRequestResponse:
    return join_requests.approve_join_request(db, workspace_id, user_id, current_user.user_id)


@router.post(
    "/{workspace_id}/join-requests/{user_id}/reject", response_model=JoinRequestResponse
)
def api_reject_join_request(
    workspace_id: uuid.UUID,
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> JoinRequestResponse:
    return join_requests.reject_join_request(db, workspace_id, user_id, current_user.user_id)


@router.put(
    "/{workspace_id}/join-requests/by-id/{request_id}", response_model=JoinRequestResponse
)
def api_update_join_request(
    workspace_id: uuid.UUID,
    request_id: uuid.UUID,
    data: UpdateJoinRequestRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> JoinRequestResponse:
    """Approve or reject a join request by its id."""
    return join_requests.update_join_request(
        db, workspace_id, request_id, data.status, current_user.user_id
    )
