"""Response assembly: join workspace, membership and user records into views.

Missing User or UserProfile records degrade to placeholder values so that one
deleted account never fails a whole listing.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy.orm import Session

from user_service.models.user import User
from user_service.models.user_profile import UserProfile
from user_service.models.workspace import Workspace
from user_service.models.workspace_join_request import WorkspaceJoinRequest
from user_service.models.workspace_member import WorkspaceMember
from user_service.schemas.workspace import (
    JoinRequestResponse,
    JoinRequestStatus,
    WorkspaceMemberResponse,
    WorkspaceResponse,
    WorkspaceRole,
    WorkspaceSettingsResponse,
)
from user_service.store import user_profiles, users, workspace_members

logger = logging.getLogger(__name__)

DELETED_USER_NAME = "Deleted User"
UNKNOWN_USER_EMAIL = "unknown@user.com"


def _display_identity(
    user: User | None, profile: UserProfile | None
) -> tuple[str, str, str | None]:
    """Return (name, email, profile_image_url) with placeholders for missing records."""
    name = profile.name if profile is not None else DELETED_USER_NAME
    email = user.email if user is not None else UNKNOWN_USER_EMAIL
    image_url = profile.profile_image_url if profile is not None else None
    return name, email, image_url


def _load_identities(
    db: Session, user_ids: Sequence[uuid.UUID]
) -> dict[uuid.UUID, tuple[str, str, str | None]]:
    """Batch-resolve display identities for user_ids (two queries total)."""
    unique_ids = list(dict.fromkeys(user_ids))
    user_map = {u.user_id: u for u in users.find_all_by_id_in(db, unique_ids)}
    profile_map = user_profiles.find_all_by_user_id_in(db, unique_ids)
    return {
        uid: _display_identity(user_map.get(uid), profile_map.get(uid)) for uid in unique_ids
    }


# ── Workspace ────────────────────────────────────────────────────────


def to_workspace_response(db: Session, workspace: Workspace) -> WorkspaceResponse:
    """Build the workspace view. Owner comes from the OWNER membership."""
    owner = workspace_members.find_owner_by_workspace_id(db, workspace.workspace_id)
    if owner is None:
        logger.warning(
            "Workspace has no active OWNER membership: workspace_id=%s",
            workspace.workspace_id,
        )
        owner_id = workspace.owner_id
    else:
        owner_id = owner.user_id
        if owner_id != workspace.owner_id:
            logger.warning(
                "Workspace owner_id out of sync with OWNER membership: workspace_id=%s",
                workspace.workspace_id,
            )

    name, email, _ = _display_identity(
        users.find_by_id(db, owner_id), user_profiles.find_by_user_id(db, owner_id)
    )
    return WorkspaceResponse(
        workspace_id=workspace.workspace_id,
        name=workspace.name,
        description=workspace.description,
        owner_id=owner_id,
        owner_name=name,
        owner_email=email,
        is_public=workspace.is_public,
        need_approved=workspace.need_approved,
        is_active=workspace.is_active,
        created_at=workspace.created_at,
        updated_at=workspace.updated_at,
    )


def to_settings_response(workspace: Workspace) -> WorkspaceSettingsResponse:
    return WorkspaceSettingsResponse(
        workspace_id=workspace.workspace_id,
        workspace_name=workspace.name,
        workspace_description=workspace.description,
        is_public=workspace.is_public,
        requires_approval=workspace.need_approved,
        only_owner_can_invite=False,  # not stored
    )


# ── Members ──────────────────────────────────────────────────────────


def to_member_responses(
    db: Session, members: Sequence[WorkspaceMember]
) -> list[WorkspaceMemberResponse]:
    identities = _load_identities(db, [m.user_id for m in members])
    result: list[WorkspaceMemberResponse] = []
    for member in members:
        name, email, image_url = identities[member.user_id]
        result.append(
            WorkspaceMemberResponse(
                id=member.id,
                workspace_id=member.workspace_id,
                user_id=member.user_id,
                user_name=name,
                user_email=email,
                profile_image_url=image_url,
                role_name=WorkspaceRole(member.role),
                is_default=member.is_default,
                is_active=member.is_active,
                joined_at=member.joined_at,
            )
        )
    return result


def to_member_response(db: Session, member: WorkspaceMember) -> WorkspaceMemberResponse:
    return to_member_responses(db, [member])[0]


# ── Join requests ────────────────────────────────────────────────────


def to_join_request_responses(
    db: Session, requests: Sequence[WorkspaceJoinRequest]
) -> list[JoinRequestResponse]:
    identities = _load_identities(db, [r.user_id for r in requests])
    result: list[JoinRequestResponse] = []
    for req in requests:
        name, email, _ = identities[req.user_id]
        result.append(
            JoinRequestResponse(
                id=req.join_request_id,
                workspace_id=req.workspace_id,
                user_id=req.user_id,
                user_name=name,
                user_email=email,
                status=JoinRequestStatus(req.status),
                requested_at=req.requested_at,
                updated_at=req.updated_at,
            )
        )
    return result


def to_join_request_response(db: Session, request: WorkspaceJoinRequest) -> JoinRequestResponse:
    return to_join_request_responses(db, [request])[0]
