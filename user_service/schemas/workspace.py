"""Workspace, membership and join-request schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from user_service.services.errors import InvalidRoleError, InvalidStatusError


class WorkspaceRole(str, Enum):
    """Role of a member within a workspace."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"

    @classmethod
    def parse(cls, value: str | WorkspaceRole) -> WorkspaceRole:
        """Parse a raw role name (case-insensitive). Raises InvalidRoleError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidRoleError(f"Invalid workspace role: {value!r}") from None


class JoinRequestStatus(str, Enum):
    """Join request state. PENDING is the only non-terminal state."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: str | JoinRequestStatus) -> JoinRequestStatus:
        """Parse a raw status name (case-insensitive). Raises InvalidStatusError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidStatusError(f"Invalid join request status: {value!r}") from None


# ── Requests ─────────────────────────────────────────────────────────


class CreateWorkspaceRequest(BaseModel):
    """Schema for creating a workspace."""

    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=500)


class UpdateWorkspaceRequest(BaseModel):
    """Partial update. None or empty string leaves a field unchanged."""

    name: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = Field(None, max_length=500)
    is_public: Optional[bool] = None
    need_approved: Optional[bool] = None


class UpdateWorkspaceSettingsRequest(UpdateWorkspaceRequest):
    """Settings update (OWNER or ADMIN). Same partial-update rules."""

    only_owner_can_invite: Optional[bool] = None  # accepted, not stored


class UpdateMemberRoleRequest(BaseModel):
    role_name: str = Field(..., min_length=1, max_length=20)


class UpdateJoinRequestRequest(BaseModel):
    status: str = Field(..., min_length=1, max_length=20)


# ── Responses ────────────────────────────────────────────────────────


class WorkspaceResponse(BaseModel):
    """Workspace view with owner resolved from the OWNER membership."""

    model_config = ConfigDict(from_attributes=True)

    workspace_id: uuid.UUID
    name: str
    description: Optional[str] = None
    owner_id: uuid.UUID
    owner_name: str
    owner_email: str
    is_public: bool
    need_approved: bool
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    is_default: Optional[bool] = None  # set only in the caller's own workspace listing


class WorkspaceSettingsResponse(BaseModel):
    workspace_id: uuid.UUID
    workspace_name: str
    workspace_description: Optional[str] = None
    is_public: bool
    requires_approval: bool
    only_owner_can_invite: bool = False


class WorkspaceMemberResponse(BaseModel):
    """Member view with display identity resolved from User and UserProfile."""

    id: uuid.UUID
    workspace_id: uuid.UUID
    user_id: uuid.UUID
    user_name: str
    user_email: str
    profile_image_url: Optional[str] = None
    role_name: WorkspaceRole
    is_default: bool
    is_active: bool
    joined_at: datetime


class JoinRequestResponse(BaseModel):
    id: uuid.UUID
    workspace_id: uuid.UUID
    user_id: uuid.UUID
    user_name: str
    user_email: str
    status: JoinRequestStatus
    requested_at: datetime
    updated_at: Optional[datetime] = None
