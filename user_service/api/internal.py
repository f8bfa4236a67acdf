"""Internal administrative endpoints for operators and scripts.

These endpoints are secured with a static token (X-Internal-Token header),
NOT cookie-based auth.
"""

from __future__ import annotations

import logging
import secrets
import uuid

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from user_service.config import get_settings
from user_service.db.session import get_db
from user_service.schemas.user import UserRead
from user_service.schemas.workspace import WorkspaceResponse
from user_service.services import users, workspaces

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/internal", include_in_schema=False)


# ── Token dependency ────────────────────────────────────────────────


def _require_internal_token(x_internal_token: str = Header(...)) -> None:
    """Validate the internal token from the request header.

    Uses constant-time comparison. Raises 403 if the token is empty or does
    not match the configured value.
    """
    expected = get_settings().internal_job_token
    if not expected or not secrets.compare_digest(x_internal_token, expected):
        logger.warning("Internal endpoint auth failed: invalid or missing token")
        raise HTTPException(status_code=403, detail="Invalid internal token")


# ── Endpoints ───────────────────────────────────────────────────────


@router.post("/workspaces/{workspace_id}/reactivate", response_model=WorkspaceResponse)
def reactivate_workspace(
    workspace_id: uuid.UUID,
    db: Session = Depends(get_db),
    _token: None = Depends(_require_internal_token),
) -> WorkspaceResponse:
    """Undo a workspace soft delete."""
    return workspaces.reactivate_workspace(db, workspace_id)


@router.delete("/users/{user_id}", status_code=204)
def soft_delete_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    _token: None = Depends(_require_internal_token),
) -> None:
    """Soft-delete a user account. Memberships are left untouched."""
    users.soft_delete_user(db, user_id)


@router.post("/users/{user_id}/reactivate", response_model=UserRead)
def reactivate_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    _token: None = Depends(_require_internal_token),
) -> UserRead:
    return UserRead.model_validate(users.reactivate_user(db, user_id))


@router.get("/users/inactive", response_model=list[UserRead])
def list_inactive_users(
    db: Session = Depends(get_db),
    _token: None = Depends(_require_internal_token),
) -> list[UserRead]:
    return [UserRead.model_validate(u) for u in users.list_inactive_users(db)]
