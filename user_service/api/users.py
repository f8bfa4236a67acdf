"""User directory API routes: lookups, search, profile and image URL."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from user_service.api.deps import get_db, require_auth
from user_service.models.user import User
from user_service.schemas.user import (
    EmailAvailabilityResponse,
    ImageUrlRequest,
    ImageUrlResponse,
    UserCountResponse,
    UserIdsRequest,
    UserProfileResponse,
    UserProfileUpdate,
    UserRead,
)
from user_service.services import images, users

router = APIRouter()


def _require_self(user_id: uuid.UUID, current_user: User) -> None:
    if user_id != current_user.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot modify another user's image",
        )


@router.get("", response_model=list[UserRead])
def api_list_users(
    db: Session = Depends(get_db),
    _auth: User = Depends(require_auth),
) -> list[UserRead]:
    """List active users, newest first."""
    return [UserRead.model_validate(u) for u in users.list_active_users(db)]


@router.get("/search", response_model=list[UserRead])
def api_search_users(
    q: str = Query(..., min_length=1, max_length=255),
    db: Session = Depends(get_db),
    _auth: User = Depends(require_auth),
) -> list[UserRead]:
    """Exact match for an email-shaped query, otherwise display-name substring."""
    return [UserRead.model_validate(u) for u in users.search_users(db, q)]


@router.get("/email-availability", response_model=EmailAvailabilityResponse)
def api_email_availability(
    email: str = Query(..., min_length=1, max_length=255),
    db: Session = Depends(get_db),
) -> EmailAvailabilityResponse:
    return EmailAvailabilityResponse(email=email, available=users.is_email_available(db, email))


@router.get("/count", response_model=UserCountResponse)
def api_count_users(
    db: Session = Depends(get_db),
    _auth: User = Depends(require_auth),
) -> UserCountResponse:
    return UserCountResponse(active_users=users.get_active_user_count(db))


@router.post("/batch", response_model=list[UserRead])
def api_batch_users(
    body: UserIdsRequest,
    db: Session = Depends(get_db),
    _auth: User = Depends(require_auth),
) -> list[UserRead]:
    """Look up many users at once. Unknown ids are skipped."""
    return [UserRead.model_validate(u) for u in users.get_users_by_ids(db, body.user_ids)]


@router.get("/me/profile", response_model=UserProfileResponse)
def api_get_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> UserProfileResponse:
    return UserProfileResponse.model_validate(users.get_profile(db, current_user.user_id))


@router.patch("/me/profile", response_model=UserProfileResponse)
def api_update_my_profile(
    body: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> UserProfileResponse:
    """Partial profile update. Omitted fields are left unchanged."""
    profile = users.update_profile(db, current_user.user_id, body)
    return UserProfileResponse.model_validate(profile)


@router.get("/{user_id}", response_model=UserRead)
def api_get_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    _auth: User = Depends(require_auth),
) -> UserRead:
    return UserRead.model_validate(users.get_active_user(db, user_id))


# ── Profile image URL ───────────────────────────────────────────────


@router.get("/{user_id}/image", response_model=ImageUrlResponse)
def api_get_image(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    _auth: User = Depends(require_auth),
) -> ImageUrlResponse:
    """Return the user's image URL, or the default URL when none is stored."""
    return ImageUrlResponse(user_id=user_id, image_url=images.get_image_url(db, user_id))


@router.put("/{user_id}/image", response_model=ImageUrlResponse)
def api_save_image(
    user_id: uuid.UUID,
    body: ImageUrlRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> ImageUrlResponse:
    _require_self(user_id, current_user)
    url = images.save_image_url(db, user_id, body.image_url)
    return ImageUrlResponse(user_id=user_id, image_url=url)


@router.delete("/{user_id}/image", status_code=204)
def api_delete_image(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
) -> None:
    _require_self(user_id, current_user)
    if not images.delete_image_url(db, user_id):
        raise HTTPException(status_code=404, detail="Image not found")
