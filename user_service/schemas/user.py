"""User, profile and image schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    """Schema for reading user info (response)."""

    model_config = ConfigDict(from_attributes=True)

    user_id: uuid.UUID
    email: str
    provider: str
    is_active: bool
    created_at: datetime
    deleted_at: Optional[datetime] = None


class UserIdsRequest(BaseModel):
    """Batch lookup by user ids."""

    user_ids: list[uuid.UUID] = Field(default_factory=list, max_length=500)


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    profile_id: uuid.UUID
    user_id: uuid.UUID
    name: str
    email: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserProfileUpdate(BaseModel):
    """Partial profile update. Omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[str] = Field(None, max_length=100)
    profile_image_url: Optional[str] = Field(None, max_length=2048)


class EmailAvailabilityResponse(BaseModel):
    email: str
    available: bool


class UserCountResponse(BaseModel):
    active_users: int


class ImageUrlRequest(BaseModel):
    image_url: str = Field(..., min_length=1, max_length=2048)


class ImageUrlResponse(BaseModel):
    user_id: uuid.UUID
    image_url: str
