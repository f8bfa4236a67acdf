"""Authentication schemas."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

_EMAIL_PATTERN = r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+$"


class SignupRequest(BaseModel):
    """Schema for temporary email/password signup."""

    email: str = Field(..., max_length=255, pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=50)


class LoginRequest(BaseModel):
    """Schema for login credentials."""

    email: str = Field(..., max_length=255, pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Schema for JWT token response."""

    access_token: str
    token_type: str = "bearer"
    user_id: uuid.UUID
