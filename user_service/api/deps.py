"""Shared FastAPI dependencies for API routes."""

from __future__ import annotations

from fastapi import Cookie, Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from user_service.config import get_settings
from user_service.db.session import get_db  # re-export
from user_service.models.user import User
from user_service.services.auth import CredentialStore, get_user_from_token

__all__ = [
    "AUTH_COOKIE",
    "get_credential_store",
    "get_current_user",
    "get_db",
    "require_auth",
    "require_temp_auth_enabled",
]

# Cookie name for browser sessions
AUTH_COOKIE = "access_token"


def get_current_user(
    db: Session = Depends(get_db),
    authorization: str | None = Header(None),
    access_token: str | None = Cookie(None),
) -> User | None:
    """Return the authenticated user or None.

    Checks (in order):
    1. Authorization: Bearer <token> header
    2. access_token cookie
    """
    token: str | None = None

    if authorization and authorization.startswith("Bearer "):
        token = authorization[len("Bearer ") :]

    if token is None and access_token:
        token = access_token

    if token is None:
        return None

    return get_user_from_token(db, token)


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """Dependency that requires an authenticated, active user (401 otherwise)."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


def get_credential_store(request: Request) -> CredentialStore:
    """Return the app-scoped credential store created by create_app()."""
    return request.app.state.credential_store


def require_temp_auth_enabled() -> None:
    """Hide temporary signup/login when TEMP_AUTH_ENABLED=false."""
    if not get_settings().temp_auth_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
