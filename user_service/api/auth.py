"""Authentication API routes (temporary email/password accounts)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from user_service.api.deps import (
    AUTH_COOKIE,
    get_credential_store,
    get_db,
    require_auth,
    require_temp_auth_enabled,
)
from user_service.config import get_settings
from user_service.models.user import User
from user_service.schemas.auth import LoginRequest, SignupRequest, TokenResponse
from user_service.schemas.user import UserRead
from user_service.services.auth import (
    CredentialStore,
    authenticate_user,
    create_access_token,
    signup,
)

router = APIRouter()


@router.post(
    "/signup",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_temp_auth_enabled)],
)
def api_signup(
    body: SignupRequest,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
) -> UserRead:
    """Create a temporary account. 409 when the email is taken."""
    user = signup(db, store, body.email, body.password, body.name)
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    dependencies=[Depends(require_temp_auth_enabled)],
)
def login(
    body: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
) -> TokenResponse:
    """Authenticate and return a JWT token.

    Also sets an httponly cookie for browser sessions.
    """
    user = authenticate_user(db, store, body.email, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token = create_access_token(user.user_id)

    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=60 * 60 * get_settings().access_token_expire_hours,
        path="/",
    )

    return TokenResponse(access_token=token, user_id=user.user_id)


@router.post("/logout")
def logout(response: Response) -> dict:
    """Clear the authentication cookie."""
    response.delete_cookie(key=AUTH_COOKIE, path="/")
    return {"detail": "Logged out"}


@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(require_auth)) -> UserRead:
    """Return the currently authenticated user's information."""
    return UserRead.model_validate(current_user)
