"""Row factories and auth helpers shared by tests."""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session


def make_user(
    db: Session,
    name: str = "Alice",
    email: str | None = None,
    *,
    with_profile: bool = True,
    is_active: bool = True,
):
    """Insert a User (and by default its UserProfile) and commit."""
    from user_service.models import User, UserProfile

    user = User(
        user_id=uuid.uuid4(),
        email=email or f"{name.lower()}-{uuid.uuid4().hex[:8]}@example.com",
        provider="google",
        is_active=is_active,
    )
    db.add(user)
    db.flush()
    if with_profile:
        db.add(UserProfile(user_id=user.user_id, name=name, email=user.email))
    db.commit()
    db.refresh(user)
    return user


def add_member(db: Session, workspace_id: uuid.UUID, user_id: uuid.UUID, role: str = "MEMBER"):
    """Insert an active, non-default membership and commit."""
    from user_service.models import WorkspaceMember

    member = WorkspaceMember(
        id=uuid.uuid4(),
        workspace_id=workspace_id,
        user_id=user_id,
        role=role,
        is_default=False,
        is_active=True,
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


def auth_headers(user) -> dict[str, str]:
    """Bearer header carrying a real JWT for *user*."""
    from user_service.services.auth import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user.user_id)}"}


