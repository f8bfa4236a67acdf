"""UserProfile lookups."""

from __future__ import annotations

import uuid
from collections.abc import Iterable

from sqlalchemy.orm import Session

from user_service.models.user_profile import UserProfile


def find_by_user_id(db: Session, user_id: uuid.UUID) -> UserProfile | None:
    return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()


def find_all_by_user_id_in(
    db: Session, user_ids: Iterable[uuid.UUID]
) -> dict[uuid.UUID, UserProfile]:
    """Return profiles keyed by user_id; users without a profile are absent."""
    ids = list(user_ids)
    if not ids:
        return {}
    rows = db.query(UserProfile).filter(UserProfile.user_id.in_(ids)).all()
    return {row.user_id: row for row in rows}


def save(db: Session, profile: UserProfile) -> UserProfile:
    db.add(profile)
    return profile
