"""User and UserProfile lookups."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from user_service.models.user import User
from user_service.models.user_profile import UserProfile
from user_service.store import LIKE_ESCAPE, contains_pattern


def find_by_id(db: Session, user_id: uuid.UUID) -> User | None:
    """Return the user regardless of active flag."""
    return db.get(User, user_id)


def find_active_by_id(db: Session, user_id: uuid.UUID) -> User | None:
    return (
        db.query(User)
        .filter(User.user_id == user_id, User.is_active == True)
        .first()
    )


def find_active_by_email(db: Session, email: str) -> User | None:
    return (
        db.query(User)
        .filter(User.email == email, User.is_active == True)
        .first()
    )


def exists_by_email(db: Session, email: str, *, active_only: bool = False) -> bool:
    query = db.query(User.user_id).filter(User.email == email)
    if active_only:
        query = query.filter(User.is_active == True)
    return query.first() is not None


def find_all_by_id_in(db: Session, user_ids: Iterable[uuid.UUID]) -> list[User]:
    ids = list(user_ids)
    if not ids:
        return []
    return db.query(User).filter(User.user_id.in_(ids)).all()


def find_all_active(db: Session) -> list[User]:
    return (
        db.query(User)
        .filter(User.is_active == True)
        .order_by(User.created_at.desc())
        .all()
    )


def find_inactive(db: Session) -> list[User]:
    return (
        db.query(User)
        .filter(User.is_active == False)
        .order_by(User.deleted_at.desc())
        .all()
    )


def search_active_by_name(db: Session, name: str) -> list[User]:
    """Active users whose profile display name contains *name* (case-insensitive)."""
    pattern = contains_pattern(name)
    return (
        db.query(User)
        .join(UserProfile, UserProfile.user_id == User.user_id)
        .filter(User.is_active == True, UserProfile.name.ilike(pattern, escape=LIKE_ESCAPE))
        .order_by(UserProfile.name.asc())
        .all()
    )


def count_active(db: Session) -> int:
    return db.query(func.count(User.user_id)).filter(User.is_active == True).scalar() or 0


def soft_delete_by_id(db: Session, user_id: uuid.UUID) -> int:
    """Deactivate the user. Returns the number of rows updated."""
    result = db.execute(
        update(User)
        .where(User.user_id == user_id)
        .values(is_active=False, deleted_at=datetime.now(UTC))
    )
    return result.rowcount


def reactivate_by_id(db: Session, user_id: uuid.UUID) -> int:
    result = db.execute(
        update(User)
        .where(User.user_id == user_id)
        .values(is_active=True, deleted_at=None)
    )
    return result.rowcount


def save(db: Session, user: User) -> User:
    db.add(user)
    return user
