"""User directory service: lookups, search, profiles and account lifecycle."""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Sequence

from sqlalchemy.orm import Session

from user_service.models.user import User
from user_service.models.user_profile import UserProfile
from user_service.schemas.user import UserProfileUpdate
from user_service.services.errors import ProfileNotFoundError, UserNotFoundError
from user_service.store import user_profiles, users

logger = logging.getLogger(__name__)

# Same shape accepted at signup; a match switches search to exact email lookup
EMAIL_QUERY_RE = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+$")


def get_active_user(db: Session, user_id: uuid.UUID) -> User:
    user = users.find_active_by_id(db, user_id)
    if user is None:
        logger.warning("User not found: %s", user_id)
        raise UserNotFoundError()
    return user


def list_active_users(db: Session) -> list[User]:
    return users.find_all_active(db)


def list_inactive_users(db: Session) -> list[User]:
    return users.find_inactive(db)


def get_users_by_ids(db: Session, user_ids: Sequence[uuid.UUID]) -> list[User]:
    """Batch lookup. Unknown ids are skipped; inactive users are included."""
    logger.debug("Batch user lookup: count=%d", len(user_ids))
    return users.find_all_by_id_in(db, user_ids)


def search_users(db: Session, query: str) -> list[User]:
    """Search active users.

    An email-shaped query matches the email exactly; anything else is a
    case-insensitive substring match on the profile display name.
    """
    term = (query or "").strip()
    if not term:
        return []
    logger.debug("Searching users: query=%s", term)
    if EMAIL_QUERY_RE.match(term):
        user = users.find_active_by_email(db, term)
        return [user] if user is not None else []
    return users.search_active_by_name(db, term)


def is_email_available(db: Session, email: str) -> bool:
    """True when no account (active or soft-deleted) holds this email."""
    return not users.exists_by_email(db, email.strip())


def get_active_user_count(db: Session) -> int:
    return users.count_active(db)


def soft_delete_user(db: Session, user_id: uuid.UUID) -> None:
    logger.info("Soft-deleting user: user_id=%s", user_id)
    if users.soft_delete_by_id(db, user_id) == 0:
        logger.warning("User not found: %s", user_id)
        raise UserNotFoundError()
    db.commit()


def reactivate_user(db: Session, user_id: uuid.UUID) -> User:
    logger.info("Reactivating user: user_id=%s", user_id)
    if users.reactivate_by_id(db, user_id) == 0:
        logger.warning("User not found: %s", user_id)
        raise UserNotFoundError()
    db.commit()
    return users.find_by_id(db, user_id)


# ── Profiles ─────────────────────────────────────────────────────────


def get_profile(db: Session, user_id: uuid.UUID) -> UserProfile:
    profile = user_profiles.find_by_user_id(db, user_id)
    if profile is None:
        logger.warning("Profile not found: user_id=%s", user_id)
        raise ProfileNotFoundError()
    return profile


def update_profile(db: Session, user_id: uuid.UUID, fields: UserProfileUpdate) -> UserProfile:
    """Partial profile update; fields left as None are unchanged."""
    logger.info("Updating profile: user_id=%s", user_id)
    profile = get_profile(db, user_id)

    if fields.name is not None:
        profile.name = fields.name
    if fields.email is not None:
        profile.email = fields.email
    if fields.profile_image_url is not None:
        profile.profile_image_url = fields.profile_image_url

    db.commit()
    db.refresh(profile)
    return profile
