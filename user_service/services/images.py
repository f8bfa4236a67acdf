"""Profile image URL storage, one URL per user."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from user_service.config import get_settings
from user_service.models.image import Image
from user_service.services.errors import UserNotFoundError
from user_service.store import images, users

logger = logging.getLogger(__name__)


def _require_user(db: Session, user_id: uuid.UUID) -> None:
    if users.find_by_id(db, user_id) is None:
        logger.warning("User not found: %s", user_id)
        raise UserNotFoundError()


def save_image_url(db: Session, user_id: uuid.UUID, image_url: str) -> str:
    """Insert or replace the user's image URL."""
    logger.info("Saving image URL: user_id=%s", user_id)
    _require_user(db, user_id)

    image = images.find_by_user_id(db, user_id)
    if image is None:
        images.save(db, Image(user_id=user_id, image_url=image_url))
    else:
        image.image_url = image_url
    db.commit()
    return image_url


def get_image_url(db: Session, user_id: uuid.UUID) -> str:
    """Return the stored URL, or the configured default when none is set."""
    _require_user(db, user_id)
    image = images.find_by_user_id(db, user_id)
    if image is None or not image.image_url:
        return get_settings().default_profile_image_url
    return image.image_url


def delete_image_url(db: Session, user_id: uuid.UUID) -> bool:
    """Remove the stored URL. Returns False if there was nothing to delete."""
    logger.info("Deleting image URL: user_id=%s", user_id)
    _require_user(db, user_id)
    deleted = images.delete_by_user_id(db, user_id)
    db.commit()
    return deleted
