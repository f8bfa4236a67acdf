"""Image URL lookups and writes."""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from user_service.models.image import Image


def find_by_user_id(db: Session, user_id: uuid.UUID) -> Image | None:
    return db.get(Image, user_id)


def save(db: Session, image: Image) -> Image:
    db.add(image)
    return image


def delete_by_user_id(db: Session, user_id: uuid.UUID) -> bool:
    image = db.get(Image, user_id)
    if image is None:
        return False
    db.delete(image)
    return True
