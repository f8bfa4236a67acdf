"""Tests for profile image URL storage."""

from __future__ import annotations

import uuid

import pytest

from user_service.models import Image
from user_service.services import images
from user_service.services.errors import UserNotFoundError


class TestImageUrls:
    def test_default_url_when_none_stored(self, db, alice):
        assert images.get_image_url(db, alice.user_id) == "/images/default-profile.png"

    def test_save_then_replace(self, db, alice):
        images.save_image_url(db, alice.user_id, "https://cdn/1.png")
        images.save_image_url(db, alice.user_id, "https://cdn/2.png")

        assert images.get_image_url(db, alice.user_id) == "https://cdn/2.png"
        assert db.query(Image).count() == 1

    def test_delete(self, db, alice):
        images.save_image_url(db, alice.user_id, "https://cdn/1.png")
        assert images.delete_image_url(db, alice.user_id) is True
        assert images.delete_image_url(db, alice.user_id) is False
        assert images.get_image_url(db, alice.user_id) == "/images/default-profile.png"

    def test_unknown_user(self, db):
        with pytest.raises(UserNotFoundError):
            images.save_image_url(db, uuid.uuid4(), "https://cdn/1.png")
        with pytest.raises(UserNotFoundError):
            images.get_image_url(db, uuid.uuid4())
