"""Tests for the user directory service and profile updates."""

from __future__ import annotations

import uuid

import pytest

from tests.factories import make_user
from user_service.models import User
from user_service.schemas.user import UserProfileUpdate
from user_service.services import users
from user_service.services.errors import ProfileNotFoundError, UserNotFoundError


class TestLookups:
    def test_get_active_user(self, db, alice):
        assert users.get_active_user(db, alice.user_id).email == "alice@example.com"

    def test_get_inactive_user_raises(self, db):
        gone = make_user(db, "Gone", is_active=False)
        with pytest.raises(UserNotFoundError):
            users.get_active_user(db, gone.user_id)

    def test_batch_lookup_skips_unknown_ids(self, db, alice, bob):
        found = users.get_users_by_ids(db, [alice.user_id, uuid.uuid4(), bob.user_id])
        assert {u.user_id for u in found} == {alice.user_id, bob.user_id}

    def test_batch_lookup_empty(self, db):
        assert users.get_users_by_ids(db, []) == []

    def test_active_and_inactive_lists(self, db, alice):
        gone = make_user(db, "Gone", is_active=False)
        assert [u.user_id for u in users.list_active_users(db)] == [alice.user_id]
        assert [u.user_id for u in users.list_inactive_users(db)] == [gone.user_id]
        assert users.get_active_user_count(db) == 1


class TestSearchUsers:
    def test_email_query_is_exact_match(self, db, alice, bob):
        result = users.search_users(db, "alice@example.com")
        assert [u.user_id for u in result] == [alice.user_id]
        assert users.search_users(db, "alice@example.co") == []

    def test_name_query_is_substring(self, db, alice, bob):
        make_user(db, "Alicia")
        names = sorted(u.email.split("@")[0] for u in users.search_users(db, "ali"))
        assert len(names) == 2
        assert "alice" in names

    def test_inactive_users_excluded(self, db):
        make_user(db, "Dormant", "dormant@example.com", is_active=False)
        assert users.search_users(db, "dormant@example.com") == []
        assert users.search_users(db, "Dormant") == []

    def test_blank_query(self, db, alice):
        assert users.search_users(db, "   ") == []

    def test_wildcards_in_name_match_literally(self, db, alice):
        ann = make_user(db, "Ann_Lee", "ann@example.com")
        make_user(db, "AnnXLee", "annx@example.com")
        sam = make_user(db, "50% Sam", "sam@example.com")
        assert [u.user_id for u in users.search_users(db, "n_L")] == [ann.user_id]
        assert [u.user_id for u in users.search_users(db, "%")] == [sam.user_id]


class TestEmailAvailability:
    def test_taken_email(self, db, alice):
        assert users.is_email_available(db, "alice@example.com") is False

    def test_soft_deleted_email_still_taken(self, db):
        make_user(db, "Old", "old@example.com", is_active=False)
        assert users.is_email_available(db, "old@example.com") is False

    def test_free_email(self, db):
        assert users.is_email_available(db, "new@example.com") is True


class TestSoftDelete:
    def test_soft_delete_and_reactivate(self, db, alice):
        users.soft_delete_user(db, alice.user_id)
        row = db.get(User, alice.user_id)
        assert row.is_active is False
        assert row.deleted_at is not None

        restored = users.reactivate_user(db, alice.user_id)
        assert restored.is_active is True
        assert restored.deleted_at is None

    def test_unknown_user(self, db):
        with pytest.raises(UserNotFoundError):
            users.soft_delete_user(db, uuid.uuid4())
        with pytest.raises(UserNotFoundError):
            users.reactivate_user(db, uuid.uuid4())


class TestProfiles:
    def test_partial_update(self, db, alice):
        profile = users.update_profile(
            db, alice.user_id, UserProfileUpdate(profile_image_url="https://img/a.png")
        )
        assert profile.name == "Alice"
        assert profile.profile_image_url == "https://img/a.png"

        profile = users.update_profile(db, alice.user_id, UserProfileUpdate(name="Ally"))
        assert profile.name == "Ally"
        assert profile.profile_image_url == "https://img/a.png"

    def test_missing_profile(self, db):
        bare = make_user(db, "Bare", with_profile=False)
        with pytest.raises(ProfileNotFoundError):
            users.get_profile(db, bare.user_id)
        with pytest.raises(ProfileNotFoundError):
            users.update_profile(db, bare.user_id, UserProfileUpdate(name="X"))
