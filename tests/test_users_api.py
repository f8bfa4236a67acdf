"""HTTP tests for /api/users."""

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from tests.factories import auth_headers


class TestUsersApi:
    def test_get_user(self, client_with_db: TestClient, alice, bob):
        resp = client_with_db.get(f"/api/users/{bob.user_id}", headers=auth_headers(alice))
        assert resp.status_code == 200
        assert resp.json()["email"] == "bob@example.com"

    def test_get_unknown_user_returns_404(self, client_with_db: TestClient, alice):
        resp = client_with_db.get(f"/api/users/{uuid.uuid4()}", headers=auth_headers(alice))
        assert resp.status_code == 404
        assert resp.json()["detail"] == "User not found"

    def test_invalid_uuid_returns_422(self, client_with_db: TestClient, alice):
        resp = client_with_db.get("/api/users/not-a-uuid", headers=auth_headers(alice))
        assert resp.status_code == 422

    def test_search_and_count(self, client_with_db: TestClient, alice, bob):
        resp = client_with_db.get(
            "/api/users/search", params={"q": "bob@example.com"}, headers=auth_headers(alice)
        )
        assert [u["user_id"] for u in resp.json()] == [str(bob.user_id)]

        resp = client_with_db.get("/api/users/count", headers=auth_headers(alice))
        assert resp.json() == {"active_users": 2}

    def test_email_availability_is_public(self, client_with_db: TestClient, alice):
        resp = client_with_db.get(
            "/api/users/email-availability", params={"email": "alice@example.com"}
        )
        assert resp.status_code == 200
        assert resp.json() == {"email": "alice@example.com", "available": False}

    def test_batch(self, client_with_db: TestClient, alice, bob):
        resp = client_with_db.post(
            "/api/users/batch",
            json={"user_ids": [str(bob.user_id), str(uuid.uuid4())]},
            headers=auth_headers(alice),
        )
        assert resp.status_code == 200
        assert [u["user_id"] for u in resp.json()] == [str(bob.user_id)]


class TestProfileApi:
    def test_get_and_patch_my_profile(self, client_with_db: TestClient, alice):
        resp = client_with_db.get("/api/users/me/profile", headers=auth_headers(alice))
        assert resp.status_code == 200
        assert resp.json()["name"] == "Alice"

        resp = client_with_db.patch(
            "/api/users/me/profile", json={"name": "Ally"}, headers=auth_headers(alice)
        )
        assert resp.status_code == 200
        assert resp.json()["name"] == "Ally"

    def test_patch_rejects_long_name(self, client_with_db: TestClient, alice):
        resp = client_with_db.patch(
            "/api/users/me/profile", json={"name": "x" * 51}, headers=auth_headers(alice)
        )
        assert resp.status_code == 422


class TestImageApi:
    def test_image_lifecycle(self, client_with_db: TestClient, alice):
        url = f"/api/users/{alice.user_id}/image"

        resp = client_with_db.get(url, headers=auth_headers(alice))
        assert resp.json()["image_url"] == "/images/default-profile.png"

        resp = client_with_db.put(
            url, json={"image_url": "https://cdn/a.png"}, headers=auth_headers(alice)
        )
        assert resp.status_code == 200
        assert client_with_db.get(url, headers=auth_headers(alice)).json()["image_url"] == (
            "https://cdn/a.png"
        )

        assert client_with_db.delete(url, headers=auth_headers(alice)).status_code == 204
        assert client_with_db.delete(url, headers=auth_headers(alice)).status_code == 404

    def test_cannot_modify_other_users_image(self, client_with_db: TestClient, alice, bob):
        resp = client_with_db.put(
            f"/api/users/{bob.user_id}/image",
            json={"image_url": "https://cdn/a.png"},
            headers=auth_headers(alice),
        )
        assert resp.status_code == 403
