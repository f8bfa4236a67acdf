"""Tests for internal administrative endpoints (/internal/*)."""

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from tests.test_constants import TEST_INTERNAL_JOB_TOKEN
from user_service.models import User

VALID_HEADERS = {"X-Internal-Token": TEST_INTERNAL_JOB_TOKEN}


class TestInternalToken:
    def test_missing_token_returns_422(self, client: TestClient):
        """Requests without the header fail header validation."""
        response = client.get("/internal/users/inactive")
        assert response.status_code == 422

    def test_wrong_token_returns_403(self, client: TestClient):
        response = client.get(
            "/internal/users/inactive", headers={"X-Internal-Token": "wrong-token"}
        )
        assert response.status_code == 403


class TestUserLifecycle:
    def test_soft_delete_then_reactivate(self, client_with_db: TestClient, db, alice):
        resp = client_with_db.delete(f"/internal/users/{alice.user_id}", headers=VALID_HEADERS)
        assert resp.status_code == 204
        assert db.get(User, alice.user_id).is_active is False

        resp = client_with_db.get("/internal/users/inactive", headers=VALID_HEADERS)
        assert [u["user_id"] for u in resp.json()] == [str(alice.user_id)]

        resp = client_with_db.post(
            f"/internal/users/{alice.user_id}/reactivate", headers=VALID_HEADERS
        )
        assert resp.status_code == 200
        assert resp.json()["is_active"] is True

    def test_unknown_user_returns_404(self, client_with_db: TestClient):
        resp = client_with_db.delete(f"/internal/users/{uuid.uuid4()}", headers=VALID_HEADERS)
        assert resp.status_code == 404


class TestWorkspaceReactivation:
    def test_reactivate_deleted_workspace(self, client_with_db: TestClient, db, alice, workspace):
        from user_service.services.workspaces import delete_workspace

        delete_workspace(db, workspace.workspace_id, alice.user_id)
        resp = client_with_db.post(
            f"/internal/workspaces/{workspace.workspace_id}/reactivate", headers=VALID_HEADERS
        )
        assert resp.status_code == 200
        assert resp.json()["is_active"] is True

    def test_unknown_workspace_returns_404(self, client_with_db: TestClient):
        resp = client_with_db.post(
            f"/internal/workspaces/{uuid.uuid4()}/reactivate", headers=VALID_HEADERS
        )
        assert resp.status_code == 404
