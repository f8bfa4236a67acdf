"""HTTP tests for /api/workspaces against an in-memory database."""

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from tests.factories import add_member, auth_headers


def _create(client: TestClient, user, name: str = "Team") -> dict:
    resp = client.post("/api/workspaces", json={"name": name}, headers=auth_headers(user))
    assert resp.status_code == 201
    return resp.json()


class TestWorkspaceCrud:
    def test_requires_auth(self, client_with_db: TestClient):
        assert client_with_db.get("/api/workspaces").status_code == 401

    def test_create_and_get(self, client_with_db: TestClient, alice):
        ws = _create(client_with_db, alice)
        assert ws["owner_id"] == str(alice.user_id)
        assert ws["is_public"] is False
        assert ws["need_approved"] is True

        resp = client_with_db.get(
            f"/api/workspaces/{ws['workspace_id']}", headers=auth_headers(alice)
        )
        assert resp.status_code == 200
        assert resp.json()["owner_name"] == "Alice"

    def test_create_validates_name(self, client_with_db: TestClient, alice):
        resp = client_with_db.post(
            "/api/workspaces", json={"name": "x" * 51}, headers=auth_headers(alice)
        )
        assert resp.status_code == 422

    def test_non_member_gets_403(self, client_with_db: TestClient, alice, carol):
        ws = _create(client_with_db, alice)
        resp = client_with_db.get(
            f"/api/workspaces/{ws['workspace_id']}", headers=auth_headers(carol)
        )
        assert resp.status_code == 403
        assert resp.json()["detail"] == "User is not a member of this workspace"

    def test_unknown_workspace_for_member_path(self, client_with_db: TestClient, alice):
        resp = client_with_db.post(
            f"/api/workspaces/{uuid.uuid4()}/join-requests", headers=auth_headers(alice)
        )
        assert resp.status_code == 404

    def test_list_mine_marks_default(self, client_with_db: TestClient, alice):
        _create(client_with_db, alice, "One")
        _create(client_with_db, alice, "Two")
        resp = client_with_db.get("/api/workspaces", headers=auth_headers(alice))
        assert resp.status_code == 200
        defaults = {w["name"]: w["is_default"] for w in resp.json()}
        assert defaults == {"One": False, "Two": True}

    def test_update_and_delete(self, client_with_db: TestClient, alice):
        ws = _create(client_with_db, alice)
        url = f"/api/workspaces/{ws['workspace_id']}"

        resp = client_with_db.put(
            url, json={"name": "", "is_public": True}, headers=auth_headers(alice)
        )
        assert resp.status_code == 200
        assert resp.json()["name"] == "Team"
        assert resp.json()["is_public"] is True

        assert client_with_db.delete(url, headers=auth_headers(alice)).status_code == 204
        assert client_with_db.get(url, headers=auth_headers(alice)).status_code == 404

    def test_search_public_only(self, client_with_db: TestClient, alice, bob):
        ws = _create(client_with_db, alice, "Open Team")
        client_with_db.put(
            f"/api/workspaces/{ws['workspace_id']}",
            json={"is_public": True},
            headers=auth_headers(alice),
        )
        _create(client_with_db, bob, "Closed Team")

        resp = client_with_db.get(
            "/api/workspaces/search", params={"name": "team"}, headers=auth_headers(bob)
        )
        assert resp.status_code == 200
        assert [w["name"] for w in resp.json()] == ["Open Team"]


class TestSettingsAndDefault:
    def test_settings_roundtrip(self, client_with_db: TestClient, alice):
        ws = _create(client_with_db, alice)
        url = f"/api/workspaces/{ws['workspace_id']}/settings"

        resp = client_with_db.put(
            url, json={"need_approved": False}, headers=auth_headers(alice)
        )
        assert resp.status_code == 200
        assert resp.json()["requires_approval"] is False

        resp = client_with_db.get(url, headers=auth_headers(alice))
        assert resp.json()["workspace_name"] == "Team"

    def test_set_default(self, client_with_db: TestClient, alice):
        first = _create(client_with_db, alice, "One")
        _create(client_with_db, alice, "Two")

        resp = client_with_db.put(
            f"/api/workspaces/{first['workspace_id']}/default", headers=auth_headers(alice)
        )
        assert resp.status_code == 204

        listing = client_with_db.get("/api/workspaces", headers=auth_headers(alice)).json()
        assert {w["name"]: w["is_default"] for w in listing} == {"One": True, "Two": False}


class TestMembersApi:
    def test_role_change_and_removal(self, client_with_db: TestClient, db, alice, bob):
        ws = _create(client_with_db, alice)
        ws_id = uuid.UUID(ws["workspace_id"])
        member = add_member(db, ws_id, bob.user_id)

        resp = client_with_db.put(
            f"/api/workspaces/{ws_id}/members/{member.id}/role",
            json={"role_name": "admin"},
            headers=auth_headers(alice),
        )
        assert resp.status_code == 200
        assert resp.json()["role_name"] == "ADMIN"

        resp = client_with_db.put(
            f"/api/workspaces/{ws_id}/members/{member.id}/role",
            json={"role_name": "OVERLORD"},
            headers=auth_headers(alice),
        )
        assert resp.status_code == 400

        resp = client_with_db.delete(
            f"/api/workspaces/{ws_id}/members/{member.id}", headers=auth_headers(alice)
        )
        assert resp.status_code == 204

        members = client_with_db.get(
            f"/api/workspaces/{ws_id}/members", headers=auth_headers(alice)
        ).json()
        bob_view = next(m for m in members if m["user_id"] == str(bob.user_id))
        assert bob_view["is_active"] is False

    def test_cannot_remove_owner(self, client_with_db: TestClient, alice):
        ws = _create(client_with_db, alice)
        members = client_with_db.get(
            f"/api/workspaces/{ws['workspace_id']}/members", headers=auth_headers(alice)
        ).json()
        resp = client_with_db.delete(
            f"/api/workspaces/{ws['workspace_id']}/members/{members[0]['id']}",
            headers=auth_headers(alice),
        )
        assert resp.status_code == 403

    def test_leave(self, client_with_db: TestClient, db, alice, bob):
        ws = _create(client_with_db, alice)
        add_member(db, uuid.UUID(ws["workspace_id"]), bob.user_id)

        url = f"/api/workspaces/{ws['workspace_id']}/leave"
        assert client_with_db.post(url, headers=auth_headers(bob)).status_code == 204
        assert client_with_db.post(url, headers=auth_headers(alice)).status_code == 403


class TestJoinRequestsApi:
    def test_request_approve_flow(self, client_with_db: TestClient, alice, bob):
        ws = _create(client_with_db, alice)
        base = f"/api/workspaces/{ws['workspace_id']}/join-requests"

        resp = client_with_db.post(base, headers=auth_headers(bob))
        assert resp.status_code == 201
        assert resp.json()["status"] == "PENDING"

        assert client_with_db.post(base, headers=auth_headers(bob)).status_code == 409

        resp = client_with_db.get(base, params={"status": "pending"}, headers=auth_headers(alice))
        assert resp.status_code == 200
        assert [r["user_id"] for r in resp.json()] == [str(bob.user_id)]

        resp = client_with_db.post(f"{base}/{bob.user_id}/approve", headers=auth_headers(alice))
        assert resp.status_code == 200
        assert resp.json()["status"] == "APPROVED"

        resp = client_with_db.post(f"{base}/{bob.user_id}/approve", headers=auth_headers(alice))
        assert resp.status_code == 404

        resp = client_with_db.get(
            f"/api/workspaces/{ws['workspace_id']}", headers=auth_headers(bob)
        )
        assert resp.status_code == 200

    def test_update_by_id(self, client_with_db: TestClient, alice, bob):
        ws = _create(client_with_db, alice)
        base = f"/api/workspaces/{ws['workspace_id']}/join-requests"
        request_id = client_with_db.post(base, headers=auth_headers(bob)).json()["id"]

        resp = client_with_db.put(
            f"{base}/by-id/{request_id}",
            json={"status": "MAYBE"},
            headers=auth_headers(alice),
        )
        assert resp.status_code == 400

        resp = client_with_db.put(
            f"{base}/by-id/{request_id}",
            json={"status": "rejected"},
            headers=auth_headers(alice),
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "REJECTED"

    def test_reject_requires_admin(self, client_with_db: TestClient, alice, bob, carol):
        ws = _create(client_with_db, alice)
        base = f"/api/workspaces/{ws['workspace_id']}/join-requests"
        client_with_db.post(base, headers=auth_headers(bob))

        resp = client_with_db.post(f"{base}/{bob.user_id}/reject", headers=auth_headers(carol))
        assert resp.status_code == 403
