from __future__ import annotations

from fastapi.testclient import TestClient


def _sign_up_and_login(client: TestClient, *, email: str) -> str:
    r = client.post(
        "/v1/members",
        json={"email": email, "name": "member", "password": "password123!"},
    )
    assert r.status_code == 201, r.text
    r = client.post("/v1/auth/login", json={"email": email, "password": "password123!"})
    assert r.status_code == 200, r.text
    return r.json()["payload"]["access_token"]


def test_admin_lists_members(client: TestClient) -> None:
    admin_access = _sign_up_and_login(client, email="admin@test.com")
    _sign_up_and_login(client, email="user@test.com")

    r = client.get(
        "/v1/admin/members", headers={"Authorization": f"Bearer {admin_access}"}
    )
    assert r.status_code == 200, r.text
    items = r.json()["payload"]
    assert [m["email"] for m in items] == ["admin@test.com", "user@test.com"]


def test_non_admin_is_forbidden(client: TestClient) -> None:
    _sign_up_and_login(client, email="admin@test.com")
    user_access = _sign_up_and_login(client, email="user@test.com")

    r = client.get(
        "/v1/admin/members", headers={"Authorization": f"Bearer {user_access}"}
    )
    assert r.status_code == 403
    assert r.json() == {"code": "FORBIDDEN", "message": "Access is denied."}
