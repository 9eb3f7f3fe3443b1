from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from mall_api.core.security import issue_access_token
from mall_api.core.settings import get_settings


def _sign_up(client: TestClient, *, email: str, password: str = "password123!") -> dict:
    r = client.post(
        "/v1/members",
        json={"email": email, "name": "member", "password": password},
    )
    assert r.status_code == 201, r.text
    return r.json()["payload"]


def _login(client: TestClient, *, email: str, password: str = "password123!") -> str:
    r = client.post("/v1/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    token = r.json()["payload"]
    assert token["token_type"] == "Bearer"
    assert token["expires_in"] > 0
    return token["access_token"]


def test_login_and_me(client: TestClient) -> None:
    member = _sign_up(client, email="me@test.com")
    access = _login(client, email="me@test.com")

    r = client.get("/v1/members/me", headers={"Authorization": f"Bearer {access}"})
    assert r.status_code == 200, r.text
    assert r.json()["payload"]["member_id"] == member["member_id"]


def test_wrong_password_is_invalid_credentials(client: TestClient) -> None:
    _sign_up(client, email="pw@test.com")
    r = client.post(
        "/v1/auth/login", json={"email": "pw@test.com", "password": "wrong-password"}
    )
    assert r.status_code == 401
    assert r.json()["code"] == "INVALID_CREDENTIALS"


def test_unknown_email_is_invalid_credentials(client: TestClient) -> None:
    r = client.post(
        "/v1/auth/login", json={"email": "ghost@test.com", "password": "password123!"}
    )
    assert r.status_code == 401
    assert r.json()["code"] == "INVALID_CREDENTIALS"


def test_me_requires_bearer_token(client: TestClient) -> None:
    r = client.get("/v1/members/me")
    assert r.status_code == 401
    assert r.json() == {
        "code": "UNAUTHORIZED",
        "message": "Authentication is required.",
    }


def test_me_rejects_garbage_token(client: TestClient) -> None:
    r = client.get("/v1/members/me", headers={"Authorization": "Bearer nope"})
    assert r.status_code == 401
    assert r.json()["code"] == "UNAUTHORIZED"


def test_me_rejects_expired_token(client: TestClient) -> None:
    member = _sign_up(client, email="old@test.com")
    expired, _ = issue_access_token(
        member_id=uuid.UUID(member["member_id"]),
        settings=get_settings(),
        ttl_seconds=-60,
    )
    r = client.get("/v1/members/me", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401
    assert r.json()["code"] == "TOKEN_EXPIRED"


def test_token_for_deleted_member_is_unauthorized(client: TestClient) -> None:
    token, _ = issue_access_token(member_id=uuid.uuid4(), settings=get_settings())
    r = client.get("/v1/members/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["code"] == "UNAUTHORIZED"
