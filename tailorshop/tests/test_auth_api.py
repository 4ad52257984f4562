from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from flask import Flask
from flask.testing import FlaskClient

from tailorshop.app import create_app, get_container

ADA = {"name": "Ada", "email": "ada@example.com", "password": "secret1"}


def _expired_token(app: Flask, user_id: int) -> str:
    issued = datetime.now(UTC) - timedelta(days=8)
    payload = {
        "sub": str(user_id),
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(days=7)).timestamp()),
    }
    return jwt.encode(payload, get_container(app).config.secret_key, algorithm="HS256")


def test_register_then_fetch_profile(client: FlaskClient) -> None:
    response = client.post("/api/auth/register", json=ADA)

    assert response.status_code == 201
    body = response.get_json()
    assert body["ok"] is True
    token = body["data"]["token"]
    assert body["data"]["user"]["name"] == "Ada"

    profile = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert profile.status_code == 200
    user = profile.get_json()["data"]["user"]
    assert user["name"] == "Ada"
    assert user["email"] == "ada@example.com"
    assert "password" not in user
    assert "passwordHash" not in user
    assert "createdAt" in user


def test_register_normalizes_email_and_blank_phone(client: FlaskClient) -> None:
    response = client.post(
        "/api/auth/register",
        json={"name": "  Ada ", "email": "ADA@Example.COM", "phone": "", "password": "secret1"},
    )

    assert response.status_code == 201
    user = response.get_json()["data"]["user"]
    assert user["name"] == "Ada"
    assert user["email"] == "ada@example.com"
    assert user["phone"] is None


def test_register_duplicate_email(client: FlaskClient) -> None:
    client.post("/api/auth/register", json=ADA)

    response = client.post(
        "/api/auth/register",
        json={"name": "Imposter", "email": "ada@example.com", "password": "another1"},
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "duplicate_identity"


def test_register_duplicate_phone(client: FlaskClient) -> None:
    client.post(
        "/api/auth/register",
        json={"name": "Ada", "phone": "08012345678", "password": "secret1"},
    )

    response = client.post(
        "/api/auth/register",
        json={"name": "Bola", "phone": "08012345678", "password": "secret1"},
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "duplicate_identity"


@pytest.mark.parametrize(
    ("payload", "field", "error_type"),
    [
        ({"name": "A", "email": "a@example.com", "password": "secret1"}, "name", "name_invalid"),
        ({"name": "Ada", "password": "secret1"}, "body", "contact_required"),
        ({"name": "Ada", "phone": "12345", "password": "secret1"}, "phone", "phone_invalid"),
        ({"name": "Ada", "email": "a@example.com", "password": "12345"}, "password", "password_too_short"),
        ({"name": "Ada", "email": "not-an-email", "password": "secret1"}, "email", "value_error"),
        ({"email": "a@example.com", "password": "secret1"}, "name", "missing"),
    ],
)
def test_register_validation_errors(
    client: FlaskClient, payload: dict, field: str, error_type: str
) -> None:
    response = client.post("/api/auth/register", json=payload)

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"] == "validation_error"
    first = body["context"]["errors"][0]
    assert first["field"] == field
    assert first["type"] == error_type


def test_password_minimum_follows_config(config_factory) -> None:
    app = create_app(config_factory(min_password_length=10))
    try:
        client = app.test_client()
        short = client.post("/api/auth/register", json={**ADA, "password": "ninechars"})
        long_enough = client.post("/api/auth/register", json={**ADA, "password": "tencharsok"})
    finally:
        get_container(app).dispose()

    assert short.status_code == 400
    error = short.get_json()["context"]["errors"][0]
    assert error["type"] == "password_too_short"
    assert error["ctx"] == {"min_length": 10}
    assert long_enough.status_code == 201


def test_register_without_json_body(client: FlaskClient) -> None:
    response = client.post("/api/auth/register", data="nope", content_type="text/plain")

    assert response.status_code == 400


def test_login_returns_verifiable_token(client: FlaskClient) -> None:
    client.post("/api/auth/register", json=ADA)

    response = client.post(
        "/api/auth/login", json={"email": "ada@example.com", "password": "secret1"}
    )

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["user"]["lastLoginAt"] is not None
    profile = client.get(
        "/api/auth/profile", headers={"Authorization": f"Bearer {data['token']}"}
    )
    assert profile.status_code == 200


def test_login_failures_are_indistinguishable(client: FlaskClient) -> None:
    client.post("/api/auth/register", json=ADA)

    unknown = client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": "secret1"}
    )
    wrong = client.post(
        "/api/auth/login", json={"email": "ada@example.com", "password": "wrong-password"}
    )

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.get_json() == wrong.get_json()
    assert unknown.get_json()["message"] == "Invalid credentials"


def test_login_requires_password(client: FlaskClient) -> None:
    response = client.post("/api/auth/login", json={"email": "ada@example.com"})

    assert response.status_code == 400


def test_profile_without_token(client: FlaskClient) -> None:
    response = client.get("/api/auth/profile")

    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_profile_with_garbage_token(client: FlaskClient) -> None:
    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"


def test_expired_token_is_unauthorized(app: Flask, client: FlaskClient) -> None:
    user_id = client.post("/api/auth/register", json=ADA).get_json()["data"]["user"]["id"]

    response = client.get(
        "/api/auth/profile",
        headers={"Authorization": f"Bearer {_expired_token(app, user_id)}"},
    )

    assert response.status_code == 401
    assert response.get_json()["error"] == "unauthorized"


def test_update_profile(client: FlaskClient, auth_headers: dict[str, str]) -> None:
    response = client.put(
        "/api/auth/profile",
        json={"name": "Ada Lovelace", "phone": "08012345678"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    user = response.get_json()["data"]["user"]
    assert user["name"] == "Ada Lovelace"
    assert user["phone"] == "08012345678"
    assert user["email"] == "ada@example.com"


def test_update_profile_to_taken_email(client: FlaskClient, auth_headers: dict[str, str]) -> None:
    client.post(
        "/api/auth/register",
        json={"name": "Grace", "email": "grace@example.com", "password": "secret1"},
    )

    response = client.put(
        "/api/auth/profile", json={"email": "grace@example.com"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "duplicate_identity"


def test_update_profile_empty_body(client: FlaskClient, auth_headers: dict[str, str]) -> None:
    response = client.put("/api/auth/profile", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json()["context"]["errors"][0]["type"] == "empty_update"


def test_delete_profile_revokes_access(client: FlaskClient, auth_headers: dict[str, str]) -> None:
    response = client.delete("/api/auth/profile", headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json() == {"ok": True}
    assert client.get("/api/auth/profile", headers=auth_headers).status_code == 401
    relogin = client.post(
        "/api/auth/login", json={"email": "ada@example.com", "password": "secret1"}
    )
    assert relogin.status_code == 401


def test_change_password(client: FlaskClient, auth_headers: dict[str, str]) -> None:
    response = client.put(
        "/api/auth/change-password",
        json={"currentPassword": "secret1", "newPassword": "newsecret"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    old = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "secret1"})
    new = client.post("/api/auth/login", json={"email": "ada@example.com", "password": "newsecret"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_change_password_wrong_current(client: FlaskClient, auth_headers: dict[str, str]) -> None:
    response = client.put(
        "/api/auth/change-password",
        json={"currentPassword": "wrong", "newPassword": "newsecret"},
        headers=auth_headers,
    )

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_credentials"


def test_health(client: FlaskClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in response.headers


def test_unknown_route_returns_json(client: FlaskClient) -> None:
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert response.get_json()["error"] == "not_found"
