"""
Tests for the auth endpoints and the bearer gate on protected routes.
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from api.dependencies import get_user_service
from api.middleware.auth import CurrentUser
from modules.auth.tokens import TokenCodec
from modules.users.models import UserSummary
from shared.models import AuthenticatedUser

REGISTER = "/api/v1/auth/register"
LOGIN = "/api/v1/auth/login"
ME = "/api/v1/users/me"


def register(client, email="alice@example.com", password="secret1", name="Alice"):
    return client.post(REGISTER, json={"email": email, "password": password, "name": name})


class TestRegister:
    def test_register(self, client):
        response = register(client)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["data"]["user"]["email"] == "alice@example.com"
        assert body["data"]["token_type"] == "Bearer"
        assert body["data"]["expires_in"] == 3600
        assert "password_hash" not in body["data"]["user"]

    def test_register_duplicate(self, client):
        register(client)
        response = register(client, name="Someone Else")

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "message": "email already exists",
            "error": "EMAIL_ALREADY_EXISTS",
            "details": None,
        }

    def test_register_validation(self, client):
        response = client.post(REGISTER, json={"email": "nope", "password": "123", "name": ""})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "VALIDATION_FAILED"
        assert set(body["details"]) == {"email", "password", "name"}

    def test_register_then_duplicate(self, client):
        """Single-character names are accepted; the second registration conflicts."""
        first = register(client, email="a@x.com", password="secret1", name="A")

        assert first.status_code == 201
        user = first.json()["data"]["user"]
        assert user["email"] == "a@x.com"
        assert user["name"] == "A"

        second = register(client, email="a@x.com", password="other1", name="B")
        assert second.status_code == 409
        assert second.json()["error"] == "EMAIL_ALREADY_EXISTS"

    def test_register_password_over_72_bytes(self, client):
        response = register(client, password="p" * 72 + "-real")

        assert response.status_code == 400
        assert "password" in response.json()["details"]

    def test_register_missing_body(self, client):
        response = client.post(REGISTER)
        assert response.status_code == 400


class TestLogin:
    def test_login(self, client):
        registered = register(client).json()["data"]

        response = client.post(LOGIN, json={"email": "alice@example.com", "password": "secret1"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["user"]["id"] == registered["user"]["id"]

    @pytest.mark.parametrize("email,password", [
        ("alice@example.com", "wrong-password"),
        ("nobody@example.com", "secret1"),
    ])
    def test_login_failure_is_uniform(self, client, email, password):
        register(client)

        response = client.post(LOGIN, json={"email": email, "password": password})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json() == {
            "success": False,
            "message": "invalid credentials",
            "error": "INVALID_CREDENTIALS",
            "details": None,
        }

    def test_login_with_shared_72_byte_prefix_fails(self, client):
        register(client, password="p" * 72)

        response = client.post(
            LOGIN, json={"email": "alice@example.com", "password": "p" * 72 + "-WRONG"}
        )

        assert response.status_code == 401

    def test_token_from_login_opens_protected_routes(self, client):
        register(client)
        token = client.post(
            LOGIN, json={"email": "alice@example.com", "password": "secret1"}
        ).json()["data"]["token"]

        response = client.get(ME, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "alice@example.com"


class TestRequestGate:
    @pytest.fixture
    def users(self, app):
        """Replace the user service so handler invocations can be observed."""
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        service = MagicMock()
        service.get_user = AsyncMock(
            side_effect=lambda user_id: UserSummary(
                id=user_id, email="u42@example.com", name="User 42", created_at=now, updated_at=now
            )
        )
        app.dependency_overrides[get_user_service] = lambda: service
        return service

    def test_missing_header(self, client, users):
        response = client.get(ME)

        assert response.status_code == 401
        assert response.json()["message"] == "authorization required"
        users.get_user.assert_not_awaited()

    def test_wrong_scheme_never_reaches_handler(self, client, users):
        response = client.get(ME, headers={"Authorization": "Token abc"})

        assert response.status_code == 401
        assert response.json()["message"] == "malformed authorization header"
        assert response.headers["WWW-Authenticate"] == "Bearer"
        users.get_user.assert_not_awaited()

    def test_valid_token_resolves_identity(self, client, users, codec, secret):
        token = codec.issue("42", "u42@example.com", secret, timedelta(hours=1))

        response = client.get(ME, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["data"]["id"] == "42"
        users.get_user.assert_awaited_once_with("42")

    def test_expired_token(self, client, users, secret):
        issued = datetime.now(timezone.utc) - timedelta(seconds=2)
        token = TokenCodec(clock=lambda: issued).issue("42", "u42@example.com", secret, timedelta(seconds=1))

        response = client.get(ME, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "invalid or expired token"
        users.get_user.assert_not_awaited()

    def test_token_signed_with_other_secret(self, client, users, codec):
        token = codec.issue("42", "u42@example.com", "not-the-server-secret", timedelta(hours=1))

        response = client.get(ME, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "invalid or expired token"

    def test_every_users_route_is_guarded(self, client, users):
        for method, path in [
            ("GET", "/api/v1/users"),
            ("GET", "/api/v1/users/42"),
            ("POST", "/api/v1/users"),
            ("PUT", "/api/v1/users/42"),
            ("DELETE", "/api/v1/users/42"),
        ]:
            response = client.request(method, path, json={})
            assert response.status_code == 401, (method, path)


class TestCurrentUserWiring:
    def test_reading_identity_without_gate_is_server_error(self, app):
        @app.get("/unguarded")
        async def unguarded(user: AuthenticatedUser = CurrentUser):
            return {"id": user.id}

        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/unguarded")

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Internal server error"
        assert body["error"] == "INTERNAL_ERROR"
