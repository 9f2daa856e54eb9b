"""
Tests for the sign-in endpoints.

Tests cover:
- POST /login sets the session cookie and redirects on success
- rejected sign-ins return the action's message with 401
- unrecognized errors are not handled by the route
- POST /logout and GET /auth/me
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from dashboard.actions.outcomes import SignedIn
from dashboard.auth.credentials import AuthSession
from dashboard.auth.dependencies import AuthenticatedUser, get_authenticated_user
from dashboard.main import app

LOGIN_FORM = {"email": "user@nextmail.com", "password": "123456"}


@pytest.fixture
def client():
    """Fresh test client (and cookie jar) per test."""
    return TestClient(app)


@pytest.fixture
def mock_auth():
    async def mock_get_authenticated_user_dependency():
        return AuthenticatedUser(
            user_id="test-user-id",
            access_token="test-access-token",
            email="user@nextmail.com",
        )

    app.dependency_overrides[get_authenticated_user] = mock_get_authenticated_user_dependency
    yield
    app.dependency_overrides.clear()


class TestLogin:
    """Tests for POST /login"""

    @patch("dashboard.routes.auth.authenticate")
    def test_success_sets_cookie_and_redirects(self, mock_authenticate, client):
        mock_authenticate.return_value = SignedIn(
            url="/dashboard",
            session=AuthSession(
                user_id="user-1",
                access_token="access-token",
                refresh_token="refresh-token",
                expires_in=3600,
            ),
        )

        response = client.post("/login", data=LOGIN_FORM, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard"
        set_cookie = response.headers["set-cookie"]
        assert "dashboard_session=access-token" in set_cookie
        assert "HttpOnly" in set_cookie
        assert "Max-Age=3600" in set_cookie

        args = mock_authenticate.call_args[0]
        assert args[0] is None
        assert args[1]["email"] == "user@nextmail.com"

    @patch("dashboard.routes.auth.authenticate")
    def test_invalid_credentials_returns_401(self, mock_authenticate, client):
        mock_authenticate.return_value = "Invalid credentials."

        response = client.post("/login", data=LOGIN_FORM, follow_redirects=False)

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials."}
        assert "set-cookie" not in response.headers

    @patch("dashboard.routes.auth.authenticate")
    def test_generic_auth_failure_returns_401(self, mock_authenticate, client):
        mock_authenticate.return_value = "Something went wrong."

        response = client.post("/login", data=LOGIN_FORM)

        assert response.status_code == 401
        assert response.json() == {"message": "Something went wrong."}

    @patch("dashboard.routes.auth.authenticate")
    def test_unrecognized_errors_propagate(self, mock_authenticate, client):
        mock_authenticate.side_effect = ConnectionError("auth server unreachable")

        with pytest.raises(ConnectionError):
            client.post("/login", data=LOGIN_FORM)

    @patch("dashboard.auth.credentials.get_anon_client")
    def test_malformed_form_is_rejected_before_supabase(self, mock_get_anon_client, client):
        response = client.post("/login", data={"email": "nope", "password": "1"})

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials."}
        mock_get_anon_client.assert_not_called()


class TestLogout:

    def test_logout_clears_cookie(self, client):
        response = client.post("/logout", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        assert "dashboard_session=" in response.headers["set-cookie"]


class TestAuthMe:

    def test_returns_session_identity(self, client, mock_auth):
        response = client.get("/auth/me")

        assert response.status_code == 200
        assert response.json() == {"user_id": "test-user-id", "email": "user@nextmail.com"}

    def test_requires_authentication(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 401

