"""
Tests for email/password sign-in against Supabase Auth.

The Supabase client is mocked; only the error translation and the session
mapping are exercised.
"""

import threading
from unittest.mock import MagicMock

import pytest
from supabase import AuthApiError, AuthInvalidCredentialsError

from dashboard.auth.credentials import (
    CALLBACK_ROUTE_ERROR,
    CONFIGURATION,
    CREDENTIALS_SIGNIN,
    AuthError,
    sign_in,
)

LOGIN_FORM = {"email": "user@nextmail.com", "password": "123456"}


@pytest.fixture
def auth_client():
    client = MagicMock()
    response = MagicMock()
    response.user.id = "user-uuid-1"
    response.session.access_token = "access-token"
    response.session.refresh_token = "refresh-token"
    response.session.expires_in = 3600
    client.auth.sign_in_with_password.return_value = response
    return client


class TestSignIn:

    @pytest.mark.asyncio
    async def test_success_returns_session(self, auth_client):
        session = await sign_in("credentials", LOGIN_FORM, client=auth_client)

        auth_client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "user@nextmail.com", "password": "123456"}
        )
        assert session.user_id == "user-uuid-1"
        assert session.access_token == "access-token"
        assert session.refresh_token == "refresh-token"
        assert session.expires_in == 3600

    @pytest.mark.asyncio
    async def test_supabase_call_runs_off_the_event_loop_thread(self, auth_client):
        response = auth_client.auth.sign_in_with_password.return_value
        calling_threads = []

        def record_thread(credentials):
            calling_threads.append(threading.current_thread())
            return response

        auth_client.auth.sign_in_with_password.side_effect = record_thread

        await sign_in("credentials", LOGIN_FORM, client=auth_client)

        assert calling_threads
        assert calling_threads[0] is not threading.current_thread()

    @pytest.mark.asyncio
    async def test_unsupported_provider_is_a_configuration_error(self, auth_client):
        with pytest.raises(AuthError) as exc_info:
            await sign_in("github", LOGIN_FORM, client=auth_client)

        assert exc_info.value.type == CONFIGURATION
        auth_client.auth.sign_in_with_password.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("form", [
        {"email": "not-an-email", "password": "123456"},
        {"email": "user@nextmail.com", "password": "123"},
        {"email": None, "password": None},
        {},
    ])
    async def test_malformed_credentials_never_reach_supabase(self, auth_client, form):
        with pytest.raises(AuthError) as exc_info:
            await sign_in("credentials", form, client=auth_client)

        assert exc_info.value.type == CREDENTIALS_SIGNIN
        auth_client.auth.sign_in_with_password.assert_not_called()

    @pytest.mark.asyncio
    async def test_rejected_password_is_credentials_signin(self, auth_client):
        auth_client.auth.sign_in_with_password.side_effect = AuthApiError(
            "Invalid login credentials", 400, "invalid_credentials"
        )

        with pytest.raises(AuthError) as exc_info:
            await sign_in("credentials", LOGIN_FORM, client=auth_client)

        assert exc_info.value.type == CREDENTIALS_SIGNIN

    @pytest.mark.asyncio
    async def test_client_side_invalid_credentials_is_credentials_signin(self, auth_client):
        auth_client.auth.sign_in_with_password.side_effect = AuthInvalidCredentialsError(
            "You must provide either an email or phone number and a password"
        )

        with pytest.raises(AuthError) as exc_info:
            await sign_in("credentials", LOGIN_FORM, client=auth_client)

        assert exc_info.value.type == CREDENTIALS_SIGNIN

    @pytest.mark.asyncio
    async def test_other_supabase_auth_errors_are_callback_errors(self, auth_client):
        auth_client.auth.sign_in_with_password.side_effect = AuthApiError(
            "Email not confirmed", 400, "email_not_confirmed"
        )

        with pytest.raises(AuthError) as exc_info:
            await sign_in("credentials", LOGIN_FORM, client=auth_client)

        assert exc_info.value.type == CALLBACK_ROUTE_ERROR

    @pytest.mark.asyncio
    async def test_missing_session_is_a_callback_error(self, auth_client):
        auth_client.auth.sign_in_with_password.return_value.session = None

        with pytest.raises(AuthError) as exc_info:
            await sign_in("credentials", LOGIN_FORM, client=auth_client)

        assert exc_info.value.type == CALLBACK_ROUTE_ERROR

    @pytest.mark.asyncio
    async def test_transport_errors_are_not_translated(self, auth_client):
        auth_client.auth.sign_in_with_password.side_effect = TimeoutError("read timeout")

        with pytest.raises(TimeoutError):
            await sign_in("credentials", LOGIN_FORM, client=auth_client)
