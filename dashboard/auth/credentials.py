"""
Credential sign-in against Supabase Auth.

sign_in() is the only entry point. Every expected failure is raised as
AuthError with a `type` discriminant:

- "CredentialsSignin": the email/password pair was rejected (or malformed)
- "CallbackRouteError": Supabase Auth answered with any other auth error
- "Configuration": an unsupported provider was requested

Transport errors (network, timeouts) are not translated and propagate as-is.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from supabase import AuthApiError, AuthInvalidCredentialsError, Client
from supabase import AuthError as SupabaseAuthError

from dashboard.db.client import get_anon_client
from dashboard.schemas.auth import LoginForm

logger = logging.getLogger(__name__)

CREDENTIALS_PROVIDER = "credentials"

CREDENTIALS_SIGNIN = "CredentialsSignin"
CALLBACK_ROUTE_ERROR = "CallbackRouteError"
CONFIGURATION = "Configuration"


class AuthError(Exception):
    """Recognized sign-in failure. `type` tells callers which kind."""

    def __init__(self, type: str, message: str = ""):
        super().__init__(message or type)
        self.type = type


@dataclass
class AuthSession:
    """
    A session issued by Supabase Auth.

    Attributes:
        user_id: The user's UUID
        access_token: JWT used for RLS-scoped clients and the session cookie
        refresh_token: Token used to renew the session
        expires_in: Lifetime of access_token in seconds
    """
    user_id: str
    access_token: str
    refresh_token: str
    expires_in: Optional[int] = None


def _is_invalid_credentials(error: SupabaseAuthError) -> bool:
    if isinstance(error, AuthInvalidCredentialsError):
        return True
    if getattr(error, "code", None) == "invalid_credentials":
        return True
    # Older GoTrue servers do not send an error code
    return (
        isinstance(error, AuthApiError)
        and getattr(error, "status", None) == 400
        and "invalid login credentials" in str(error).lower()
    )


async def sign_in(
    provider: str,
    form_data: Mapping[str, Any],
    client: Optional[Client] = None,
) -> AuthSession:
    """
    Exchange the email/password in form_data for a Supabase session.

    Args:
        provider: Provider name; only "credentials" is supported
        form_data: Mapping with "email" and "password"
        client: Supabase client to use (defaults to an anonymous client)

    Returns:
        AuthSession for the signed-in user

    Raises:
        AuthError: On any recognized authentication failure
    """
    if provider != CREDENTIALS_PROVIDER:
        raise AuthError(CONFIGURATION, f"Unsupported sign-in provider: {provider}")

    try:
        credentials = LoginForm.model_validate(
            {"email": form_data.get("email"), "password": form_data.get("password")}
        )
    except ValidationError:
        logger.info("Sign-in rejected: malformed credentials")
        raise AuthError(CREDENTIALS_SIGNIN, "Malformed credentials")

    if client is None:
        client = get_anon_client()

    try:
        # supabase-py auth is synchronous
        response = await run_in_threadpool(
            client.auth.sign_in_with_password,
            {"email": credentials.email, "password": credentials.password},
        )
    except SupabaseAuthError as e:
        if _is_invalid_credentials(e):
            logger.info("Sign-in rejected: invalid credentials")
            raise AuthError(CREDENTIALS_SIGNIN, "Invalid credentials") from e
        logger.warning(f"Supabase Auth error during sign-in: {type(e).__name__}")
        raise AuthError(CALLBACK_ROUTE_ERROR, "Supabase Auth error") from e

    session = response.session
    if session is None or response.user is None:
        logger.warning("Supabase Auth returned no session for a successful sign-in")
        raise AuthError(CALLBACK_ROUTE_ERROR, "No session returned")

    logger.info(f"User signed in: user_id={response.user.id}")

    return AuthSession(
        user_id=str(response.user.id),
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
    )
