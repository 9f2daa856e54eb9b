"""
FastAPI dependency functions for authentication.

Dashboard routes accept the Supabase access token from either:
- the Authorization: Bearer <token> header (API clients), or
- the session cookie written by POST /login (browser forms).

Tokens are verified against Supabase's JWT Signing Keys (ES256 via JWKS).
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Dict

from fastapi import Header, HTTPException, Request, status
from jwt import PyJWKClient, decode
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError, PyJWKClientError

from dashboard.config import settings

logger = logging.getLogger(__name__)

_jwks_client: PyJWKClient | None = None


@dataclass
class AuthenticatedUser:
    """
    Represents an authenticated user with their token.

    Attributes:
        user_id: The user's UUID from the JWT token's 'sub' claim
        access_token: The full JWT access token (for creating RLS-scoped clients)
        email: The 'email' claim, when present
    """
    user_id: str
    access_token: str
    email: str | None = None


def get_jwks_client() -> PyJWKClient:
    """
    Get or create the JWKS client instance.

    Raises:
        ValueError: If SUPABASE_URL is not configured
    """
    global _jwks_client

    if _jwks_client is None:
        jwks_url = settings.SUPABASE_JWKS_URL
        if not jwks_url:
            raise ValueError(
                "SUPABASE_URL is not configured. "
                "Cannot construct JWKS URL for JWT verification."
            )

        logger.info(f"Initializing JWKS client with URL: {jwks_url}")
        _jwks_client = PyJWKClient(
            jwks_url,
            cache_keys=True,
            max_cached_keys=16,
        )

    return _jwks_client


def _unauthorized(error: str, details: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "details": details}
    )


def _extract_token(request: Request, authorization: str | None) -> str:
    if authorization:
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            logger.warning("Invalid Authorization header format")
            raise _unauthorized("unauthorized", "Invalid Authorization header format")
        return parts[1]

    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        logger.warning("Missing Authorization header and session cookie")
        raise _unauthorized("unauthorized", "Missing Authorization header")
    return token


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Verify a Supabase access token and return its claims.

    Raises:
        HTTPException: 401 if the token is invalid, expired, or unverifiable
    """
    try:
        signing_key = get_jwks_client().get_signing_key_from_jwt(token)

        # Supabase issuer includes the /auth/v1 path
        issuer = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1"

        payload = decode(
            token,
            signing_key.key,
            algorithms=["ES256"],
            audience="authenticated",
            issuer=issuer,
            options={
                "verify_signature": True,
                "verify_exp": True,
                "verify_aud": True,
                "verify_iss": True,
            }
        )

    except ExpiredSignatureError:
        logger.warning("Token has expired")
        raise _unauthorized("token_expired", "Authentication token has expired")

    except PyJWKClientError as e:
        logger.error(f"JWKS client error: {str(e)}")
        raise _unauthorized("jwks_error", "Unable to verify token signature")

    except InvalidTokenError as e:
        logger.warning(f"Invalid token: {str(e)}")
        raise _unauthorized("invalid_token", "Invalid authentication token")

    except Exception as e:
        logger.error(f"Unexpected error during token verification: {str(e)}")
        raise _unauthorized("unauthorized", "Token verification failed")

    if not payload.get("sub"):
        logger.error("Token payload missing 'sub' claim")
        raise _unauthorized("unauthorized", "Invalid token: missing user ID")

    return payload


async def get_authenticated_user(
    request: Request,
    authorization: Annotated[str | None, Header()] = None
) -> AuthenticatedUser:
    """
    Verify the request's token and return the authenticated user.

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired

    Usage:
        @router.post("/dashboard/invoices/create")
        async def create(
            auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
        ):
            supabase_client = get_supabase_client(auth_user.access_token)
    """
    token = _extract_token(request, authorization)
    payload = verify_access_token(token)

    user_id = str(payload["sub"])
    email = payload.get("email")

    logger.info(f"Token verified successfully for user_id={user_id}")

    return AuthenticatedUser(
        user_id=user_id,
        access_token=token,
        email=str(email) if email is not None else None,
    )
