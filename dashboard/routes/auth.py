"""
Auth API endpoints.

- POST /login    - sign in with the login form; sets the session cookie
- POST /logout   - clear the session cookie
- GET  /auth/me  - identity behind the current session
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from dashboard.actions import authenticate
from dashboard.auth.dependencies import AuthenticatedUser, get_authenticated_user
from dashboard.config import settings
from dashboard.schemas.auth import LoginErrorResponse, SessionResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

LOGIN_PATH = "/login"


@router.post(
    LOGIN_PATH,
    summary="Sign in with email and password",
    responses={
        303: {"description": "Signed in; redirect to the dashboard"},
        401: {"model": LoginErrorResponse, "description": "Sign-in rejected"},
    },
)
async def login(request: Request) -> Response:
    """
    Run the authenticate action on the submitted login form.

    Unrecognized errors raised by the action are not handled here.
    """
    form_data = await request.form()
    outcome = await authenticate(None, form_data)

    if isinstance(outcome, str):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=LoginErrorResponse(message=outcome).model_dump(),
        )

    response = RedirectResponse(outcome.url, status_code=outcome.status_code)
    if outcome.session is not None:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=outcome.session.access_token,
            max_age=outcome.session.expires_in,
            httponly=True,
            secure=settings.is_production(),
            samesite="lax",
        )
    return response


@router.post(
    "/logout",
    summary="Sign out",
    responses={303: {"description": "Signed out; redirect to the login page"}},
)
async def logout() -> Response:
    response = RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get(
    "/auth/me",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Get authenticated user identity",
)
async def get_auth_me(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> SessionResponse:
    """Confirm the session is still valid and return who it belongs to."""
    return SessionResponse(user_id=auth_user.user_id, email=auth_user.email)
