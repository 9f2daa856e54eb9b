"""
Sign-in action for the login form.
"""

import logging
from typing import Any, Mapping, Optional

from dashboard.actions.outcomes import SignedIn
from dashboard.auth.credentials import (
    CREDENTIALS_PROVIDER,
    CREDENTIALS_SIGNIN,
    AuthError,
    sign_in,
)
from dashboard.config import settings

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."
GENERIC_AUTH_ERROR = "Something went wrong."


async def authenticate(
    prev_state: Optional[str],
    form_data: Mapping[str, Any],
) -> str | SignedIn:
    """
    Sign in with the email/password in form_data.

    Returns:
        SignedIn (redirect to the dashboard) on success, otherwise the
        message to show on the login form.

    Raises:
        Exception: Anything that is not an AuthError is re-raised untouched.
    """
    try:
        session = await sign_in(CREDENTIALS_PROVIDER, form_data)
    except AuthError as error:
        if error.type == CREDENTIALS_SIGNIN:
            return INVALID_CREDENTIALS
        logger.warning(f"Sign-in failed with auth error type={error.type}")
        return GENERIC_AUTH_ERROR

    return SignedIn(url=settings.DASHBOARD_PATH, session=session)
