"""
Supabase client factory.

Two kinds of client are handed out:

1. get_supabase_client(access_token): per-request client carrying the signed-in
   user's JWT, so every invoices query runs under Row Level Security.
2. get_anon_client(): publishable-key client with no session, used only to
   exchange credentials for a session on POST /login.
"""

import logging

from dashboard.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_supabase_client(access_token: str) -> Client:
    """
    Create an authenticated Supabase client for a specific user.

    Args:
        access_token: The user's JWT access token from Supabase Auth
                      (verified in dashboard/auth/dependencies.py).

    Returns:
        An authenticated Supabase client that enforces RLS.
    """
    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )

    # The token's 'sub' claim is what RLS resolves as auth.uid()
    client.auth.set_session(access_token, access_token)

    logger.debug("Created authenticated Supabase client with user token (RLS enforced)")

    return client


def get_anon_client() -> Client:
    """Create a Supabase client without a user session."""
    return create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )
