"""
Navigation outcomes returned by actions.

An action that succeeds returns one of these instead of raising. The route
turns it into an HTTP redirect once the action has fully returned.
"""

from dataclasses import dataclass
from typing import Optional

from dashboard.auth.credentials import AuthSession


@dataclass(frozen=True)
class Redirect:
    """Send the browser to `url` (303 See Other after a form POST)."""
    url: str
    status_code: int = 303


@dataclass(frozen=True)
class SignedIn(Redirect):
    """Redirect issued after a successful sign-in, carrying the new session."""
    session: Optional[AuthSession] = None
