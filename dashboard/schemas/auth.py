"""
Pydantic schemas for sign-in.

These models define the strict contract for credentials posted to /login.
"""

from typing import Optional
from pydantic import BaseModel, Field


class LoginForm(BaseModel):
    """
    Email/password pair read from the login form.

    Shape checks only. Whether the pair is valid is decided by Supabase Auth.
    """
    email: str = Field(
        ...,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
        description="Account email",
        examples=["user@nextmail.com"]
    )
    password: str = Field(..., min_length=6, description="Account password")

    model_config = {
        "str_strip_whitespace": True,
        "extra": "ignore"
    }


class LoginErrorResponse(BaseModel):
    """Response for a rejected POST /login."""
    message: str = Field(
        ...,
        examples=["Invalid credentials.", "Something went wrong."]
    )


class SessionResponse(BaseModel):
    """
    Response for GET /auth/me - identity behind the current session.
    """
    user_id: str = Field(..., description="User UUID (from JWT 'sub' claim)")
    email: Optional[str] = Field(
        None,
        description="User's email (from JWT 'email' claim, if present)"
    )
