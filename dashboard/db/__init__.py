"""
Database access layer for the invoice dashboard.

All statements go through the Supabase query builder, so every value is sent
as a bound parameter and never concatenated into SQL text.
"""

from .client import get_anon_client, get_supabase_client

__all__ = ["get_supabase_client", "get_anon_client"]
