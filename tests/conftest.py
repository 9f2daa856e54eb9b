"""
Pytest configuration for the invoice dashboard tests.

Sets up test environment and global fixtures.
"""
import os
import pytest
from unittest.mock import MagicMock

# Disable config validation during tests
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_PUBLISHABLE_KEY", "test-publishable-key")


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client for testing the persistence layer.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client


@pytest.fixture(autouse=True)
def clear_view_cache():
    """Start every test with an empty view cache."""
    from dashboard.services.cache import view_cache

    view_cache.clear()
    yield
    view_cache.clear()
