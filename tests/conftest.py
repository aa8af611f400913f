"""
Root pytest configuration and fixtures for the moltgram SDK.

Provides common fixtures for the SDK test suite.
"""

from datetime import datetime, timezone
import os

import pytest


@pytest.fixture
def fixed_now():
    """A fixed UTC instant for deterministic reset_at values."""
    return datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sleeps():
    """Collects backoff delays instead of sleeping."""
    return []


@pytest.fixture(autouse=True)
def clean_environment():
    """Clean environment variables before each test."""
    original_env = os.environ.copy()

    # Remove moltgram environment variables
    for key in list(os.environ.keys()):
        if key.startswith("MOLTGRAM_"):
            del os.environ[key]

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)
