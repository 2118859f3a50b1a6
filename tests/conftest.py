"""
Shared fixtures for tokenseal tests.
"""

import pytest

from tokenseal import Signer, TimestampSigner

SECRET = b"secret-key"


@pytest.fixture
def signer():
    """Signer with every setting left at its default."""
    return Signer(SECRET)


@pytest.fixture
def timestamp_signer():
    """TimestampSigner with default settings."""
    return TimestampSigner(SECRET)


@pytest.fixture
def set_clock(monkeypatch):
    """Pin the clock of a TimestampSigner instance: set_clock(ts_signer, now)."""

    def _set(ts_signer, now):
        monkeypatch.setattr(ts_signer, "get_timestamp", lambda: now)

    return _set
