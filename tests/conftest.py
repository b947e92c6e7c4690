"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import pytest

from memkv.cache.store import KVStore


class ManualClock:
    """
    Clock that only moves when a test advances it.

    Usage:
        clock = ManualClock()
        store = KVStore(clock=clock)
        store.set("key", "value", ttl=10)
        clock.advance(11)
    """

    def __init__(self, start: float = 1000.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


# ============================================================================
# Clock Fixtures
# ============================================================================

@pytest.fixture
def clock() -> ManualClock:
    """Create a manually advanced clock."""
    return ManualClock()


# ============================================================================
# KVStore Fixtures
# ============================================================================

@pytest.fixture
def store(clock: ManualClock) -> KVStore:
    """Create a fresh KVStore driven by the manual clock, no default TTL."""
    return KVStore(default_ttl=0, clock=clock)


@pytest.fixture
def default_ttl_store(clock: ManualClock) -> KVStore:
    """Create a KVStore whose default TTL is 30 seconds."""
    return KVStore(default_ttl=30, clock=clock)


@pytest.fixture
def real_store() -> KVStore:
    """Create a KVStore on the real monotonic clock."""
    return KVStore(default_ttl=0)


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
