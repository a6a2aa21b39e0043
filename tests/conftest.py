"""Shared test fixtures for all test modules."""

import time
from pathlib import Path

import pytest
from tests.helpers import NOW, CountingStore, FakeCache

from cachestats.core.config import MetricsConfig
from cachestats.core.service import CacheMetrics


@pytest.fixture
def frozen_now(monkeypatch: pytest.MonkeyPatch) -> int:
    """Freeze time.time() at NOW and return NOW."""
    monkeypatch.setattr(time, "time", lambda: float(NOW))
    return NOW


@pytest.fixture
def store() -> CountingStore:
    """Fixture providing an empty counting in-memory store."""
    return CountingStore()


@pytest.fixture
def cache(store: CountingStore) -> FakeCache:
    """Fixture providing a ready measured cache backed by the store fixture."""
    return FakeCache(store)


@pytest.fixture
def metrics(cache: FakeCache) -> CacheMetrics:
    """Fixture providing an active CacheMetrics with default config."""
    return CacheMetrics(cache, MetricsConfig())


@pytest.fixture
def sorted_set_db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for SQLite store tests."""
    return str(tmp_path / "sorted_set.db")
