"""Fakes and constants shared by the test suite."""

import asyncio

from cachestats.adapters.storage.in_memory import InMemorySortedSetStore
from cachestats.core.errors import StoreError
from cachestats.core.models import CacheStats

# Fixed "now" used by tests that freeze the clock
NOW = 1_702_300_000

METRICS_KEY = "cachestats:metrics"


class FakeCache:
    """Measured cache exposing counters, readiness and a store handle."""

    def __init__(self, store, stats: CacheStats | None = None, ready: bool = True):
        self.store = store
        self.stats = stats or CacheStats(
            hits=90, misses=10, ratio=0.9, bytes=2048, time=0.0123456789, calls=100
        )
        self.ready = ready

    def is_ready(self) -> bool:
        return self.ready

    def info(self) -> CacheStats:
        return self.stats

    def store_handle(self):
        return self.store


class CacheWithoutStoreHandle:
    """Measured cache that cannot hand out a sorted-set store."""

    def is_ready(self) -> bool:
        return True

    def info(self) -> CacheStats:
        return CacheStats()


class CountingStore(InMemorySortedSetStore):
    """In-memory store that counts every store operation."""

    def __init__(self, prefix: str = "") -> None:
        super().__init__(prefix)
        self.calls: list[str] = []

    async def add_scored(self, key, score, payload):
        self.calls.append("add_scored")
        await super().add_scored(key, score, payload)

    async def range_by_score(self, key, min_score, max_score):
        self.calls.append("range_by_score")
        return await super().range_by_score(key, min_score, max_score)

    async def remove_range_by_score(self, key, min_score, max_score):
        self.calls.append("remove_range_by_score")
        return await super().remove_range_by_score(key, min_score, max_score)


class MemberSetStore(InMemorySortedSetStore):
    """Store with Redis ZADD semantics: an identical member is stored once."""

    def __init__(self, prefix: str = "") -> None:
        super().__init__(prefix)
        self.members: dict[str, dict[str, float]] = {}

    async def add_scored(self, key, score, payload):
        self.members.setdefault(key, {})[payload] = float(score)

    async def range_by_score(self, key, min_score, max_score):
        entries = self.members.get(key, {}).items()
        return sorted(
            ((m, s) for m, s in entries if min_score <= s <= max_score),
            key=lambda entry: (entry[1], entry[0]),
        )


class FailingStore(InMemorySortedSetStore):
    """Store whose every operation raises StoreError."""

    async def add_scored(self, key, score, payload):
        raise StoreError("connection refused")

    async def range_by_score(self, key, min_score, max_score):
        raise StoreError("connection refused")

    async def remove_range_by_score(self, key, min_score, max_score):
        raise StoreError("connection refused")


class HangingStore(InMemorySortedSetStore):
    """Store whose every operation hangs far beyond any test timeout."""

    async def add_scored(self, key, score, payload):
        await asyncio.sleep(60)

    async def range_by_score(self, key, min_score, max_score):
        await asyncio.sleep(60)
        return []

    async def remove_range_by_score(self, key, min_score, max_score):
        await asyncio.sleep(60)
        return 0
