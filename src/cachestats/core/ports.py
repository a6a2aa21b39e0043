"""Port interfaces for the sorted-set store and the measured cache.

These protocols define the contracts that adapters must implement.
The core domain depends only on these interfaces, not concrete implementations.
"""

from typing import Protocol, runtime_checkable

from cachestats.core.models import CacheStats


@runtime_checkable
class SortedSetStorePort(Protocol):
    """Port for score-ranked sorted-set storage.

    Adapters implementing this protocol keep payloads ordered by a numeric
    score and must tolerate duplicate scores without losing entries.
    Examples: InMemorySortedSetStore, SQLiteSortedSetStore, RedisSortedSetStore.

    Backend failures are raised as StoreError.
    """

    def build_key(self, name: str, group: str) -> str:
        """Return the namespaced key for a logical collection."""
        ...

    async def add_scored(self, key: str, score: float, payload: str) -> None:
        """Add a payload under key with the given score."""
        ...

    async def range_by_score(
        self, key: str, min_score: float, max_score: float
    ) -> list[tuple[str, float]]:
        """Return (payload, score) pairs with min_score <= score <= max_score.

        Returns:
            Pairs ordered by score ascending.
        """
        ...

    async def remove_range_by_score(
        self, key: str, min_score: float, max_score: float
    ) -> int:
        """Remove payloads with min_score <= score <= max_score.

        Returns:
            Number of removed payloads.
        """
        ...


@runtime_checkable
class MeasuredCachePort(Protocol):
    """Port for the object cache whose statistics are recorded."""

    def is_ready(self) -> bool:
        """Return True if the cache backend is reachable and healthy."""
        ...

    def info(self) -> CacheStats:
        """Return the current cache counters."""
        ...


@runtime_checkable
class StoreBackedCachePort(MeasuredCachePort, Protocol):
    """A measured cache that can hand out a low-level sorted-set store handle.

    An isinstance() check against this protocol is the capability probe
    used before any metrics are recorded or read.
    """

    def store_handle(self) -> SortedSetStorePort:
        """Return the sorted-set store backing the cache."""
        ...
