"""Core domain models for cache statistics."""

import time
import uuid
from dataclasses import asdict, dataclass, field
from typing import Any

# Length of the informational snapshot id
ID_LENGTH = 7

# Decimal places kept for the cumulative cache time
TIME_PRECISION = 5


def new_snapshot_id() -> str:
    """Return a short, collision-tolerant identifier for a snapshot."""
    return uuid.uuid4().hex[:ID_LENGTH]


@dataclass(frozen=True)
class CacheStats:
    """Raw counters reported by the measured cache.

    Attributes:
        hits: Number of cache hits.
        misses: Number of cache misses.
        ratio: Hit ratio in [0, 1], or None when nothing was requested.
        bytes: Bytes retrieved from the cache.
        time: Cumulative seconds spent servicing cache operations.
        calls: Number of cache operations performed.
    """

    hits: int = 0
    misses: int = 0
    ratio: float | None = None
    bytes: int = 0
    time: float = 0.0
    calls: int = 0


@dataclass(frozen=True)
class Snapshot:
    """A single measurement of the cache statistics.

    Attributes:
        hits: Number of cache hits.
        misses: Number of cache misses.
        ratio: Hit ratio in [0, 1], or None when hits + misses == 0.
        bytes: Bytes retrieved from the cache.
        time: Cumulative seconds spent in cache operations (5 decimals).
        calls: Number of cache operations performed.
        timestamp: Unix timestamp in seconds; the sort score in the store.
        id: Informational identifier. Not a lookup key.
    """

    hits: int
    misses: int
    ratio: float | None
    bytes: int
    time: float
    calls: int
    timestamp: int
    id: str = field(default_factory=new_snapshot_id)

    @classmethod
    def from_stats(cls, stats: CacheStats, timestamp: int | None = None) -> "Snapshot":
        """Build a snapshot from raw cache counters.

        Args:
            stats: Counters reported by the measured cache.
            timestamp: Collection instant. Defaults to the current time.

        Returns:
            Snapshot stamped with the collection instant and a fresh id.
        """
        return cls(
            hits=stats.hits,
            misses=stats.misses,
            ratio=stats.ratio,
            bytes=stats.bytes,
            time=round(stats.time, TIME_PRECISION),
            calls=stats.calls,
            timestamp=int(time.time()) if timestamp is None else timestamp,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the snapshot fields as a plain dict."""
        return asdict(self)
