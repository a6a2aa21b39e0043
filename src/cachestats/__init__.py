"""Record, read and expire object-cache statistics snapshots."""

from cachestats.adapters.frameworks.asgi import CacheMetricsMiddleware
from cachestats.adapters.storage import (
    InMemorySortedSetStore,
    RedisSortedSetStore,
    SQLiteSortedSetStore,
    run_sync,
)
from cachestats.core.config import MetricsConfig
from cachestats.core.errors import (
    CacheStatsError,
    IncompatiblePayloadError,
    MalformedPayloadError,
    PayloadError,
    StoreError,
)
from cachestats.core.models import CacheStats, Snapshot
from cachestats.core.ports import (
    MeasuredCachePort,
    SortedSetStorePort,
    StoreBackedCachePort,
)
from cachestats.core.service import CacheMetrics
from cachestats.runtime.embedded import EmbeddedRuntime

__all__ = [
    "CacheMetrics",
    "CacheMetricsMiddleware",
    "CacheStats",
    "CacheStatsError",
    "EmbeddedRuntime",
    "InMemorySortedSetStore",
    "IncompatiblePayloadError",
    "MalformedPayloadError",
    "MeasuredCachePort",
    "MetricsConfig",
    "PayloadError",
    "RedisSortedSetStore",
    "SQLiteSortedSetStore",
    "Snapshot",
    "SortedSetStorePort",
    "StoreBackedCachePort",
    "StoreError",
    "run_sync",
]
