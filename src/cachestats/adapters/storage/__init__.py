"""Sorted-set store adapters implementing SortedSetStorePort."""

from cachestats.adapters.storage.async_utils import _run_sync as run_sync
from cachestats.adapters.storage.in_memory import InMemorySortedSetStore
from cachestats.adapters.storage.redis_store import RedisSortedSetStore
from cachestats.adapters.storage.sqlite_sorted_set import SQLiteSortedSetStore

__all__ = [
    "InMemorySortedSetStore",
    "RedisSortedSetStore",
    "SQLiteSortedSetStore",
    "run_sync",
]
